"""Data models for the outcome of resolving a single import identifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from jsdeps.label import Label


class Severity(Enum):
    """How the caller should treat an outcome."""

    OK = "ok"
    RECORDED = "recorded"  # non-fatal, reported and skipped
    FATAL = "fatal"  # aborts the unit


@dataclass(frozen=True)
class Resolved:
    """A unique build unit provides the identifier."""

    label: Label
    data: bool = False  # web assets are runtime data, not compile deps
    absolute: bool = False  # rendered without shortening to the importing package

    severity = Severity.OK


@dataclass(frozen=True)
class External:
    """The identifier names a package from a dependency table."""

    label: str
    package: str
    dev: bool = False

    severity = Severity.OK


@dataclass(frozen=True)
class Builtin:
    """The identifier names a runtime-provided module."""

    module: str

    severity = Severity.OK


@dataclass(frozen=True)
class SelfReferential:
    """The identifier is provided by the importing unit itself."""

    severity = Severity.OK


@dataclass(frozen=True)
class FileOnDisk:
    """No unit owns the path but a plain file exists there."""

    package: str
    name: str

    severity = Severity.OK

    @property
    def label(self) -> str:
        """Data reference to the file from its directory's package."""
        return f"//{self.package}:{self.name}"


@dataclass(frozen=True)
class Unresolved:
    """Nothing provides the identifier."""

    identifier: str
    tried: tuple[str, ...] = ()

    severity = Severity.RECORDED


@dataclass(frozen=True)
class Ambiguous:
    """More than one unit provides the same probed path."""

    target: str
    owners: tuple[Label, ...]

    severity = Severity.FATAL

    @property
    def reason(self) -> str:
        """Human readable message naming every conflicting owner."""
        names = " and ".join(str(o) for o in self.owners)
        return f"multiple rules ({names}) provide {self.target}"


@dataclass(frozen=True)
class Error:
    """Resolution failed for a reason other than ambiguity."""

    reason: str

    severity = Severity.FATAL


ResolutionOutcome = Union[
    Resolved,
    External,
    Builtin,
    SelfReferential,
    FileOnDisk,
    Unresolved,
    Ambiguous,
    Error,
]
FatalOutcome = Union[Ambiguous, Error]


def is_fatal(outcome: ResolutionOutcome) -> bool:
    """Return True if the outcome must abort the unit's resolution."""
    return outcome.severity is Severity.FATAL
