"""Data models for the result of resolving all imports of one unit."""

from __future__ import annotations

from dataclasses import dataclass, field

from jsdeps.build_unit import DATA_ATTR, DEPS_ATTR, BuildUnit
from jsdeps.label import Label
from jsdeps.resolution_outcome import FatalOutcome, Severity


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem met while resolving an identifier."""

    severity: Severity
    identifier: str
    message: str
    tried: tuple[str, ...] = ()


@dataclass
class UnitResolution:
    """Rendered attributes of a unit, or the fatal outcome that aborted it."""

    label: Label
    deps: tuple[str, ...] = ()
    data: tuple[str, ...] = ()
    diagnostics: list[Diagnostic] = field(default_factory=list)
    fatal: FatalOutcome | None = None

    @property
    def ok(self) -> bool:
        """True if the unit was resolved without a fatal outcome."""
        return self.fatal is None

    @property
    def unresolved(self) -> list[str]:
        """Identifiers that could not be resolved."""
        return [d.identifier for d in self.diagnostics if d.severity is Severity.RECORDED]


def apply_resolution(unit: BuildUnit, resolution: UnitResolution) -> bool:
    """Write rendered attributes onto the unit, replacing old values.

    Empty sets delete the attribute. Units whose resolution failed are left
    untouched. Returns True if the unit was updated.
    """
    if not resolution.ok:
        return False
    for key, values in ((DEPS_ATTR, resolution.deps), (DATA_ATTR, resolution.data)):
        if values:
            unit.set_attr(key, list(values))
        else:
            unit.del_attr(key)
    return True
