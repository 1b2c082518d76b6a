"""Logic for resolving one concrete repo-relative path."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path

from jsdeps.build_index import BuildIndex
from jsdeps.build_unit import BuildUnit
from jsdeps.import_spec import ImportSpec
from jsdeps.label import Label
from jsdeps.override_table import OverrideTable
from jsdeps.resolution_outcome import (
    Ambiguous,
    FileOnDisk,
    Resolved,
    ResolutionOutcome,
    SelfReferential,
    Unresolved,
)
from jsdeps.scope_config import ScopeConfig


@dataclass(frozen=True, eq=False)
class ResolveContext:
    """Everything needed to resolve imports of a single unit."""

    unit: BuildUnit
    config: ScopeConfig
    index: BuildIndex
    overrides: OverrideTable
    repo_root: Path

    def spec(self, imp: str) -> ImportSpec:
        """Build an index key in this unit's language."""
        return ImportSpec(self.config.lang, imp)

    def is_self(self, label: Label) -> bool:
        """Return True if ``label`` names the importing unit."""
        own = self.unit.label
        other = label.abs(own.repo, own.pkg)
        return (other.repo or own.repo, other.pkg, other.name) == (
            own.repo,
            own.pkg,
            own.name,
        )


def find_override(target: str, ctx: ResolveContext) -> ResolutionOutcome | None:
    """Return the outcome of a manual override for ``target``, if any."""
    label = ctx.overrides.find(ctx.spec(target), ctx.unit.pkg)
    if label is None:
        return None
    if ctx.is_self(label):
        return SelfReferential()
    return Resolved(label)


def try_resolve(target: str, ctx: ResolveContext) -> ResolutionOutcome:
    """Find the unit providing ``target``, or a plain file at that path.

    Returns Resolved, SelfReferential, FileOnDisk, Ambiguous, or Unresolved
    when nothing exists at ``target``.
    """
    override = find_override(target, ctx)
    if override is not None:
        return override

    owners = ctx.index.find(ctx.spec(target))

    if len(owners) > 1:
        return Ambiguous(target, tuple(owners))

    if not owners:
        # No rule is found for this path, it could be a regular file
        file_path = ctx.repo_root / target
        if target and not _outside_repo(target) and file_path.is_file():
            return FileOnDisk(posixpath.dirname(target), file_path.name)
        return Unresolved(target, (target,))

    if ctx.is_self(owners[0]):
        return SelfReferential()

    return Resolved(owners[0])


def _outside_repo(target: str) -> bool:
    return target == ".." or target.startswith("../")
