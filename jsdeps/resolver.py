"""Turns the raw import identifiers of build units into dependency labels."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from jsdeps.build_index import imports_for_unit
from jsdeps.dependency_set_builder import DependencySetBuilder
from jsdeps.import_classifier import MANIFEST_SENTINEL, ImportKind, classify_import
from jsdeps.label import Label
from jsdeps.local_path_resolver import resolve_local_path
from jsdeps.override_table import OverrideTable
from jsdeps.resolution_outcome import (
    Ambiguous,
    Builtin,
    Error,
    External,
    Resolved,
    ResolutionOutcome,
    SelfReferential,
    Severity,
    Unresolved,
    is_fatal,
)
from jsdeps.try_resolve import ResolveContext, find_override, try_resolve
from jsdeps.type_declarations import type_declaration_label, wants_type_declarations
from jsdeps.unit_resolution import Diagnostic, UnitResolution

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from jsdeps.build_index import BuildIndex
    from jsdeps.build_unit import BuildUnit
    from jsdeps.config_table import ConfigTable
    from jsdeps.import_spec import ImportSpec

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_LABEL = Label(pkg="", name="package")


class Resolver(ABC):
    """Extension point invoked once per build unit by an orchestrator."""

    @abstractmethod
    def imports(self, unit: BuildUnit) -> list[ImportSpec]:
        """Return the specs under which ``unit`` should be indexed."""

    @abstractmethod
    def resolve(self, unit: BuildUnit, identifiers: Iterable[str]) -> UnitResolution:
        """Compute the dependency attributes of ``unit`` from scratch."""


class ImportResolver(Resolver):
    """Resolves JavaScript/TypeScript imports against a Build Index.

    The resolver keeps no state between units: configuration, index and
    overrides are only read, so units may be resolved in any order or in
    parallel.
    """

    def __init__(
        self,
        configs: ConfigTable,
        index: BuildIndex,
        overrides: OverrideTable | None = None,
        repo_root: Path | str = ".",
    ) -> None:
        """Initialize with the read-only collaborators."""
        self.configs = configs
        self.index = index
        self.overrides = overrides or OverrideTable()
        self.repo_root = Path(repo_root)

    def imports(self, unit: BuildUnit) -> list[ImportSpec]:
        """Return the specs under which ``unit`` should be indexed."""
        return imports_for_unit(unit, self.configs.for_scope(unit.pkg))

    def context(self, unit: BuildUnit) -> ResolveContext:
        """Bundle the collaborators for resolving ``unit``."""
        return ResolveContext(
            unit=unit,
            config=self.configs.for_scope(unit.pkg),
            index=self.index,
            overrides=self.overrides,
            repo_root=self.repo_root,
        )

    def resolve(self, unit: BuildUnit, identifiers: Iterable[str]) -> UnitResolution:
        """Resolve every distinct identifier and render the unit's attributes.

        A fatal outcome stops the unit immediately and is returned in
        ``UnitResolution.fatal``; nothing else is rendered for it.
        """
        ctx = self.context(unit)
        builder = DependencySetBuilder(unit)
        result = UnitResolution(unit.label)
        memo: dict[str, ResolutionOutcome] = {}

        for name in sorted(set(identifiers)):
            outcome = self.resolve_identifier(name, ctx, memo)

            if isinstance(outcome, (Ambiguous, Error)):
                logger.error("[%s] %s", unit.label, outcome.reason)
                result.fatal = outcome
                return result

            if isinstance(outcome, Unresolved):
                result.diagnostics.append(self._report_unresolved(name, outcome, ctx))
                continue

            builder.add_outcome(outcome)
            companion = self._type_declaration(outcome, ctx)
            if companion:
                builder.add_dep(companion)

        builder.add_kind_extras(ctx.config)
        rendered = builder.render()
        result.deps = rendered.deps
        result.data = rendered.data
        return result

    def resolve_identifier(
        self,
        name: str,
        ctx: ResolveContext,
        memo: dict[str, ResolutionOutcome] | None = None,
    ) -> ResolutionOutcome:
        """Resolve one raw identifier as written in source."""
        override = find_override(name, ctx)
        if override is not None:
            return override

        identifier = ctx.config.translator.translate(name)
        classification = classify_import(identifier, ctx.config)

        if classification.kind is ImportKind.MANIFEST:
            if memo is None:
                return self._resolve_manifest(ctx)
            if MANIFEST_SENTINEL not in memo:
                memo[MANIFEST_SENTINEL] = self._resolve_manifest(ctx)
            return memo[MANIFEST_SENTINEL]

        if classification.kind is ImportKind.BUILTIN:
            return Builtin(identifier)

        if classification.kind is ImportKind.EXTERNAL and classification.npm:
            npm = classification.npm
            return External(npm.label, npm.package, dev=npm.dev)

        return resolve_local_path(identifier, ctx)

    def _resolve_manifest(self, ctx: ResolveContext) -> ResolutionOutcome:
        outcome = try_resolve(MANIFEST_SENTINEL, ctx)
        if is_fatal(outcome):
            reason = getattr(outcome, "reason", "")
            return Error(f"cannot resolve {MANIFEST_SENTINEL}: {reason}")
        if isinstance(outcome, Resolved):
            return Resolved(outcome.label.abs(ctx.unit.label.repo, ""), absolute=True)
        if isinstance(outcome, SelfReferential):
            return outcome
        return Resolved(DEFAULT_MANIFEST_LABEL, absolute=True)

    def _type_declaration(self, outcome: ResolutionOutcome, ctx: ResolveContext) -> str | None:
        if not wants_type_declarations(ctx.unit, ctx.config):
            return None
        if isinstance(outcome, Builtin):
            return type_declaration_label(None, ctx.config, builtin=True)
        if isinstance(outcome, External):
            return type_declaration_label(outcome.package, ctx.config)
        return None

    def _report_unresolved(
        self, name: str, outcome: Unresolved, ctx: ResolveContext
    ) -> Diagnostic:
        config = ctx.config
        if not config.quiet:
            logger.warning("[%s] import %s not found", ctx.unit.label, outcome.identifier)
        if config.verbose:
            logger.warning("tried node_modules/%s", outcome.identifier)
            for path in outcome.tried:
                logger.warning("tried %s", path)
        return Diagnostic(
            severity=Severity.RECORDED,
            identifier=name,
            message=f"import {outcome.identifier} not found",
            tried=outcome.tried,
        )


def resolve_all(
    resolver: Resolver,
    units: Iterable[BuildUnit],
    identifiers: Mapping[Label, Iterable[str]],
) -> list[UnitResolution]:
    """Resolve each unit independently; one unit's failure never stops the rest."""
    return [resolver.resolve(unit, identifiers.get(unit.label, ())) for unit in units]
