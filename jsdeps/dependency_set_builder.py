"""Logic for accumulating and rendering a unit's dependency attributes."""

from __future__ import annotations

from dataclasses import dataclass

from jsdeps.build_unit import JEST_TEST, BuildUnit
from jsdeps.resolution_outcome import (
    External,
    FileOnDisk,
    Resolved,
    ResolutionOutcome,
)
from jsdeps.scope_config import ScopeConfig

TEST_FRAMEWORK_PREFIX = "jest"
TEST_FRAMEWORK_TYPES_PREFIX = "@types/jest"
# Tooling packages that must never be attached to test targets.
TEST_FRAMEWORK_EXCLUDED = frozenset({"jest-cli", "jest-junit"})


@dataclass(frozen=True)
class RenderedDependencies:
    """Sorted, deduplicated attribute values ready to be written."""

    deps: tuple[str, ...] = ()
    data: tuple[str, ...] = ()


class DependencySetBuilder:
    """Collects compile-time (deps) and runtime (data) labels for one unit."""

    def __init__(self, unit: BuildUnit) -> None:
        """Start with empty sets for ``unit``."""
        self.unit = unit
        self.deps: set[str] = set()
        self.data: set[str] = set()

    def add_dep(self, label: str) -> None:
        """Record a compile-time dependency."""
        self.deps.add(label)

    def add_data(self, label: str) -> None:
        """Record a runtime/data dependency."""
        self.data.add(label)

    def add_outcome(self, outcome: ResolutionOutcome) -> None:
        """Record the edge implied by a resolution outcome, if any."""
        own = self.unit.label
        if isinstance(outcome, Resolved):
            label = outcome.label if outcome.absolute else outcome.label.rel(own.repo, own.pkg)
            rendered = str(label)
            if outcome.data:
                self.add_data(rendered)
            else:
                self.add_dep(rendered)
        elif isinstance(outcome, External):
            self.add_dep(outcome.label)
            if not outcome.dev:
                self.add_data(outcome.label)
        elif isinstance(outcome, FileOnDisk):
            self.add_data(outcome.label)

    def add_kind_extras(self, config: ScopeConfig) -> None:
        """Attach fixed extras for test units: framework packages and package.json."""
        if self.unit.kind != config.kind(JEST_TEST):
            return

        for name, npm_label in sorted(config.dev_dependencies.items()):
            if name in TEST_FRAMEWORK_EXCLUDED:
                continue
            label = f"{npm_label}{name}"
            if name.startswith(TEST_FRAMEWORK_TYPES_PREFIX):
                self.add_dep(label)
            if name.startswith(TEST_FRAMEWORK_PREFIX):
                self.add_dep(label)
                self.add_data(label)

        package_location = "" if config.js_root == "." else config.js_root
        self.add_data(f"//{package_location}:package_json")

    def render(self) -> RenderedDependencies:
        """Return both sets sorted, never containing the unit itself."""
        own = self.unit.label.renderings()
        return RenderedDependencies(
            deps=tuple(sorted(d for d in self.deps if d not in own)),
            data=tuple(sorted(d for d in self.data if d not in own)),
        )
