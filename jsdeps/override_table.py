"""Manual import-to-label mappings that bypass classification."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any

from jsdeps.import_spec import ImportSpec
from jsdeps.label import Label
from jsdeps.scope_config import ConfigError, normalize_package_path


@dataclass(frozen=True)
class Override:
    """Maps an import to a label for a scope and everything below it."""

    scope: str
    spec: ImportSpec
    label: Label


class OverrideTable:
    """Looks up manual overrides by (language, identifier) and scope."""

    def __init__(self, overrides: list[Override] | None = None) -> None:
        """Index overrides by spec."""
        self._by_spec: dict[ImportSpec, dict[str, Label]] = {}
        for override in overrides or []:
            self._by_spec.setdefault(override.spec, {})[override.scope] = override.label

    @classmethod
    def from_config(cls, raw: list[dict[str, Any]] | None, lang: str = "js") -> OverrideTable:
        """Build the table from ``overrides`` entries of the configuration."""
        overrides = []
        for entry in raw or []:
            imp = entry.get("imp")
            label = entry.get("label")
            if not imp or not label:
                msg = f"override needs 'imp' and 'label': {entry!r}"
                raise ConfigError(msg)
            scope = normalize_package_path(entry.get("scope"))
            try:
                parsed = Label.parse(str(label))
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
            spec = ImportSpec(str(entry.get("lang") or lang), str(imp))
            # Relative labels point into the directory that declared them.
            overrides.append(Override(scope, spec, parsed.abs("", scope)))
        return cls(overrides)

    def find(self, spec: ImportSpec, pkg: str) -> Label | None:
        """Return the override label for ``spec`` as seen from ``pkg``."""
        scoped = self._by_spec.get(spec)
        if not scoped:
            return None
        current = pkg
        while True:
            if current in scoped:
                return scoped[current]
            if not current:
                return None
            current = posixpath.dirname(current)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_spec.values())
