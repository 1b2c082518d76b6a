"""Scope-keyed, read-only table of resolver settings."""

from __future__ import annotations

import hashlib
import json
import posixpath
from pathlib import Path
from typing import Any

from jsdeps.deep_merge import deep_merge
from jsdeps.load_npm_dependencies import load_npm_dependencies
from jsdeps.scope_config import (
    ConfigError,
    ScopeConfig,
    normalize_package_path,
    scope_config_from_dict,
)

ROOT_SCOPE = ""


class ConfigTable:
    """Maps package directories to the ScopeConfig that governs them.

    A package uses the settings of its nearest configured ancestor scope.
    The table is built once before resolution and never changes afterwards.
    """

    def __init__(
        self,
        scopes: dict[str, ScopeConfig],
        raw_layers: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """Initialize with already-built scope settings."""
        self.scopes = dict(scopes)
        self.scopes.setdefault(ROOT_SCOPE, ScopeConfig())
        self.raw_layers = raw_layers or {}

    @classmethod
    def from_config(cls, config: dict[str, Any], repo_root: Path) -> ConfigTable:
        """Build the table from a loaded configuration document."""
        defaults = config.get("defaults") or {}
        raw_scopes = config.get("scopes") or {}
        if not isinstance(raw_scopes, dict):
            msg = "'scopes' must be a mapping of package path to settings"
            raise ConfigError(msg)

        layers: dict[str, dict[str, Any]] = {ROOT_SCOPE: dict(defaults)}
        # Parents are always merged before their children.
        normalized = {normalize_package_path(k): v or {} for k, v in raw_scopes.items()}
        for scope in sorted(normalized, key=_depth):
            overrides = normalized[scope]
            if scope == ROOT_SCOPE:
                layers[ROOT_SCOPE] = deep_merge(layers[ROOT_SCOPE], overrides)
                continue
            parent = _nearest(scope, layers)
            layers[scope] = deep_merge(layers[parent], overrides)

        scopes = {
            scope: _build_scope(layer, repo_root) for scope, layer in layers.items()
        }
        return cls(scopes, layers)

    def for_scope(self, pkg: str) -> ScopeConfig:
        """Return the settings for a package directory."""
        return self.scopes[_nearest(normalize_package_path(pkg), self.scopes)]

    def fingerprint(self) -> str:
        """Compute a stable hash of the configured layers.

        Uses canonical JSON serialization (sorted keys).
        """
        payload = json.dumps(self.raw_layers, sort_keys=True, ensure_ascii=True, default=str)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _build_scope(layer: dict[str, Any], repo_root: Path) -> ScopeConfig:
    manifest = layer.get("npm_package_json")
    if manifest:
        deps, dev_deps = load_npm_dependencies(
            repo_root / str(manifest), str(layer.get("npm_label") or "@npm//")
        )
        # Explicit tables win over what package.json declares.
        layer = {
            **layer,
            "dependencies": {**deps, **(layer.get("dependencies") or {})},
            "dev_dependencies": {**dev_deps, **(layer.get("dev_dependencies") or {})},
        }
    return scope_config_from_dict(layer)


def _nearest(pkg: str, scopes: dict[str, Any]) -> str:
    current = pkg
    while current:
        if current in scopes:
            return current
        current = posixpath.dirname(current)
    return ROOT_SCOPE


def _depth(scope: str) -> int:
    return 0 if not scope else scope.count("/") + 1
