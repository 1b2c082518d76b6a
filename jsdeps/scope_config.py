"""Data model for the resolver settings of one directory scope."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from jsdeps.alias_translator import AliasRule, AliasTranslator


class ConfigError(ValueError):
    """Raised when configuration cannot be turned into resolver settings."""


@dataclass(frozen=True)
class ScopeConfig:
    """Read-only resolver settings that apply to a package and its children."""

    lang: str = "js"
    import_aliases: tuple[AliasRule, ...] = ()
    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)
    js_root: str = "."
    lookup_types: bool = True
    collect_all: bool = False
    verbose: bool = False
    quiet: bool = False
    default_npm_label: str = "@npm//"
    ts_extensions: tuple[str, ...] = (".ts", ".tsx")
    js_extensions: tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs")
    web_asset_suffixes: tuple[str, ...] = ()
    kind_map: Mapping[str, str] = field(default_factory=dict)
    translator: AliasTranslator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("dependencies", "dev_dependencies", "kind_map"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(self, "translator", AliasTranslator(self.import_aliases))

    def __hash__(self) -> int:
        return hash(
            (
                self.lang,
                self.import_aliases,
                frozenset(self.dependencies.items()),
                frozenset(self.dev_dependencies.items()),
                self.js_root,
                self.ts_extensions,
                self.js_extensions,
                self.web_asset_suffixes,
                frozenset(self.kind_map.items()),
            )
        )

    @property
    def source_extensions(self) -> tuple[str, ...]:
        """Typed extensions first, then untyped ones."""
        return self.ts_extensions + self.js_extensions

    def is_web_asset(self, path: str) -> bool:
        """Return True if ``path`` names a stylesheet, image or font."""
        return any(path.endswith(suffix) for suffix in self.web_asset_suffixes)

    def kind(self, name: str) -> str:
        """Return the configured kind for a builtin kind name."""
        return self.kind_map.get(name, name)


def parse_aliases(raw: Any) -> tuple[AliasRule, ...]:
    """Parse alias rules from a list of ``{from, to}`` mappings or a mapping."""
    if not raw:
        return ()
    items: list[tuple[Any, Any]]
    if isinstance(raw, dict):
        items = list(raw.items())
    elif isinstance(raw, list):
        items = []
        for entry in raw:
            if not isinstance(entry, dict):
                msg = f"alias rule must be a mapping, got {entry!r}"
                raise ConfigError(msg)
            items.append((entry.get("from"), entry.get("to", "")))
    else:
        msg = f"import_aliases must be a list or mapping, got {type(raw).__name__}"
        raise ConfigError(msg)

    rules = []
    for from_prefix, to_prefix in items:
        if not from_prefix:
            msg = "alias rule is missing 'from'"
            raise ConfigError(msg)
        rule = AliasRule.from_pair(str(from_prefix), str(to_prefix or ""))
        if not rule.from_prefix:
            # A bare "*" would rewrite every identifier, npm packages included.
            msg = f"alias rule {from_prefix!r} matches every import"
            raise ConfigError(msg)
        rules.append(rule)
    return tuple(rules)


def scope_config_from_dict(raw: dict[str, Any]) -> ScopeConfig:
    """Build a ScopeConfig from a merged configuration layer."""
    return ScopeConfig(
        lang=str(raw.get("lang") or "js"),
        import_aliases=parse_aliases(raw.get("import_aliases")),
        dependencies={str(k): str(v) for k, v in (raw.get("dependencies") or {}).items()},
        dev_dependencies={
            str(k): str(v) for k, v in (raw.get("dev_dependencies") or {}).items()
        },
        js_root=_normalize_root(raw.get("js_root")),
        lookup_types=bool(raw.get("lookup_types", True)),
        collect_all=bool(raw.get("collect_all", False)),
        verbose=bool(raw.get("verbose", False)),
        quiet=bool(raw.get("quiet", False)),
        default_npm_label=str(raw.get("default_npm_label") or "@npm//"),
        ts_extensions=tuple(raw.get("ts_extensions", ScopeConfig.ts_extensions)),
        js_extensions=tuple(raw.get("js_extensions", ScopeConfig.js_extensions)),
        web_asset_suffixes=tuple(raw.get("web_asset_suffixes") or ()),
        kind_map={str(k): str(v) for k, v in (raw.get("kind_map") or {}).items()},
    )


def normalize_package_path(value: Any) -> str:
    """Normalize a configured directory to index form; the repository root is ``""``.

    ``./web/``, ``/web`` and ``web/app/..`` all become ``web``.
    """
    path = posixpath.normpath(str(value or ".").strip("/") or ".")
    if path == ".." or path.startswith("../"):
        msg = f"directory {value!r} is outside the repository"
        raise ConfigError(msg)
    return "" if path == "." else path


def _normalize_root(value: Any) -> str:
    return normalize_package_path(value) or "."
