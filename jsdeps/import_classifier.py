"""Logic for categorizing import identifiers."""

from dataclasses import dataclass
from enum import Enum

from jsdeps.builtin_modules import is_builtin_module
from jsdeps.npm_dependency import NpmMatch, find_npm_dependency
from jsdeps.scope_config import ScopeConfig

MANIFEST_IDENTIFIERS = frozenset({"package", "package.json"})
MANIFEST_SENTINEL = "package.json"


class ImportKind(Enum):
    """Category of an import identifier."""

    MANIFEST = "manifest"
    BUILTIN = "builtin"
    EXTERNAL = "external"
    LOCAL = "local"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one (already aliased) identifier."""

    kind: ImportKind
    identifier: str
    npm: NpmMatch | None = None


def classify_import(identifier: str, config: ScopeConfig) -> Classification:
    """Classify an identifier; the first matching category wins."""
    if identifier in MANIFEST_IDENTIFIERS:
        return Classification(ImportKind.MANIFEST, identifier)

    if is_builtin_module(identifier):
        return Classification(ImportKind.BUILTIN, identifier)

    match = find_npm_dependency(identifier, config)
    if match is not None:
        return Classification(ImportKind.EXTERNAL, identifier, match)

    return Classification(ImportKind.LOCAL, identifier)
