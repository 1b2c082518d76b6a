"""Logic for matching identifiers against declared npm dependency tables."""

from dataclasses import dataclass

from jsdeps.scope_config import ScopeConfig

# These prefixes cannot be npm dependencies
NON_PACKAGE_PREFIXES = (".", "/", "../", "~/", "@/", "~~/")
TYPES_SCOPE = "@types"


@dataclass(frozen=True)
class NpmMatch:
    """A dependency table hit for a package root."""

    package: str
    npm_label: str
    dev: bool = False

    @property
    def label(self) -> str:
        """Rendered build label of the package."""
        return f"{self.npm_label}{self.package}"


def package_root(identifier: str) -> str:
    """Return the package an identifier belongs to.

    ``lodash/fp`` -> ``lodash``; ``@foo/bar/x`` -> ``@foo/bar``;
    ``@types/node/fs`` -> ``@types/node``.
    """
    parts = identifier.split("/")
    if identifier.startswith("@") and len(parts) >= 2:  # noqa: PLR2004
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def find_npm_dependency(identifier: str, config: ScopeConfig) -> NpmMatch | None:
    """Look an identifier up in the dependency tables.

    Unknown scoped packages are assumed to come from npm under the default
    label, except for ``@types`` which is only ever matched explicitly.
    """
    if identifier.startswith(NON_PACKAGE_PREFIXES):
        return None

    root = package_root(identifier)

    npm_label = config.dependencies.get(root)
    if npm_label is not None:
        return NpmMatch(root, npm_label)

    npm_label = config.dev_dependencies.get(root)
    if npm_label is not None:
        return NpmMatch(root, npm_label, dev=True)

    if root.startswith(TYPES_SCOPE):
        return None
    if root.startswith("@"):
        return NpmMatch(root, config.default_npm_label)
    return None
