"""Logic for finding companion ``@types`` packages."""

from jsdeps.build_unit import TS_PROJECT, BuildUnit
from jsdeps.builtin_modules import BUILTIN_TYPES_PACKAGE
from jsdeps.npm_dependency import TYPES_SCOPE, find_npm_dependency
from jsdeps.scope_config import ScopeConfig


def types_package_name(package: str) -> str | None:
    """Return the DefinitelyTyped package name for ``package``.

    ``react`` -> ``@types/react``; ``@babel/core`` -> ``@types/babel__core``.
    """
    if package.startswith(f"{TYPES_SCOPE}/"):
        return None
    if package.startswith("@"):
        scope, _, name = package[1:].partition("/")
        return f"{TYPES_SCOPE}/{scope}__{name}"
    return f"{TYPES_SCOPE}/{package}"


def wants_type_declarations(unit: BuildUnit, config: ScopeConfig) -> bool:
    """Return True if typed companions should be looked up for the unit."""
    return config.lookup_types and unit.kind == config.kind(TS_PROJECT)


def type_declaration_label(
    package: str | None, config: ScopeConfig, *, builtin: bool = False
) -> str | None:
    """Return the compile-time label of the companion package, if declared.

    Builtins all share ``@types/node``. Only explicit table entries count.
    """
    types_name = BUILTIN_TYPES_PACKAGE if builtin else types_package_name(package or "")
    if not types_name:
        return None
    match = find_npm_dependency(types_name, config)
    if match is None:
        return None
    return match.label
