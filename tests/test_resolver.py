"""Tests for resolving all imports of a build unit."""

import logging
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from jsdeps.build_index import BuildIndex
from jsdeps.build_unit import JEST_TEST, JS_LIBRARY, TS_PROJECT, BuildUnit
from jsdeps.config_table import ConfigTable
from jsdeps.deep_merge import deep_merge
from jsdeps.label import Label
from jsdeps.load_config import load_config
from jsdeps.override_table import OverrideTable
from jsdeps.resolution_outcome import Ambiguous, Error, Severity
from jsdeps.resolver import ImportResolver, Resolver, resolve_all

SETTINGS: dict[str, Any] = {
    "defaults": {
        "dependencies": {"lodash": "@npm//", "react": "@npm//"},
        "dev_dependencies": {
            "typescript": "@npm//",
            "jest": "@npm//",
            "@types/react": "@npm//",
            "@types/node": "@npm//",
        },
        "import_aliases": [{"from": "~/*", "to": "web/*"}],
    },
    "scopes": {"web/quiet": {"quiet": True}, "web/verbose": {"verbose": True}},
}


def make_unit(label: str, srcs: list[str], kind: str = TS_PROJECT) -> BuildUnit:
    """Create a BuildUnit for testing."""
    return BuildUnit(label=Label.parse(label), kind=kind, srcs=srcs)


@pytest.fixture
def units() -> dict[str, BuildUnit]:
    """Fixture providing a small web project."""
    return {
        "app": make_unit("//web/app:app", ["main.ts"]),
        "utils": make_unit("//web/app:utils", ["utils.ts"], kind=JS_LIBRARY),
        "lib": make_unit("//web/lib:lib", ["index.ts", "helpers.ts"]),
        "manifest": make_unit("//:package", ["package.json"], kind=JS_LIBRARY),
        "plain": make_unit("//web/plain:plain", ["plain.js"], kind=JS_LIBRARY),
        "quiet": make_unit("//web/quiet:quiet", ["q.ts"]),
        "verbose": make_unit("//web/verbose:verbose", ["v.ts"]),
    }


def build_resolver(
    tmp_path: Path,
    units: list[BuildUnit],
    overrides: OverrideTable | None = None,
    settings: dict[str, Any] | None = None,
) -> ImportResolver:
    """Build an ImportResolver over the given units."""
    configs = ConfigTable.from_config(
        deep_merge(load_config(None), settings or SETTINGS), tmp_path
    )
    index = BuildIndex.from_units(units, configs)
    return ImportResolver(configs, index, overrides, tmp_path)


@pytest.fixture
def resolver(tmp_path: Path, units: dict[str, BuildUnit]) -> ImportResolver:
    """Fixture providing a resolver over the web project."""
    return build_resolver(tmp_path, list(units.values()))


def test_is_a_resolver(resolver: ImportResolver) -> None:
    """Verify that the engine implements the extension point."""
    assert isinstance(resolver, Resolver)


def test_runtime_dependency(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify that a dependency table entry is a runtime dependency."""
    result = resolver.resolve(units["plain"], ["lodash"])
    assert result.ok
    assert result.deps == ("@npm//lodash",)
    assert result.data == ("@npm//lodash",)


def test_dev_dependency_is_compile_only(
    resolver: ImportResolver, units: dict[str, BuildUnit]
) -> None:
    """Verify that dev dependencies never reach the data set."""
    result = resolver.resolve(units["plain"], ["typescript/lib/tsserverlibrary"])
    assert result.deps == ("@npm//typescript",)
    assert result.data == ()


def test_typed_unit_gets_companion_types(
    resolver: ImportResolver, units: dict[str, BuildUnit]
) -> None:
    """Verify that typed units get @types packages as compile deps."""
    result = resolver.resolve(units["app"], ["react"])
    assert result.deps == ("@npm//@types/react", "@npm//react")
    assert result.data == ("@npm//react",)


def test_builtin(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify that builtins only add @types/node, and only for typed units."""
    typed = resolver.resolve(units["app"], ["fs", "node:path"])
    assert typed.deps == ("@npm//@types/node",)
    assert typed.data == ()

    untyped = resolver.resolve(units["plain"], ["fs"])
    assert untyped.deps == ()


def test_local_and_aliased_imports(
    resolver: ImportResolver, units: dict[str, BuildUnit]
) -> None:
    """Verify relative, aliased and directory imports."""
    result = resolver.resolve(units["app"], ["./utils", "~/lib", "../lib/helpers"])
    assert result.deps == ("//web/lib", ":utils")
    assert result.diagnostics == []


def test_manifest_reference(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify that package.json imports resolve to the manifest unit."""
    result = resolver.resolve(units["app"], ["package", "package.json"])
    assert result.deps == ("//:package",)


def test_manifest_defaults_without_owner(tmp_path: Path, units: dict[str, BuildUnit]) -> None:
    """Verify the default manifest label when no unit owns package.json."""
    resolver = build_resolver(tmp_path, [units["app"]])
    assert resolver.resolve(units["app"], ["package"]).deps == ("//:package",)


def test_manifest_owner_has_no_self_edge(
    resolver: ImportResolver, units: dict[str, BuildUnit]
) -> None:
    """Verify that the manifest unit does not depend on itself."""
    result = resolver.resolve(units["manifest"], ["package.json", "lodash"])
    assert result.ok
    assert result.deps == ("@npm//lodash",)


def test_manifest_ambiguity_is_fatal(tmp_path: Path, units: dict[str, BuildUnit]) -> None:
    """Verify that an ambiguous manifest aborts the unit."""
    other = make_unit("//:package_copy", ["package.json"])
    resolver = build_resolver(tmp_path, [*units.values(), other])
    result = resolver.resolve(units["app"], ["lodash", "package"])

    assert not result.ok
    assert isinstance(result.fatal, Error)
    assert "package.json" in result.fatal.reason
    assert result.deps == ()


def test_ambiguity_aborts_unit(
    tmp_path: Path, units: dict[str, BuildUnit], caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that ambiguity is fatal, logged and names both owners."""
    first = make_unit("//web/app:a", ["dup.ts"])
    second = make_unit("//web/app:b", ["dup.ts"])
    resolver = build_resolver(tmp_path, [units["app"], first, second])

    with caplog.at_level(logging.ERROR, logger="jsdeps.resolver"):
        result = resolver.resolve(units["app"], ["./dup", "lodash"])

    assert isinstance(result.fatal, Ambiguous)
    assert result.fatal.severity is Severity.FATAL
    assert result.deps == ()
    assert "//web/app:a" in caplog.text
    assert "//web/app:b" in caplog.text


def test_unresolved_is_recorded(
    resolver: ImportResolver,
    units: dict[str, BuildUnit],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that unresolved imports are logged and resolution continues."""
    with caplog.at_level(logging.WARNING, logger="jsdeps.resolver"):
        result = resolver.resolve(units["app"], ["./nope", "lodash"])

    assert result.ok
    assert result.unresolved == ["./nope"]
    assert result.diagnostics[0].severity is Severity.RECORDED
    assert result.deps == ("@npm//lodash",)
    assert "[//web/app] import ./nope not found" in caplog.text


def test_quiet_scope_suppresses_warning(
    resolver: ImportResolver,
    units: dict[str, BuildUnit],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that quiet scopes still record but do not log."""
    with caplog.at_level(logging.WARNING, logger="jsdeps.resolver"):
        result = resolver.resolve(units["quiet"], ["./nope"])

    assert result.unresolved == ["./nope"]
    assert "not found" not in caplog.text


def test_verbose_scope_logs_candidates(
    resolver: ImportResolver,
    units: dict[str, BuildUnit],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that verbose scopes log every attempted path."""
    with caplog.at_level(logging.WARNING, logger="jsdeps.resolver"):
        resolver.resolve(units["verbose"], ["./nope"])

    assert "tried node_modules/./nope" in caplog.text
    assert "tried web/verbose/nope.ts" in caplog.text
    assert "tried nope.cjs" in caplog.text


def test_override(tmp_path: Path, units: dict[str, BuildUnit]) -> None:
    """Verify that overrides bypass classification and skip self edges."""
    overrides = OverrideTable.from_config(
        [
            {"imp": "legacy-lib", "label": "//vendor:legacy"},
            {"imp": "lodash", "label": "//web/app:app"},
        ]
    )
    resolver = build_resolver(tmp_path, list(units.values()), overrides)
    result = resolver.resolve(units["app"], ["legacy-lib", "lodash"])
    assert result.deps == ("//vendor:legacy",)
    assert result.data == ()


def test_unknown_scoped_package(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify the default label for undeclared scoped packages."""
    result = resolver.resolve(units["plain"], ["@acme/widgets/button"])
    assert result.deps == ("@npm//@acme/widgets",)
    assert result.data == ("@npm//@acme/widgets",)


def test_never_depends_on_itself(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify that own files and own labels are dropped."""
    result = resolver.resolve(units["lib"], ["./helpers", ".", "~/lib", "../lib"])
    assert result.deps == ()
    assert result.data == ()


def test_order_independent(resolver: ImportResolver, units: dict[str, BuildUnit]) -> None:
    """Verify that identical input renders identically in any order."""
    imports = ["react", "./utils", "fs", "lodash", "./utils"]
    first = resolver.resolve(units["app"], imports)
    second = resolver.resolve(units["app"], list(reversed(imports)))
    assert first.deps == second.deps
    assert first.data == second.data


def test_test_unit_extras(tmp_path: Path) -> None:
    """Verify that jest test units receive jest packages and package.json."""
    test_unit = make_unit("//web/app:test", ["main.test.ts"], kind=JEST_TEST)
    resolver = build_resolver(tmp_path, [test_unit])
    result = resolver.resolve(test_unit, [])
    assert result.deps == ("@npm//jest",)
    assert result.data == ("//:package_json", "@npm//jest")


def test_resolve_all_isolates_failures(tmp_path: Path, units: dict[str, BuildUnit]) -> None:
    """Verify that a fatal unit does not stop the others."""
    first = make_unit("//web/app:a", ["dup.ts"])
    second = make_unit("//web/app:b", ["dup.ts"])
    resolver = build_resolver(tmp_path, [units["app"], units["plain"], first, second])

    results = resolve_all(
        resolver,
        [units["app"], units["plain"]],
        {units["app"].label: ["./dup"], units["plain"].label: ["lodash"]},
    )
    assert [r.ok for r in results] == [False, True]
    assert results[1].deps == ("@npm//lodash",)


def test_resolve_all_passes_identifiers(units: dict[str, BuildUnit]) -> None:
    """Verify that each unit is resolved with its own identifiers, or none."""
    resolver = MagicMock(spec=Resolver)
    resolve_all(resolver, [units["app"], units["lib"]], {units["app"].label: ["lodash"]})

    assert resolver.resolve.call_count == 2  # noqa: PLR2004
    resolver.resolve.assert_any_call(units["app"], ["lodash"])
    resolver.resolve.assert_any_call(units["lib"], ())


def test_manifest_label_is_absolute_from_root_package(
    resolver: ImportResolver, units: dict[str, BuildUnit]
) -> None:
    """Verify that a root-package unit still gets ``//:package``."""
    root_unit = make_unit("//:app", ["app.ts"])
    assert resolver.resolve(root_unit, ["package"]).deps == ("//:package",)


def test_manifest_owner_in_same_package_is_absolute(tmp_path: Path) -> None:
    """Verify that a sibling manifest owner is not shortened to ``:name``."""
    app = make_unit("//:app", ["app.ts"])
    manifest = make_unit("//:manifest", ["package.json"], kind=JS_LIBRARY)
    resolver = build_resolver(tmp_path, [app, manifest])
    assert resolver.resolve(app, ["package"]).deps == ("//:manifest",)
