"""Logic for indexing build units by the import paths they provide."""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from jsdeps.build_unit import JS_LIBRARY, TS_PROJECT, BuildUnit
from jsdeps.import_spec import ImportSpec
from jsdeps.label import Label

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jsdeps.config_table import ConfigTable
    from jsdeps.scope_config import ScopeConfig

BARREL_STEM = "index"


def is_barrel_file(src: str, config: ScopeConfig) -> bool:
    """Return True for ``index.ts``, ``index.js`` and friends."""
    stem, ext = posixpath.splitext(posixpath.basename(src))
    return stem == BARREL_STEM and ext in config.source_extensions


def imports_for_unit(unit: BuildUnit, config: ScopeConfig) -> list[ImportSpec]:
    """Return every ImportSpec under which the unit can be found.

    Each source file is indexed by its repo-relative path. A unit with a
    barrel file is also indexed by its package directory, and with
    ``collect_all`` libraries are indexed by every source subdirectory.
    """
    specs = [
        ImportSpec(config.lang, posixpath.join(unit.pkg, src)) for src in unit.srcs
    ]

    if any(is_barrel_file(src, config) for src in unit.srcs):
        specs.append(ImportSpec(config.lang, unit.pkg))

    folder_kinds = {config.kind(TS_PROJECT), config.kind(JS_LIBRARY)}
    if config.collect_all and unit.kind in folder_kinds:
        folders = sorted({posixpath.dirname(src) for src in unit.srcs})
        for folder in folders:
            path = posixpath.normpath(posixpath.join(unit.pkg, folder))
            specs.append(ImportSpec(config.lang, "" if path == "." else path))

    # Keep first occurrence only
    return list(dict.fromkeys(specs))


class BuildIndex:
    """Maps ImportSpecs to the labels of the units providing them."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._owners: dict[ImportSpec, list[Label]] = {}

    @classmethod
    def from_units(cls, units: Iterable[BuildUnit], configs: ConfigTable) -> BuildIndex:
        """Index all units using the settings of their scopes."""
        index = cls()
        for unit in units:
            index.add(unit, imports_for_unit(unit, configs.for_scope(unit.pkg)))
        return index

    def add(self, unit: BuildUnit, specs: Iterable[ImportSpec]) -> None:
        """Register ``unit`` as a provider of each spec."""
        for spec in specs:
            owners = self._owners.setdefault(spec, [])
            if unit.label not in owners:
                owners.append(unit.label)

    def find(self, spec: ImportSpec) -> list[Label]:
        """Return the labels of every unit providing ``spec``."""
        return list(self._owners.get(spec, []))

    def __len__(self) -> int:
        return len(self._owners)
