"""Logic for loading build units and their raw imports from a graph file."""

from pathlib import Path
from typing import Any

import yaml

from jsdeps.build_unit import BuildUnit
from jsdeps.label import Label
from jsdeps.scope_config import ConfigError


def load_build_graph(path: Path) -> tuple[list[BuildUnit], dict[Label, list[str]]]:
    """Load units and their import identifiers from a YAML (or JSON) file.

    Expected shape::

        units:
          - label: //web/app:app
            kind: ts_project
            srcs: [main.ts, util.ts]
            imports: ["./util", "lodash"]
    """
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    units: list[BuildUnit] = []
    imports: dict[Label, list[str]] = {}

    for entry in doc.get("units") or []:
        unit = _unit_from_entry(entry)
        if unit.label in imports:
            msg = f"duplicate unit {unit.label} in {path}"
            raise ConfigError(msg)
        units.append(unit)
        imports[unit.label] = [str(i) for i in entry.get("imports") or []]
    return units, imports


def _unit_from_entry(entry: dict[str, Any]) -> BuildUnit:
    try:
        label = Label.parse(str(entry["label"]))
    except (KeyError, ValueError) as exc:
        msg = f"invalid unit entry {entry!r}: {exc}"
        raise ConfigError(msg) from exc
    if label.relative:
        msg = f"unit label must be absolute: {entry['label']!r}"
        raise ConfigError(msg)
    return BuildUnit(
        label=label,
        kind=str(entry.get("kind") or ""),
        srcs=[str(s) for s in entry.get("srcs") or []],
        attrs={k: list(v) for k, v in (entry.get("attrs") or {}).items()},
    )
