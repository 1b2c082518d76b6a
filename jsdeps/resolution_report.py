"""Logic for generating reports on a dependency resolution pass."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from jsdeps.unit_resolution import UnitResolution

CURRENT_SCHEMA_VERSION = 1


class ResolutionReport:
    """Collects and summarizes the per-unit results of a resolution pass."""

    def __init__(self, config_hash: str, schema_version: int = CURRENT_SCHEMA_VERSION) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.schema_version = schema_version
        self.results: list[UnitResolution] = []
        self.start_time = time.time()

    def add_result(self, result: UnitResolution) -> None:
        """Add the resolution of a single unit to the report."""
        self.results.append(result)

    def to_dict(self) -> dict[str, Any]:
        """Return the report as plain data."""
        return {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "schema_version": self.schema_version,
                "total_units": len(self.results),
            },
            "results": [
                {
                    "label": str(r.label),
                    "deps": list(r.deps),
                    "data": list(r.data),
                    "unresolved": r.unresolved,
                    "fatal": getattr(r.fatal, "reason", None),
                }
                for r in sorted(self.results, key=lambda r: str(r.label))
            ],
            "stats": self._compute_stats(),
        }

    def generate_report(self, path: str) -> None:
        """Write the summary report to a JSON file."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def _compute_stats(self) -> dict[str, Any]:
        severity_counts: Counter[str] = Counter()
        fatal_units = 0
        edge_count = 0

        for r in self.results:
            if not r.ok:
                fatal_units += 1
                severity_counts["fatal"] += 1
            for d in r.diagnostics:
                severity_counts[d.severity.value] += 1
            edge_count += len(r.deps) + len(r.data)

        unresolved = sum(len(r.unresolved) for r in self.results)
        return {
            "ok_units": len(self.results) - fatal_units,
            "fatal_units": fatal_units,
            "unresolved_imports": unresolved,
            "rendered_labels": edge_count,
            "diagnostics": dict(sorted(severity_counts.items())),
        }
