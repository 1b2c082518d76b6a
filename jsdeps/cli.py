"""Resolve JavaScript/TypeScript imports of a build graph into dependency labels.

Reads a build-graph file listing units with their sources and raw import
identifiers, resolves each unit and prints the resulting ``deps``/``data``
attributes.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from jsdeps.build_index import BuildIndex
from jsdeps.config_table import ConfigTable
from jsdeps.load_build_graph import load_build_graph
from jsdeps.load_config import load_config
from jsdeps.override_table import OverrideTable
from jsdeps.resolution_report import ResolutionReport
from jsdeps.resolver import ImportResolver, resolve_all
from jsdeps.scope_config import ConfigError
from jsdeps.unit_resolution import apply_resolution

logger = logging.getLogger(__name__)

EXIT_FATAL_UNITS = 1
EXIT_CONFIG_ERROR = 2


def run_resolution(args: argparse.Namespace) -> int:
    """Execute a full resolution pass over the build graph."""
    repo_root = args.repo_root.resolve()
    raw_config = load_config(args.config)
    configs = ConfigTable.from_config(raw_config, repo_root)
    overrides = OverrideTable.from_config(
        raw_config.get("overrides"), lang=configs.for_scope("").lang
    )

    units, imports = load_build_graph(args.graph)
    index = BuildIndex.from_units(units, configs)
    logger.debug("Indexed %d import paths for %d units", len(index), len(units))

    resolver = ImportResolver(configs, index, overrides, repo_root)
    results = resolve_all(resolver, units, imports)

    report = ResolutionReport(configs.fingerprint())
    output: dict[str, dict[str, list[str]]] = {}
    for unit, result in zip(units, results):
        report.add_result(result)
        if apply_resolution(unit, result):
            output[str(unit.label)] = {
                "deps": unit.attr("deps"),
                "data": unit.attr("data"),
            }

    if args.report:
        report.generate_report(str(args.report))
        logger.info("Report written to %s", args.report)

    if args.format == "json":
        print(json.dumps(output, indent=2, sort_keys=True))
    else:
        print(yaml.safe_dump(output, sort_keys=True), end="")

    failed = [r for r in results if not r.ok]
    if failed:
        logger.error("%d of %d units failed to resolve", len(failed), len(results))
        return EXIT_FATAL_UNITS
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``jsdeps`` command."""
    ap = argparse.ArgumentParser(
        prog="jsdeps",
        description="Resolve JS/TS import identifiers into build dependency labels.",
    )
    ap.add_argument(
        "graph",
        type=Path,
        help="YAML/JSON file listing units (label, kind, srcs, imports)",
    )
    ap.add_argument("--config", help="Path to the resolver configuration (YAML)")
    ap.add_argument(
        "--repo-root",
        type=Path,
        default=Path(),
        help="Repository root used for on-disk file checks (default: .)",
    )
    ap.add_argument("--report", type=Path, help="Write a JSON resolution report here")
    ap.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format for the resolved attributes (default: yaml)",
    )
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
    )

    try:
        return run_resolution(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)  # noqa: TRY400
        return EXIT_CONFIG_ERROR
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Cannot read input: %s", exc)  # noqa: TRY400
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
