"""Logic for reading dependency tables from a package.json manifest."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def load_npm_dependencies(
    package_json: Path, npm_label: str
) -> tuple[dict[str, str], dict[str, str]]:
    """Return (dependencies, dev_dependencies) mapping package names to ``npm_label``."""
    if not package_json.is_file():
        logger.warning("package.json not found: %s", package_json)
        return {}, {}

    try:
        manifest = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.exception("Error reading %s", package_json)
        return {}, {}

    deps = {name: npm_label for name in manifest.get("dependencies") or {}}
    dev_deps = {name: npm_label for name in manifest.get("devDependencies") or {}}
    return deps, dev_deps
