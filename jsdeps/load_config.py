"""Logic for loading and merging configuration files."""

from pathlib import Path
from typing import Any

import yaml

from jsdeps.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "defaults": {
        "lang": "js",
        "import_aliases": [],
        "dependencies": {},
        "dev_dependencies": {},
        "npm_package_json": None,
        "npm_label": "@npm//",
        "default_npm_label": "@npm//",
        "js_root": ".",
        "lookup_types": True,
        "collect_all": False,
        "verbose": False,
        "quiet": False,
        "ts_extensions": [".ts", ".tsx"],
        "js_extensions": [".js", ".jsx", ".mjs", ".cjs"],
        "web_asset_suffixes": [
            ".css",
            ".scss",
            ".sass",
            ".less",
            ".svg",
            ".png",
            ".jpg",
            ".jpeg",
            ".gif",
            ".ico",
            ".woff",
            ".woff2",
            ".ttf",
            ".eot",
        ],
        "kind_map": {},
    },
    "scopes": {},
    "overrides": [],
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
