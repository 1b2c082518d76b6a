"""Logic for deep merging configuration dictionaries."""

from typing import Any

# Lists under these keys accumulate across layers instead of being replaced.
ADDITIVE_KEYS = frozenset({"web_asset_suffixes"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration layers.

    - Mappings are merged recursively, so a scope can add a single
      dependency without restating the whole table.
    - Lists in 'update' replace 'base' lists, except for ``ADDITIVE_KEYS``
      which are unioned (order of first appearance is kept).
    - Neither argument is modified.
    """
    result = dict(base)
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif key in ADDITIVE_KEYS and isinstance(current, list) and isinstance(value, list):
            result[key] = list(dict.fromkeys([*current, *value]))
        else:
            result[key] = value
    return result
