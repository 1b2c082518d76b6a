"""Data model for build units."""

from dataclasses import dataclass, field

from jsdeps.label import Label

TS_PROJECT = "ts_project"
JS_LIBRARY = "js_library"
JEST_TEST = "jest_test"

DEPS_ATTR = "deps"
DATA_ATTR = "data"


@dataclass
class BuildUnit:
    """Represents a node of the build graph (a rule in a BUILD file)."""

    label: Label
    kind: str  # ts_project/js_library/jest_test/etc.
    srcs: list[str] = field(default_factory=list)  # relative to label.pkg
    attrs: dict[str, list[str]] = field(default_factory=dict)

    @property
    def pkg(self) -> str:
        """Package-relative directory of the unit."""
        return self.label.pkg

    def attr(self, key: str) -> list[str]:
        """Return the value of an attribute, or an empty list."""
        return list(self.attrs.get(key, []))

    def set_attr(self, key: str, value: list[str]) -> None:
        """Replace an attribute wholesale."""
        self.attrs[key] = list(value)

    def del_attr(self, key: str) -> None:
        """Remove an attribute if present."""
        self.attrs.pop(key, None)
