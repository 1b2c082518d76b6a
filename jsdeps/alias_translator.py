"""Rewrites import identifiers according to configured prefix aliases."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class AliasRule:
    """Replace ``from_prefix`` with ``to_prefix`` at the start of an identifier."""

    from_prefix: str
    to_prefix: str

    @classmethod
    def from_pair(cls, from_prefix: str, to_prefix: str) -> AliasRule:
        """Build a rule, accepting tsconfig ``paths`` style ``~/*`` globs."""
        return cls(from_prefix.removesuffix("*"), to_prefix.removesuffix("*"))


class AliasTranslator:
    """Applies at most one alias rule to an identifier."""

    def __init__(self, rules: tuple[AliasRule, ...] | list[AliasRule]) -> None:
        """Compile the combined prefix pattern for the ordered rules."""
        self.rules = tuple(rules)
        self.pattern: re.Pattern[str] | None = None
        if self.rules:
            alternatives = "|".join(re.escape(r.from_prefix) for r in self.rules)
            self.pattern = re.compile(f"^(?:{alternatives})")

    def translate(self, identifier: str) -> str:
        """Return the identifier with its aliased prefix replaced."""
        if self.pattern is None:
            return identifier
        match = self.pattern.match(identifier)
        if not match:
            return identifier

        prefix = match.group(0)
        replacement = ""
        for rule in self.rules:
            if rule.from_prefix == prefix:
                replacement = rule.to_prefix
                break
        return replacement + identifier[len(prefix) :]
