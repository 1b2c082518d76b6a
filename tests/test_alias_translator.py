"""Tests for alias rewriting of import identifiers."""

from jsdeps.alias_translator import AliasRule, AliasTranslator


def test_glob_rule_is_stripped() -> None:
    """Verify that tsconfig style ``~/*`` rules become plain prefixes."""
    rule = AliasRule.from_pair("~/*", "src/*")
    assert rule == AliasRule("~/", "src/")


def test_translate_replaces_prefix_only() -> None:
    """Verify that only the matched prefix is replaced."""
    translator = AliasTranslator([AliasRule("@app/", "libs/")])
    assert translator.translate("@app/ui/button") == "libs/ui/button"


def test_translate_is_idempotent() -> None:
    """Verify that translating an already translated identifier is a no-op."""
    translator = AliasTranslator([AliasRule.from_pair("~/*", "src/*")])
    once = translator.translate("~/a/b")
    assert once == "src/a/b"
    assert translator.translate(once) == once


def test_no_match_passes_through() -> None:
    """Verify that identifiers without an aliased prefix are unchanged."""
    translator = AliasTranslator([AliasRule("~/", "src/")])
    assert translator.translate("lodash") == "lodash"
    assert translator.translate("x/~/y") == "x/~/y"


def test_no_rules() -> None:
    """Verify that an empty rule set never rewrites."""
    assert AliasTranslator([]).translate("~/a") == "~/a"


def test_pattern_applies_at_most_one_rule() -> None:
    """Verify that the first matching alternative decides the prefix."""
    translator = AliasTranslator([AliasRule("@app/", "a/"), AliasRule("@app/ui/", "ui/")])
    assert translator.translate("@app/ui/x") == "a/ui/x"


def test_regex_characters_are_literal() -> None:
    """Verify that rule prefixes are matched literally."""
    translator = AliasTranslator([AliasRule("$lib.", "lib/")])
    assert translator.translate("$lib.x") == "lib/x"
    assert translator.translate("$libAx") == "$libAx"
