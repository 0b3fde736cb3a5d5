"""Tests for the pattern library and rule matching."""

from __future__ import annotations

import re

import pytest

from memoscope.patterns.library import (
    BLIND_SPOT_RULES,
    EVIDENCE_ITEMS,
    MOAT_SIGNAL_RULES,
    PAIN_SIGNAL_RULES,
    get_blind_spot_rules,
    get_evidence_items,
    resolve_section,
)
from memoscope.patterns.matcher import match_rule, match_rules
from memoscope.patterns.models import (
    KeywordSetRule,
    MoatDimension,
    PainDimension,
    RegexRule,
    RuleKind,
    SectionKey,
)


class TestTables:
    def test_every_section_has_blind_spot_entry(self) -> None:
        assert set(BLIND_SPOT_RULES) == set(SectionKey)

    def test_every_section_has_evidence_entry(self) -> None:
        assert set(EVIDENCE_ITEMS) == set(SectionKey)

    def test_signal_tables_cover_every_dimension(self) -> None:
        assert set(PAIN_SIGNAL_RULES) == set(PainDimension)
        assert set(MOAT_SIGNAL_RULES) == set(MoatDimension)

    def test_rule_ids_are_unique(self) -> None:
        ids: list[str] = []
        for rules in BLIND_SPOT_RULES.values():
            ids.extend(rule.rule_id for rule in rules)
        for items in EVIDENCE_ITEMS.values():
            ids.extend(item.rule.rule_id for item in items)
        for signal_rules in (*PAIN_SIGNAL_RULES.values(), *MOAT_SIGNAL_RULES.values()):
            ids.extend(rule.rule_id for rule in signal_rules)
        assert len(ids) == len(set(ids))

    def test_blind_spot_rules_carry_message_and_severity(self) -> None:
        for rules in BLIND_SPOT_RULES.values():
            for rule in rules:
                assert rule.message
                assert rule.suggestion
                assert rule.severity is not None

    def test_keyword_rule_requires_keywords(self) -> None:
        with pytest.raises(ValueError, match="no keywords"):
            KeywordSetRule(rule_id="x", scope="x", trigger=(), category="x")


class TestSectionLookup:
    def test_resolves_known_section(self) -> None:
        assert resolve_section("problem") is SectionKey.PROBLEM

    def test_resolution_ignores_case_and_whitespace(self) -> None:
        assert resolve_section("  Business_Model ") is SectionKey.BUSINESS_MODEL

    def test_unknown_section_resolves_to_none(self) -> None:
        assert resolve_section("pricing_page") is None
        assert resolve_section(None) is None

    def test_unknown_section_has_no_rules(self) -> None:
        assert get_blind_spot_rules("nope") == ()
        assert get_evidence_items("nope") == ()

    def test_section_without_blind_spot_rules_is_empty(self) -> None:
        assert get_blind_spot_rules(SectionKey.FUNDING_STRATEGY) == ()


class TestMatchRule:
    def test_keyword_rule_reports_first_keyword_in_declaration_order(self) -> None:
        rule = KeywordSetRule(
            rule_id="t.kw", scope="t", trigger=("beta", "alpha"), category="t"
        )
        hit = match_rule("alpha then beta", rule)
        assert hit is not None
        assert hit.matched_text == "beta"

    def test_keyword_rule_is_case_insensitive(self) -> None:
        rule = KeywordSetRule(rule_id="t.kw", scope="t", trigger=("We Believe",), category="t")
        assert match_rule("WE BELIEVE it", rule) is not None

    def test_keyword_rule_without_hit(self) -> None:
        rule = KeywordSetRule(rule_id="t.kw", scope="t", trigger=("gamma",), category="t")
        assert match_rule("alpha", rule) is None

    def test_regex_rule_uses_original_case(self) -> None:
        rule = RegexRule(
            rule_id="t.re", scope="t", trigger=re.compile(r"\bAPI\b"), category="t"
        )
        assert match_rule("Our API is stable", rule) is not None
        assert match_rule("our api is stable", rule) is None

    def test_regex_match_has_no_matched_text(self) -> None:
        rule = RegexRule(rule_id="t.re", scope="t", trigger=re.compile("x"), category="t")
        hit = match_rule("x", rule)
        assert hit is not None
        assert hit.matched_text is None
        assert hit.rule.kind is RuleKind.REGEX

    def test_non_string_text_is_coerced(self) -> None:
        rule = KeywordSetRule(rule_id="t.kw", scope="t", trigger=("42",), category="t")
        assert match_rule(1420, rule) is not None

    def test_match_rules_preserves_rule_order(self) -> None:
        rules = (
            KeywordSetRule(rule_id="t.b", scope="t", trigger=("b",), category="t"),
            KeywordSetRule(rule_id="t.a", scope="t", trigger=("a",), category="t"),
            KeywordSetRule(rule_id="t.z", scope="t", trigger=("z",), category="t"),
        )
        hits = match_rules("a b", rules)
        assert [hit.rule.rule_id for hit in hits] == ["t.b", "t.a"]
