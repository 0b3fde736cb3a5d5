"""Rule matching against narrative text."""

from __future__ import annotations

from memoscope.patterns.models import KeywordSetRule, PatternRule, RegexRule, RuleMatch
from memoscope.text.normalize import coerce_text


def match_rule(text: object, rule: PatternRule, *, lowered: str | None = None) -> RuleMatch | None:
    """Test a single rule against text.

    Keyword rules search the lowercased text for each keyword in declaration
    order and report the first hit. Regex rules search the original-case text.

    Args:
        text: Narrative text (coerced if not a string).
        rule: Rule to evaluate.
        lowered: Pre-lowercased text, to avoid re-normalizing in loops.

    Returns:
        RuleMatch on success, None otherwise.
    """
    original = coerce_text(text, f"match_rule:{rule.rule_id}")

    if isinstance(rule, KeywordSetRule):
        haystack = lowered if lowered is not None else original.lower()
        for keyword in rule.trigger:
            if keyword.lower() in haystack:
                return RuleMatch(rule=rule, matched_text=keyword)
        return None

    if isinstance(rule, RegexRule):
        if rule.trigger.search(original):
            return RuleMatch(rule=rule)
        return None

    return None


def match_rules(text: object, rules: tuple[PatternRule, ...]) -> list[RuleMatch]:
    """Evaluate every rule in order and collect the matches."""
    original = coerce_text(text, "match_rules")
    lowered = original.lower()
    matches: list[RuleMatch] = []
    for rule in rules:
        hit = match_rule(original, rule, lowered=lowered)
        if hit is not None:
            matches.append(hit)
    return matches
