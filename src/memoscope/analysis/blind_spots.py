"""Blind-spot detector.

Flags risky language (overgeneralization, unvalidated assumptions, premature
scaling, missing founder fit, vanity models) in a section's narrative. One
blind spot is raised per matching rule, in rule-declaration order.
"""

from __future__ import annotations

from collections.abc import Iterable

from memoscope.analysis.models import BlindSpot
from memoscope.patterns.library import get_blind_spot_rules
from memoscope.patterns.matcher import match_rules
from memoscope.patterns.models import BlindSpotType, Severity
from memoscope.text.normalize import coerce_text


def detect_blind_spots(
    text: object,
    section_key: object,
    dismissed_messages: Iterable[str] | None = None,
) -> list[BlindSpot]:
    """Detect blind spots for a section.

    Args:
        text: Section narrative.
        section_key: Section identifier; unknown sections have no rules.
        dismissed_messages: Messages the user dismissed. Dismissal is keyed
            by message text; ``rule_id`` is carried on every blind spot for
            callers that key by rule instead.

    Returns:
        Blind spots in rule order. An empty list means the panel should be
        suppressed.
    """
    original = coerce_text(text, "blind_spots.detect_blind_spots")
    if not original.strip():
        return []

    dismissed = frozenset(dismissed_messages or ())
    spots: list[BlindSpot] = []
    for hit in match_rules(original, get_blind_spot_rules(section_key)):
        rule = hit.rule
        if rule.message in dismissed:
            continue
        spots.append(
            BlindSpot(
                rule_id=rule.rule_id,
                type=BlindSpotType(rule.category),
                severity=rule.severity or Severity.WARNING,
                message=rule.message,
                suggestion=rule.suggestion,
                matched_text=hit.matched_text,
            )
        )
    return spots
