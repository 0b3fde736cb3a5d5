"""Pattern rule domain models.

Rules come in two tagged variants:
- KeywordSetRule: ordered keyword list, case-insensitive substring search.
  The first keyword found is reported as the matched text.
- RegexRule: compiled pattern tested against the original-case text.

Rule tables are keyed by SectionKey (or by an analyzer dimension enum) and
hold rules in priority order. Order is significant and never re-sorted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal


class SectionKey(StrEnum):
    """Questionnaire / memo section identifiers that carry rule tables."""

    PROBLEM = "problem"
    SOLUTION = "solution"
    MARKET = "market"
    TEAM = "team"
    GTM = "gtm"
    BUSINESS_MODEL = "business_model"
    FUNDING_STRATEGY = "funding_strategy"


class RuleKind(StrEnum):
    """Discriminator for the two rule variants."""

    KEYWORD_SET = "keyword_set"
    REGEX = "regex"


class Severity(StrEnum):
    """Blind-spot severity."""

    WARNING = "warning"
    CAUTION = "caution"


class BlindSpotType(StrEnum):
    """Category of risky narrative language."""

    EXAGGERATION = "exaggeration"
    ASSUMPTION = "assumption"
    PREMATURE_SCALING = "premature_scaling"
    MISSING_FIT = "missing_fit"
    VANITY = "vanity"


class PainDimension(StrEnum):
    """The four problem-intensity dimensions, in declaration order."""

    URGENCY = "urgency"
    FREQUENCY = "frequency"
    WILLINGNESS = "willingness"
    ALTERNATIVES = "alternatives"


class MoatDimension(StrEnum):
    """The five defensibility dimensions, in declaration order."""

    NETWORK_EFFECTS = "network_effects"
    SWITCHING_COSTS = "switching_costs"
    DATA_ADVANTAGE = "data_advantage"
    BRAND_TRUST = "brand_trust"
    COST_ADVANTAGE = "cost_advantage"


@dataclass(frozen=True)
class KeywordSetRule:
    """Keyword-set rule. Keywords are matched case-insensitively as substrings.

    Attributes:
        rule_id: Stable identifier, unique within its table.
        scope: Section or dimension the rule belongs to.
        trigger: Ordered keywords; the first one present wins.
        category: Free-form category (blind-spot type, evidence key, signal group).
        severity: Severity for blind-spot rules, None elsewhere.
        message: Display message for blind-spot rules.
        suggestion: Improvement suggestion for blind-spot rules.
    """

    rule_id: str
    scope: str
    trigger: tuple[str, ...]
    category: str
    severity: Severity | None = None
    message: str = ""
    suggestion: str = ""
    kind: Literal[RuleKind.KEYWORD_SET] = RuleKind.KEYWORD_SET

    def __post_init__(self) -> None:
        if not self.trigger:
            raise ValueError(f"Keyword rule {self.rule_id} has no keywords")


@dataclass(frozen=True)
class RegexRule:
    """Regex rule. The pattern is tested against original-case text.

    Case-sensitive behaviour is intentional for some rules; rules that want
    case-insensitive matching compile with re.IGNORECASE.
    """

    rule_id: str
    scope: str
    trigger: re.Pattern[str]
    category: str
    severity: Severity | None = None
    message: str = ""
    suggestion: str = ""
    kind: Literal[RuleKind.REGEX] = RuleKind.REGEX


PatternRule = KeywordSetRule | RegexRule


@dataclass(frozen=True)
class RuleMatch:
    """A successful rule match.

    Attributes:
        rule: The rule that matched.
        matched_text: First matching keyword for keyword rules, None for regex rules.
    """

    rule: PatternRule
    matched_text: str | None = None


@dataclass(frozen=True)
class EvidenceItemSpec:
    """Declared evidence item for a section checklist."""

    key: str
    label: str
    hint: str
    rule: PatternRule
