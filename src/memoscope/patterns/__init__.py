"""Pattern library: tagged rule variants, section-keyed tables, matching."""

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
    BlindSpotType,
    EvidenceItemSpec,
    KeywordSetRule,
    MoatDimension,
    PainDimension,
    PatternRule,
    RegexRule,
    RuleKind,
    RuleMatch,
    SectionKey,
    Severity,
)

__all__ = [
    "BLIND_SPOT_RULES",
    "EVIDENCE_ITEMS",
    "MOAT_SIGNAL_RULES",
    "PAIN_SIGNAL_RULES",
    "BlindSpotType",
    "EvidenceItemSpec",
    "KeywordSetRule",
    "MoatDimension",
    "PainDimension",
    "PatternRule",
    "RegexRule",
    "RuleKind",
    "RuleMatch",
    "SectionKey",
    "Severity",
    "get_blind_spot_rules",
    "get_evidence_items",
    "match_rule",
    "match_rules",
    "resolve_section",
]
