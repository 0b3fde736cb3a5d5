"""Declarative rule tables shared by the narrative analyzers.

Every table is keyed exhaustively by its enum (SectionKey, PainDimension,
MoatDimension) and holds rules in priority order. Tables are validated at
import time: a missing key or a duplicate rule_id fails loudly.

Lookups by raw string section identifiers go through the get_* helpers,
which return an empty tuple for unknown sections. Callers treat an empty
result as "nothing to show".
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from typing import TypeVar

from memoscope.patterns.models import (
    BlindSpotType,
    EvidenceItemSpec,
    KeywordSetRule,
    MoatDimension,
    PainDimension,
    PatternRule,
    RegexRule,
    SectionKey,
    Severity,
)

_K = TypeVar("_K", bound=StrEnum)
_V = TypeVar("_V")


def _exhaustive(
    enum_type: type[_K], entries: dict[_K, tuple[_V, ...]], table_name: str
) -> Mapping[_K, tuple[_V, ...]]:
    """Fail closed: every enum member must have an entry (possibly empty)."""
    missing = sorted(member.value for member in enum_type if member not in entries)
    if missing:
        raise ValueError(f"{table_name} missing keys: {missing}")
    return entries


def _keywords(
    scope: str,
    *groups: str | tuple[str, ...],
) -> tuple[KeywordSetRule, ...]:
    """Build one keyword rule per signal group.

    A group is either a single keyword or a tuple of synonyms that count as
    one signal.
    """
    rules: list[KeywordSetRule] = []
    for group in groups:
        trigger = (group,) if isinstance(group, str) else group
        slug = re.sub(r"[^a-z0-9]+", "_", trigger[0].lower()).strip("_") or "symbol"
        rules.append(
            KeywordSetRule(
                rule_id=f"{scope}.{slug}",
                scope=scope,
                trigger=trigger,
                category=scope,
            )
        )
    return tuple(rules)


# ---------------------------------------------------------------------------
# Blind spots
# ---------------------------------------------------------------------------

_BLIND_SPOT_RULES: dict[SectionKey, tuple[PatternRule, ...]] = {
    SectionKey.PROBLEM: (
        KeywordSetRule(
            rule_id="problem.overgeneralization",
            scope=SectionKey.PROBLEM,
            trigger=("everyone", "all businesses", "every company", "universal"),
            category=BlindSpotType.EXAGGERATION,
            severity=Severity.WARNING,
            message="Potential overgeneralization detected",
            suggestion="Narrow to a specific segment you have validated",
        ),
        KeywordSetRule(
            rule_id="problem.assumption",
            scope=SectionKey.PROBLEM,
            trigger=("we believe", "we think", "we assume", "probably"),
            category=BlindSpotType.ASSUMPTION,
            severity=Severity.WARNING,
            message="Sounds like an assumption",
            suggestion="Replace with evidence from customer interviews",
        ),
    ),
    SectionKey.SOLUTION: (
        KeywordSetRule(
            rule_id="solution.premature_scaling",
            scope=SectionKey.SOLUTION,
            trigger=("scale", "million users", "global", "worldwide", "enterprise"),
            category=BlindSpotType.PREMATURE_SCALING,
            severity=Severity.CAUTION,
            message="Premature scaling language detected",
            suggestion="Focus on your first 10-100 customers first",
        ),
        KeywordSetRule(
            rule_id="solution.buzzword",
            scope=SectionKey.SOLUTION,
            trigger=("revolutionary", "disruptive", "game-changing", "unprecedented"),
            category=BlindSpotType.EXAGGERATION,
            severity=Severity.CAUTION,
            message="Buzzword detected",
            suggestion="Replace with specific, measurable benefits",
        ),
    ),
    SectionKey.MARKET: (
        KeywordSetRule(
            rule_id="market.large_market_claim",
            scope=SectionKey.MARKET,
            trigger=(
                "billion dollar",
                "billion-dollar",
                "trillion",
                "huge market",
                "massive opportunity",
            ),
            category=BlindSpotType.EXAGGERATION,
            severity=Severity.CAUTION,
            message="Large market claims need validation",
            suggestion="Focus on your serviceable addressable market (SAM)",
        ),
    ),
    SectionKey.TEAM: (
        # Only the first line is inspected: "." does not cross newlines.
        RegexRule(
            rule_id="team.missing_founder_fit",
            scope=SectionKey.TEAM,
            trigger=re.compile(
                r"^(?!.*(?:worked in|experience|built|founded|led|years))",
                re.IGNORECASE,
            ),
            category=BlindSpotType.MISSING_FIT,
            severity=Severity.WARNING,
            message="Founder-market fit unclear",
            suggestion="Explain your unique insight or experience with this problem",
        ),
    ),
    SectionKey.GTM: (
        KeywordSetRule(
            rule_id="gtm.unvalidated_acquisition",
            scope=SectionKey.GTM,
            trigger=("viral", "word of mouth", "organic growth", "marketing will"),
            category=BlindSpotType.ASSUMPTION,
            severity=Severity.WARNING,
            message="Acquisition strategy needs validation",
            suggestion="How specifically will you acquire your first 10 customers?",
        ),
    ),
    SectionKey.BUSINESS_MODEL: (
        KeywordSetRule(
            rule_id="business_model.freemium",
            scope=SectionKey.BUSINESS_MODEL,
            trigger=("freemium", "free users", "convert later"),
            category=BlindSpotType.VANITY,
            severity=Severity.CAUTION,
            message="Freemium is hard at pre-seed",
            suggestion="Consider starting with paid customers to validate willingness to pay",
        ),
    ),
    SectionKey.FUNDING_STRATEGY: (),
}

BLIND_SPOT_RULES = _exhaustive(SectionKey, _BLIND_SPOT_RULES, "BLIND_SPOT_RULES")


# ---------------------------------------------------------------------------
# Evidence checklist
# ---------------------------------------------------------------------------


def _item(
    section: SectionKey, key: str, label: str, hint: str, *keywords: str
) -> EvidenceItemSpec:
    return EvidenceItemSpec(
        key=key,
        label=label,
        hint=hint,
        rule=KeywordSetRule(
            rule_id=f"{section.value}.{key}",
            scope=section,
            trigger=keywords,
            category=key,
        ),
    )


_PAIN_QUANTIFIED_PATTERN = re.compile(
    r"[$€£]\s?\d"
    r"|\d+(?:\.\d+)?\s?%"
    r"|\b\d+(?:\.\d+)?\s*(?:hours?|hrs?|days?|weeks?|minutes?)\b"
    r"|\b(?:cost|lose|losing|lost|waste|wasted|million|thousand)\b",
    re.IGNORECASE,
)

_EVIDENCE_ITEMS: dict[SectionKey, tuple[EvidenceItemSpec, ...]] = {
    SectionKey.PROBLEM: (
        _item(
            SectionKey.PROBLEM,
            "interviews",
            "Customer interviews cited",
            "Mention how many potential customers you spoke to",
            "interviewed",
            "spoke to",
            "talked to",
            "conversations",
            "customers told us",
            "discovery calls",
        ),
        EvidenceItemSpec(
            key="pain_quantified",
            label="Pain quantified",
            hint="Add specific numbers showing the cost of this problem",
            rule=RegexRule(
                rule_id="problem.pain_quantified",
                scope=SectionKey.PROBLEM,
                trigger=_PAIN_QUANTIFIED_PATTERN,
                category="pain_quantified",
            ),
        ),
        _item(
            SectionKey.PROBLEM,
            "frequency",
            "Frequency described",
            "Describe how often this problem occurs",
            "daily",
            "weekly",
            "every",
            "constantly",
            "recurring",
            "each time",
        ),
        _item(
            SectionKey.PROBLEM,
            "workarounds",
            "Current workarounds documented",
            "Explain what solutions people use today",
            "currently",
            "today",
            "existing",
            "workaround",
            "manual",
            "spreadsheet",
            "use",
        ),
    ),
    SectionKey.SOLUTION: (
        _item(
            SectionKey.SOLUTION,
            "prototype",
            "Prototype/MVP exists",
            "Mention if you have a prototype or MVP",
            "prototype",
            "mvp",
            "built",
            "demo",
            "beta",
            "pilot",
            "working",
        ),
        _item(
            SectionKey.SOLUTION,
            "unique_approach",
            "Unique approach explained",
            "Explain what makes your approach different",
            "unlike",
            "different",
            "unique",
            "our approach",
            "we do",
            "instead of",
            "first to",
        ),
        _item(
            SectionKey.SOLUTION,
            "customer_reaction",
            "Customer reaction cited",
            "Share how customers reacted when they saw your solution",
            "customers said",
            "feedback",
            "loved",
            "response",
            "they told us",
            "reaction",
        ),
    ),
    SectionKey.MARKET: (
        _item(
            SectionKey.MARKET,
            "target_segment",
            "Target segment defined",
            "Define your specific target customer segment",
            "focus on",
            "target",
            "segment",
            "specifically",
            "niche",
            "ideal customer",
        ),
        _item(
            SectionKey.MARKET,
            "beachhead",
            "Beachhead market identified",
            "Identify where you will start (your beachhead)",
            "start with",
            "first",
            "initial",
            "beachhead",
            "entry point",
            "land",
        ),
        _item(
            SectionKey.MARKET,
            "why_now",
            "Why-now timing explained",
            "Explain why this is the right time for your solution",
            "now",
            "timing",
            "recent",
            "changed",
            "trend",
            "shift",
            "emerging",
        ),
    ),
    SectionKey.TEAM: (
        _item(
            SectionKey.TEAM,
            "founder_market_fit",
            "Founder-market fit explained",
            "Explain your unique insight or experience with this problem",
            "worked in",
            "experience",
            "background",
            "insight",
            "learned",
            "saw firsthand",
            "personal",
        ),
        _item(
            SectionKey.TEAM,
            "relevant_experience",
            "Relevant experience cited",
            "Cite relevant past experience",
            "years",
            "previously",
            "founded",
            "led",
            "built",
            "shipped",
            "expertise",
        ),
        _item(
            SectionKey.TEAM,
            "gaps_acknowledged",
            "Missing skills acknowledged",
            "Acknowledge what skills you need to add",
            "need",
            "looking for",
            "gap",
            "hiring",
            "missing",
            "advisor",
            "help with",
        ),
    ),
    SectionKey.GTM: (
        _item(
            SectionKey.GTM,
            "first_customers",
            "First customers identified",
            "Describe who your first customers are or will be",
            "first",
            "customers",
            "pipeline",
            "leads",
            "signed",
            "loi",
            "waiting",
        ),
        _item(
            SectionKey.GTM,
            "acquisition",
            "Acquisition channel defined",
            "Explain how you will reach your customers",
            "acquire",
            "reach",
            "channel",
            "find",
            "marketing",
            "sales",
            "content",
            "referral",
        ),
    ),
    SectionKey.BUSINESS_MODEL: (
        _item(
            SectionKey.BUSINESS_MODEL,
            "revenue_model",
            "Revenue model outlined",
            "Describe how you will make money",
            "charge",
            "subscription",
            "saas",
            "fee",
            "revenue",
            "monetize",
            "pay",
        ),
        _item(
            SectionKey.BUSINESS_MODEL,
            "pricing",
            "Pricing hypothesis stated",
            "Share your pricing hypothesis",
            "$",
            "€",
            "£",
            "price",
            "cost",
            "per month",
            "per user",
            "plan",
            "tier",
        ),
    ),
    SectionKey.FUNDING_STRATEGY: (
        _item(
            SectionKey.FUNDING_STRATEGY,
            "use_of_funds",
            "Use of funds specified",
            "Specify how you will use the funding",
            "use",
            "invest",
            "spend",
            "allocate",
            "hire",
            "build",
            "develop",
        ),
        _item(
            SectionKey.FUNDING_STRATEGY,
            "milestones",
            "18-month milestones defined",
            "Define key milestones for the next 18 months",
            "milestone",
            "goal",
            "target",
            "achieve",
            "month",
            "quarter",
            "by",
        ),
        _item(
            SectionKey.FUNDING_STRATEGY,
            "path_to_seed",
            "Path to seed metrics outlined",
            "Outline what metrics you need for next round",
            "seed",
            "next round",
            "series",
            "metrics",
            "raise",
            "traction",
        ),
    ),
}

EVIDENCE_ITEMS = _exhaustive(SectionKey, _EVIDENCE_ITEMS, "EVIDENCE_ITEMS")


# ---------------------------------------------------------------------------
# Pain signals
# ---------------------------------------------------------------------------

_PAIN_SIGNAL_RULES: dict[PainDimension, tuple[KeywordSetRule, ...]] = {
    PainDimension.URGENCY: _keywords(
        "pain.urgency",
        "critical",
        "urgent",
        "immediate",
        "now",
        ("can't wait", "cannot wait"),
        "emergency",
        "crisis",
        "broken",
        "failing",
        "losing",
        "desperate",
        "must have",
        "essential",
    ),
    PainDimension.FREQUENCY: _keywords(
        "pain.frequency",
        "daily",
        "every day",
        "constantly",
        "always",
        "recurring",
        "frequent",
        "regular",
        "ongoing",
        "continuous",
        "hourly",
        "weekly",
        "multiple times",
    ),
    PainDimension.WILLINGNESS: _keywords(
        "pain.willingness",
        "budget",
        "spend",
        "invest",
        "pay",
        "cost",
        "expensive",
        "money",
        "revenue",
        "savings",
        "roi",
        ("$", "€", "£"),
        "price",
        "willing to pay",
    ),
    PainDimension.ALTERNATIVES: _keywords(
        "pain.alternatives",
        "manual",
        "spreadsheet",
        "excel",
        "no solution",
        "workaround",
        "legacy",
        "outdated",
        "inefficient",
        "broken process",
        "hack",
        "cobbled together",
        "duct tape",
    ),
}

PAIN_SIGNAL_RULES = _exhaustive(PainDimension, _PAIN_SIGNAL_RULES, "PAIN_SIGNAL_RULES")


# ---------------------------------------------------------------------------
# Moat signals
# ---------------------------------------------------------------------------

_MOAT_SIGNAL_RULES: dict[MoatDimension, tuple[KeywordSetRule, ...]] = {
    MoatDimension.NETWORK_EFFECTS: _keywords(
        "moat.network_effects",
        "network effect",
        "marketplace",
        "community",
        "viral",
        "two-sided",
        "platform effect",
        "user-generated",
        "flywheel",
    ),
    MoatDimension.SWITCHING_COSTS: _keywords(
        "moat.switching_costs",
        "switching cost",
        "lock-in",
        "integration",
        "workflow",
        "embedded",
        "migration",
        "dependency",
        "sticky",
    ),
    MoatDimension.DATA_ADVANTAGE: _keywords(
        "moat.data_advantage",
        "proprietary data",
        "dataset",
        "ai training",
        "machine learning",
        "unique data",
        "data moat",
        "analytics",
        "insights",
    ),
    MoatDimension.BRAND_TRUST: _keywords(
        "moat.brand_trust",
        "brand",
        "trust",
        "certification",
        "reputation",
        "enterprise",
        "compliance",
        "soc2",
        "iso",
        "gdpr",
    ),
    MoatDimension.COST_ADVANTAGE: _keywords(
        "moat.cost_advantage",
        "economies of scale",
        "cost advantage",
        "margin",
        "efficiency",
        "proprietary tech",
        "patent",
        "cheaper",
    ),
}

MOAT_SIGNAL_RULES = _exhaustive(MoatDimension, _MOAT_SIGNAL_RULES, "MOAT_SIGNAL_RULES")


def _check_unique_ids() -> None:
    seen: set[str] = set()
    all_rules: list[PatternRule] = []
    for rules in BLIND_SPOT_RULES.values():
        all_rules.extend(rules)
    for items in EVIDENCE_ITEMS.values():
        all_rules.extend(item.rule for item in items)
    for signal_rules in PAIN_SIGNAL_RULES.values():
        all_rules.extend(signal_rules)
    for signal_rules in MOAT_SIGNAL_RULES.values():
        all_rules.extend(signal_rules)
    for rule in all_rules:
        if rule.rule_id in seen:
            raise ValueError(f"Duplicate rule_id in pattern library: {rule.rule_id}")
        seen.add(rule.rule_id)


_check_unique_ids()


def resolve_section(section_key: object) -> SectionKey | None:
    """Map a raw section identifier to a SectionKey, or None if unknown."""
    if isinstance(section_key, SectionKey):
        return section_key
    if not isinstance(section_key, str):
        return None
    try:
        return SectionKey(section_key.strip().lower())
    except ValueError:
        return None


def get_blind_spot_rules(section_key: object) -> tuple[PatternRule, ...]:
    """Blind-spot rules for a section; empty for unknown sections."""
    section = resolve_section(section_key)
    if section is None:
        return ()
    return BLIND_SPOT_RULES[section]


def get_evidence_items(section_key: object) -> tuple[EvidenceItemSpec, ...]:
    """Evidence checklist items for a section; empty for unknown sections."""
    section = resolve_section(section_key)
    if section is None:
        return ()
    return EVIDENCE_ITEMS[section]
