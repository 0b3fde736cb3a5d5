"""Competitive moat scoring.

Reads a competitive-moat narrative and scores five defensibility dimensions
by keyword density. Scores feed the memo's moat scorecard.
"""

from __future__ import annotations

from decimal import Decimal

from memoscope.analysis.models import (
    EvidenceGrade,
    MoatDimensionScore,
    MoatGrade,
    MoatReport,
    MoatScores,
)
from memoscope.patterns.library import MOAT_SIGNAL_RULES
from memoscope.patterns.matcher import match_rule
from memoscope.patterns.models import MoatDimension
from memoscope.rounding import clamp, round_int
from memoscope.text.normalize import normalize

NOT_MENTIONED = "Not mentioned"
SNIPPET_RADIUS = 30
SUGGESTION_CUTOFF = 5
MAX_SUGGESTIONS = 3

MOAT_WEIGHTS: dict[MoatDimension, Decimal] = {
    MoatDimension.NETWORK_EFFECTS: Decimal("0.2"),
    MoatDimension.SWITCHING_COSTS: Decimal("0.2"),
    MoatDimension.DATA_ADVANTAGE: Decimal("0.2"),
    MoatDimension.BRAND_TRUST: Decimal("0.2"),
    MoatDimension.COST_ADVANTAGE: Decimal("0.2"),
}

if sum(MOAT_WEIGHTS.values()) != Decimal("1"):
    raise ValueError("MOAT_WEIGHTS must sum to 1")

MOAT_GRADES: tuple[tuple[int, MoatGrade], ...] = (
    (70, MoatGrade(grade=EvidenceGrade.A, label="STRONG")),
    (50, MoatGrade(grade=EvidenceGrade.B, label="MODERATE")),
    (30, MoatGrade(grade=EvidenceGrade.C, label="DEVELOPING")),
)
_WEAK = MoatGrade(grade=EvidenceGrade.D, label="WEAK")

_SUGGESTIONS: dict[MoatDimension, str] = {
    MoatDimension.NETWORK_EFFECTS: (
        "Consider building community features or marketplace dynamics to create network effects"
    ),
    MoatDimension.SWITCHING_COSTS: (
        "Deepen integrations with customer workflows to increase switching costs"
    ),
    MoatDimension.DATA_ADVANTAGE: (
        "Leverage customer data to build proprietary insights or AI capabilities"
    ),
    MoatDimension.BRAND_TRUST: "Pursue enterprise certifications (SOC2, ISO) to build trust moat",
    MoatDimension.COST_ADVANTAGE: (
        "Focus on operational efficiency or proprietary tech to create cost advantages"
    ),
}


def _snippet(text: str, keyword: str) -> str:
    idx = text.find(keyword)
    start = max(0, idx - SNIPPET_RADIUS)
    end = min(len(text), idx + len(keyword) + SNIPPET_RADIUS)
    return f'"...{text[start:end].strip()}..."'


def _score_dimension(dimension: MoatDimension, text: str) -> MoatDimensionScore:
    hits = [
        hit.matched_text
        for rule in MOAT_SIGNAL_RULES[dimension]
        if (hit := match_rule(text, rule, lowered=text)) is not None and hit.matched_text
    ]
    if not hits:
        return MoatDimensionScore(dimension=dimension, score=0, evidence=NOT_MENTIONED)
    return MoatDimensionScore(
        dimension=dimension,
        score=clamp(len(hits) * 3 + 2, 0, 10),
        evidence=_snippet(text, hits[0].lower()),
    )


def extract_moat_scores(text: object) -> MoatScores:
    """Score the five moat dimensions.

    Each keyword hit adds weight to its dimension (min(10, hits * 3 + 2));
    a dimension without hits scores 0 with evidence "Not mentioned". The
    overall score is the weighted sum scaled to 0-100.
    """
    lowered = normalize(text, "moat.extract_moat_scores")
    scores = {dimension: _score_dimension(dimension, lowered) for dimension in MoatDimension}

    weighted = sum(
        (Decimal(scores[d].score) * weight for d, weight in MOAT_WEIGHTS.items()),
        Decimal(0),
    )
    overall = clamp(round_int(weighted * 10), 0, 100)

    return MoatScores(
        network_effects=scores[MoatDimension.NETWORK_EFFECTS],
        switching_costs=scores[MoatDimension.SWITCHING_COSTS],
        data_advantage=scores[MoatDimension.DATA_ADVANTAGE],
        brand_trust=scores[MoatDimension.BRAND_TRUST],
        cost_advantage=scores[MoatDimension.COST_ADVANTAGE],
        overall_score=overall,
    )


def get_moat_grade(overall_score: int) -> MoatGrade:
    for threshold, grade in MOAT_GRADES:
        if overall_score >= threshold:
            return grade
    return _WEAK


def get_moat_suggestions(scores: MoatScores) -> list[str]:
    """Tips for dimensions scoring below the cutoff, in declaration order, capped."""
    suggestions = [
        _SUGGESTIONS[dim.dimension] for dim in scores.dimensions() if dim.score < SUGGESTION_CUTOFF
    ]
    return suggestions[:MAX_SUGGESTIONS]


def build_moat_report(text: object) -> MoatReport:
    scores = extract_moat_scores(text)
    return MoatReport(
        scores=scores,
        grade=get_moat_grade(scores.overall_score),
        suggestions=get_moat_suggestions(scores),
    )
