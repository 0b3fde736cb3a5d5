"""Pain point analyzer.

Scores a problem narrative on four dimensions: urgency, frequency,
willingness to pay and poor alternatives. Each dimension starts from a
baseline and gains a fixed increment for every distinct signal group found
in the text, clamped to [0, 10]. The overall score is the mean dimension
score scaled to 0-100.

Pure and deterministic: identical text always yields identical output.
"""

from __future__ import annotations

from dataclasses import dataclass

from memoscope.analysis.models import (
    DimensionScore,
    HeatLevel,
    HeatLevelInfo,
    PainAnalysis,
    PainReport,
)
from memoscope.patterns.library import PAIN_SIGNAL_RULES
from memoscope.patterns.matcher import match_rule
from memoscope.patterns.models import PainDimension
from memoscope.rounding import clamp, round_int
from memoscope.text.normalize import normalize

PAIN_BASELINE = 3
PAIN_INCREMENT = 2
DIMENSION_MAX = 10
SUGGESTION_CUTOFF = 6
MAX_SUGGESTIONS = 3


@dataclass(frozen=True)
class _DimensionProfile:
    labels: tuple[str, str, str]
    found_evidence: str
    missing_evidence: str
    tip: str


_PROFILES: dict[PainDimension, _DimensionProfile] = {
    PainDimension.URGENCY: _DimensionProfile(
        labels=("High", "Medium", "Low"),
        found_evidence="Found {count} urgency signals",
        missing_evidence="Limited urgency signals detected",
        tip="Add specific examples of costs/consequences of not solving this problem now",
    ),
    PainDimension.FREQUENCY: _DimensionProfile(
        labels=("High", "Medium", "Low"),
        found_evidence="Found {count} frequency indicators",
        missing_evidence="Problem frequency unclear",
        tip="Clarify how often users encounter this pain point (daily? weekly?)",
    ),
    PainDimension.WILLINGNESS: _DimensionProfile(
        labels=("Strong", "Moderate", "Weak"),
        found_evidence="Found {count} budget/ROI references",
        missing_evidence="Willingness to pay not demonstrated",
        tip="Include evidence of existing budget spend on alternatives or ROI expectations",
    ),
    PainDimension.ALTERNATIVES: _DimensionProfile(
        labels=("Poor", "Mediocre", "Good"),
        found_evidence="Found {count} workaround indicators",
        missing_evidence="Current alternatives unclear",
        tip="Describe current workarounds and why they're inadequate",
    ),
}

# Ordered highest first; the first threshold the score reaches wins.
HEAT_THRESHOLDS: tuple[tuple[int, HeatLevelInfo], ...] = (
    (
        80,
        HeatLevelInfo(
            level=HeatLevel.HAIR_ON_FIRE,
            label="HAIR ON FIRE",
            description="Customers are desperate for a solution",
        ),
    ),
    (
        60,
        HeatLevelInfo(
            level=HeatLevel.BURNING,
            label="BURNING",
            description="Strong pain signal - customers actively seeking solutions",
        ),
    ),
    (
        40,
        HeatLevelInfo(
            level=HeatLevel.WARM,
            label="WARM",
            description="Pain exists but may not drive urgent action",
        ),
    ),
)

_LUKEWARM = HeatLevelInfo(
    level=HeatLevel.LUKEWARM,
    label="LUKEWARM",
    description="Weak pain signal - customers might tolerate status quo",
)


def _tier_label(score: int, labels: tuple[str, str, str]) -> str:
    if score >= 7:
        return labels[0]
    if score >= 4:
        return labels[1]
    return labels[2]


def _score_dimension(dimension: PainDimension, text: str) -> DimensionScore:
    signal_count = sum(
        1 for rule in PAIN_SIGNAL_RULES[dimension] if match_rule(text, rule, lowered=text)
    )
    score = clamp(PAIN_BASELINE + signal_count * PAIN_INCREMENT, 0, DIMENSION_MAX)
    profile = _PROFILES[dimension]
    evidence = (
        profile.found_evidence.format(count=signal_count)
        if signal_count > 0
        else profile.missing_evidence
    )
    return DimensionScore(
        name=dimension,
        score=score,
        label=_tier_label(score, profile.labels),
        evidence=evidence,
        signal_count=signal_count,
    )


def analyze_pain_points(text: object) -> PainAnalysis:
    """Score problem-narrative intensity.

    Args:
        text: Problem narrative. Non-string input is coerced, never rejected.

    Returns:
        PainAnalysis with four dimension scores and an overall 0-100 score.
    """
    lowered = normalize(text, "pain.analyze_pain_points")
    scores = {dimension: _score_dimension(dimension, lowered) for dimension in PainDimension}

    mean = sum(s.score for s in scores.values()) / len(scores)
    overall = clamp(round_int(mean * 10), 0, 100)

    return PainAnalysis(
        urgency=scores[PainDimension.URGENCY],
        frequency=scores[PainDimension.FREQUENCY],
        willingness=scores[PainDimension.WILLINGNESS],
        alternatives=scores[PainDimension.ALTERNATIVES],
        overall_score=overall,
    )


def get_heat_level(overall_score: int) -> HeatLevelInfo:
    """Map an overall pain score to its heat level."""
    for threshold, info in HEAT_THRESHOLDS:
        if overall_score >= threshold:
            return info
    return _LUKEWARM


def get_pain_suggestions(analysis: PainAnalysis) -> list[str]:
    """Improvement tips for weak dimensions, in declaration order, capped."""
    suggestions = [
        _PROFILES[dim.name].tip for dim in analysis.dimensions() if dim.score < SUGGESTION_CUTOFF
    ]
    return suggestions[:MAX_SUGGESTIONS]


def build_pain_report(text: object) -> PainReport:
    """Run the analyzer and attach heat level and suggestions."""
    analysis = analyze_pain_points(text)
    return PainReport(
        analysis=analysis,
        heat=get_heat_level(analysis.overall_score),
        suggestions=get_pain_suggestions(analysis),
    )
