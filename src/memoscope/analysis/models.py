"""Narrative analysis result models.

Records are created fresh on every analyzer call and never stored by the
core. All numeric bounds are enforced by pydantic field constraints.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from memoscope.patterns.models import BlindSpotType, MoatDimension, PainDimension, Severity


class HeatLevel(StrEnum):
    """Problem-intensity bucket derived from the overall pain score."""

    HAIR_ON_FIRE = "HAIR_ON_FIRE"
    BURNING = "BURNING"
    WARM = "WARM"
    LUKEWARM = "LUKEWARM"


class EvidenceGrade(StrEnum):
    """Evidence completeness grade."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class DimensionScore(BaseModel):
    """Score for a single pain dimension."""

    model_config = ConfigDict(frozen=True)

    name: PainDimension
    score: int = Field(..., ge=0, le=10)
    label: str = Field(..., description="Qualitative tier for the score")
    evidence: str | None = None
    signal_count: int = Field(0, ge=0)


class PainAnalysis(BaseModel):
    """Problem-narrative intensity across four dimensions."""

    model_config = ConfigDict(frozen=True)

    urgency: DimensionScore
    frequency: DimensionScore
    willingness: DimensionScore
    alternatives: DimensionScore
    overall_score: int = Field(..., ge=0, le=100)

    def dimensions(self) -> list[DimensionScore]:
        """Dimension scores in declaration order."""
        return [self.urgency, self.frequency, self.willingness, self.alternatives]


class HeatLevelInfo(BaseModel):
    """Heat level label with display description."""

    model_config = ConfigDict(frozen=True)

    level: HeatLevel
    label: str
    description: str


class PainReport(BaseModel):
    """Pain analysis bundled with heat level and improvement tips."""

    model_config = ConfigDict(frozen=True)

    analysis: PainAnalysis
    heat: HeatLevelInfo
    suggestions: list[str]


class EvidenceItem(BaseModel):
    """One checklist item and whether the narrative covers it."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    hint: str
    detected: bool


class EvidenceChecklistResult(BaseModel):
    """Evidence checklist for one section."""

    model_config = ConfigDict(frozen=True)

    items: list[EvidenceItem]
    score: int = Field(..., ge=0, le=100, description="Detected percentage, rounded half-up")
    grade: EvidenceGrade

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        """True when the section declares no items; callers should not render it."""
        return not self.items

    @property
    def detected_count(self) -> int:
        return sum(1 for item in self.items if item.detected)


class ValidationGrade(BaseModel):
    """Human-readable descriptor for an evidence grade."""

    model_config = ConfigDict(frozen=True)

    grade: EvidenceGrade
    label: str
    description: str


class BlindSpot(BaseModel):
    """A risky-language warning raised by a blind-spot rule."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    type: BlindSpotType
    severity: Severity
    message: str
    suggestion: str
    matched_text: str | None = None


class MoatDimensionScore(BaseModel):
    """Score for one defensibility dimension."""

    model_config = ConfigDict(frozen=True)

    dimension: MoatDimension
    score: int = Field(..., ge=0, le=10)
    evidence: str


class MoatScores(BaseModel):
    """Five defensibility dimensions plus a weighted overall score (0-100)."""

    model_config = ConfigDict(frozen=True)

    network_effects: MoatDimensionScore
    switching_costs: MoatDimensionScore
    data_advantage: MoatDimensionScore
    brand_trust: MoatDimensionScore
    cost_advantage: MoatDimensionScore
    overall_score: int = Field(..., ge=0, le=100)

    def dimensions(self) -> list[MoatDimensionScore]:
        """Dimension scores in declaration order."""
        return [
            self.network_effects,
            self.switching_costs,
            self.data_advantage,
            self.brand_trust,
            self.cost_advantage,
        ]


class MoatGrade(BaseModel):
    """Overall defensibility grade."""

    model_config = ConfigDict(frozen=True)

    grade: EvidenceGrade
    label: str


class MoatReport(BaseModel):
    """Moat scores bundled with grade and improvement tips."""

    model_config = ConfigDict(frozen=True)

    scores: MoatScores
    grade: MoatGrade
    suggestions: list[str]


class EvidenceReport(BaseModel):
    """Evidence checklist bundled with its grade descriptor."""

    model_config = ConfigDict(frozen=True)

    section_key: str
    checklist: EvidenceChecklistResult
    validation: ValidationGrade
