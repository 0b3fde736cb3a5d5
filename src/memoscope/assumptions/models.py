"""Anchored assumption models.

An anchored assumption is the single headline business metric for a
company. Its value always travels with its provenance (``source``) so
investor-facing output can say whether a figure came from the founder,
from an estimate, or from a static default.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from memoscope.financial.models import BusinessModelType, Currency


class AssumptionSource(StrEnum):
    """Provenance of an anchored primary metric value."""

    USER_PROVIDED = "user_provided"
    AI_ESTIMATED = "ai_estimated"
    FALLBACK_DEFAULT = "fallback_default"


class ResolutionState(StrEnum):
    """Resolver state machine states."""

    NOT_RESOLVED = "not_resolved"
    EXTRACTED = "extracted"
    ESTIMATING = "estimating"
    ESTIMATED = "estimated"
    FALLEN_BACK = "fallen_back"


class Periodicity(StrEnum):
    MONTHLY = "monthly"
    ANNUAL = "annual"
    PER_TRANSACTION = "per_transaction"


class MetricUnit(StrEnum):
    CURRENCY = "currency"
    PERCENT = "percent"


class EstimateConfidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Stage(StrEnum):
    """Funding stage used to pick static default values."""

    PRE_SEED = "PRE_SEED"
    SEED = "SEED"
    SERIES_A = "SERIES_A"
    SERIES_B = "SERIES_B"
    GROWTH = "GROWTH"

    @classmethod
    def parse(cls, value: object) -> Stage | None:
        """Parse a free-form stage ("pre-seed", "Series A", "PRE_SEED").

        Returns None for unknown or missing stages.
        """
        if isinstance(value, Stage):
            return value
        if not isinstance(value, str):
            return None
        key = re.sub(r"[^a-z0-9]+", "_", value.strip().lower()).strip("_")
        return _STAGE_ALIASES.get(key)


_STAGE_ALIASES: dict[str, Stage] = {
    "pre_seed": Stage.PRE_SEED,
    "preseed": Stage.PRE_SEED,
    "idea": Stage.PRE_SEED,
    "seed": Stage.SEED,
    "series_a": Stage.SERIES_A,
    "seriesa": Stage.SERIES_A,
    "series_b": Stage.SERIES_B,
    "seriesb": Stage.SERIES_B,
    "growth": Stage.GROWTH,
    "series_c": Stage.GROWTH,
    "late": Stage.GROWTH,
}


class CompanyDescriptor(BaseModel):
    """Minimal company context passed to the estimation collaborator."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    category: str = ""
    stage: str = ""


class AnchoredAssumptions(BaseModel):
    """The resolved headline metric with its provenance."""

    model_config = ConfigDict(frozen=True)

    primary_metric_label: str
    primary_metric_value: float | None = Field(None, ge=0)
    currency: Currency = Currency.USD
    source: AssumptionSource
    business_model_type: BusinessModelType
    periodicity: Periodicity
    unit: MetricUnit
    estimate_confidence: EstimateConfidence | None = None
    estimate_reasoning: str | None = None


class EstimateRequest(BaseModel):
    """Request sent to the estimation collaborator."""

    model_config = ConfigDict(frozen=True)

    metric_label: str
    business_model_type: BusinessModelType
    currency: Currency
    company: CompanyDescriptor
    responses: dict[str, str] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, object]:
        """camelCase JSON body expected by the estimation service."""
        return {
            "companyName": self.company.name,
            "category": self.company.category,
            "stage": self.company.stage,
            "businessModelType": self.business_model_type.value,
            "currency": self.currency.value,
            "primaryMetricLabel": self.metric_label,
            "icpDescription": self.responses.get("market", ""),
            "pricingHints": self.responses.get("business_model", ""),
            "responses": dict(self.responses),
        }


class EstimateResponse(BaseModel):
    """Successful estimate. The value must be a positive number."""

    model_config = ConfigDict(frozen=True)

    estimated_value: float = Field(..., gt=0)
    confidence: EstimateConfidence | None = None
    reasoning: str | None = None
