"""Financial extraction routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from memoscope.assumptions.models import AnchoredAssumptions, CompanyDescriptor
from memoscope.assumptions.resolver import resolve_anchored_assumptions
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.financial.models import Currency, PricingMetrics

router = APIRouter(prefix="/v1/financials", tags=["Financials"])


class PricingRequest(BaseModel):
    business_model_text: str | None = None
    traction_text: str | None = None
    market_text: str | None = None
    responses: dict[str, Any] = Field(default_factory=dict)
    anchored: AnchoredAssumptions | None = Field(
        None, description="Resolved assumptions used to backfill the primary metric"
    )


class AnchoredAssumptionsRequest(BaseModel):
    responses: dict[str, Any] = Field(default_factory=dict)
    company: CompanyDescriptor = Field(default_factory=CompanyDescriptor)
    metrics: PricingMetrics | None = Field(
        None, description="Previously extracted metrics; extracted from responses when omitted"
    )
    currency: Currency | None = None


@router.post("/pricing", response_model=PricingMetrics)
def extract_pricing(body: PricingRequest) -> PricingMetrics:
    """Extract pricing metrics.

    Texts that are not given explicitly are read from the ``business_model``,
    ``traction`` and ``market`` answers of the response map.
    """
    responses = body.responses
    return extract_pricing_metrics(
        body.business_model_text
        if body.business_model_text is not None
        else responses.get("business_model"),
        body.traction_text if body.traction_text is not None else responses.get("traction"),
        responses,
        market_text=body.market_text if body.market_text is not None else responses.get("market"),
        anchored=body.anchored,
    )


@router.post("/anchored-assumptions", response_model=AnchoredAssumptions)
async def resolve_assumptions(
    body: AnchoredAssumptionsRequest, request: Request
) -> AnchoredAssumptions:
    """Resolve the anchored primary metric.

    Estimation failures never surface here: the resolver falls back to the
    stage default and records the source as ``fallback_default``.
    """
    return await resolve_anchored_assumptions(
        body.metrics,
        body.responses,
        body.currency,
        body.company,
        request.app.state.estimator,
    )
