"""Narrative analysis routes.

Each route wraps one analyzer. Section keys are validated against the
known questionnaire sections so a typo surfaces as a 400 instead of an
empty result.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from memoscope.analysis.blind_spots import detect_blind_spots
from memoscope.analysis.evidence import build_evidence_report
from memoscope.analysis.models import BlindSpot, EvidenceReport, MoatReport, PainReport
from memoscope.analysis.moat import build_moat_report
from memoscope.analysis.pain import build_pain_report
from memoscope.api.errors import MemoscopeHttpError
from memoscope.financial.models import UnitEconomicsReport
from memoscope.financial.unit_economics import build_unit_economics_report
from memoscope.patterns.library import resolve_section
from memoscope.report import NarrativeReport, analyze_responses

router = APIRouter(prefix="/v1/analysis", tags=["Analysis"])


class TextRequest(BaseModel):
    text: str = ""


class SectionTextRequest(BaseModel):
    section_key: str = Field(..., min_length=1)
    text: str = ""


class BlindSpotRequest(SectionTextRequest):
    dismissed_messages: list[str] = Field(default_factory=list)


class BlindSpotResponse(BaseModel):
    section_key: str
    blind_spots: list[BlindSpot]


class UnitEconomicsRequest(BaseModel):
    business_model_text: str = ""
    traction_text: str = ""
    structured: dict[str, Any] | None = Field(
        None, description="Structured values that take precedence over text extraction"
    )


class ReportRequest(BaseModel):
    responses: dict[str, Any]
    dismissed_messages: list[str] = Field(default_factory=list)


def _require_section(section_key: str) -> None:
    if resolve_section(section_key) is None:
        raise MemoscopeHttpError(
            status_code=400,
            code="INVALID_SECTION",
            message=f"Unknown section: '{section_key}'",
            details={"section_key": section_key},
        )


@router.post("/pain", response_model=PainReport)
def analyze_pain(body: TextRequest) -> PainReport:
    return build_pain_report(body.text)


@router.post("/evidence", response_model=EvidenceReport)
def analyze_evidence(body: SectionTextRequest) -> EvidenceReport:
    _require_section(body.section_key)
    return build_evidence_report(body.text, body.section_key)


@router.post("/blind-spots", response_model=BlindSpotResponse)
def analyze_blind_spots(body: BlindSpotRequest) -> BlindSpotResponse:
    _require_section(body.section_key)
    spots = detect_blind_spots(body.text, body.section_key, body.dismissed_messages)
    return BlindSpotResponse(section_key=body.section_key, blind_spots=spots)


@router.post("/moat", response_model=MoatReport)
def analyze_moat(body: TextRequest) -> MoatReport:
    return build_moat_report(body.text)


@router.post("/unit-economics", response_model=UnitEconomicsReport)
def analyze_unit_economics(body: UnitEconomicsRequest) -> UnitEconomicsReport:
    return build_unit_economics_report(
        body.business_model_text, body.traction_text, body.structured
    )


@router.post("/report", response_model=NarrativeReport)
def analyze_report(body: ReportRequest) -> NarrativeReport:
    """Run every synchronous analyzer over a full response map."""
    return analyze_responses(body.responses, frozenset(body.dismissed_messages))
