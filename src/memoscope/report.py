"""One-shot narrative report over a full response map.

Runs every synchronous analyzer against the questionnaire answers and
bundles the results. The anchored assumption resolver is asynchronous and
is not part of this report; see memoscope.assumptions.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from memoscope.analysis.blind_spots import detect_blind_spots
from memoscope.analysis.evidence import build_evidence_report
from memoscope.analysis.models import BlindSpot, EvidenceReport, MoatReport, PainReport
from memoscope.analysis.moat import build_moat_report
from memoscope.analysis.pain import build_pain_report
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.financial.models import PricingMetrics, UnitEconomicsReport
from memoscope.financial.unit_economics import build_unit_economics_report
from memoscope.patterns.models import SectionKey
from memoscope.text.normalize import coerce_text

PROBLEM_KEY = SectionKey.PROBLEM.value
BUSINESS_MODEL_KEY = SectionKey.BUSINESS_MODEL.value
MARKET_KEY = SectionKey.MARKET.value
TRACTION_KEY = "traction"
MOAT_KEYS = ("competitive_moat", "moat")


class NarrativeReport(BaseModel):
    """Every synchronous assessment for one company's answers."""

    model_config = ConfigDict(frozen=True)

    pain: PainReport
    evidence: dict[str, EvidenceReport] = Field(
        default_factory=dict, description="Checklists for sections present in the answers"
    )
    blind_spots: dict[str, list[BlindSpot]] = Field(
        default_factory=dict, description="Only sections with at least one blind spot"
    )
    moat: MoatReport
    unit_economics: UnitEconomicsReport
    pricing: PricingMetrics


def analyze_responses(
    responses: Mapping[str, object],
    dismissed_messages: frozenset[str] = frozenset(),
) -> NarrativeReport:
    """Analyze a response map keyed by section identifier.

    Args:
        responses: Section key -> answer text. Unknown keys are scanned by
            the financial extractor but have no checklist or rules.
        dismissed_messages: Blind-spot messages to suppress.

    Returns:
        NarrativeReport. Never raises for any answer content.
    """
    answers = {
        str(key): coerce_text(value, "report.analyze_responses")
        for key, value in sorted(responses.items(), key=lambda item: str(item[0]))
    }

    evidence: dict[str, EvidenceReport] = {}
    blind_spots: dict[str, list[BlindSpot]] = {}
    for section in SectionKey:
        if section.value not in answers:
            continue
        text = answers[section.value]
        evidence[section.value] = build_evidence_report(text, section)
        spots = detect_blind_spots(text, section, dismissed_messages)
        if spots:
            blind_spots[section.value] = spots

    moat_text = next((answers[key] for key in MOAT_KEYS if key in answers), "")
    business_model_text = answers.get(BUSINESS_MODEL_KEY, "")
    traction_text = answers.get(TRACTION_KEY, "")

    return NarrativeReport(
        pain=build_pain_report(answers.get(PROBLEM_KEY, "")),
        evidence=evidence,
        blind_spots=blind_spots,
        moat=build_moat_report(moat_text),
        unit_economics=build_unit_economics_report(business_model_text, traction_text),
        pricing=extract_pricing_metrics(
            business_model_text,
            traction_text,
            answers,
            market_text=answers.get(MARKET_KEY),
        ),
    )
