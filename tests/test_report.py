"""Tests for the one-shot narrative report."""

from __future__ import annotations

from memoscope.analysis.models import EvidenceGrade
from memoscope.financial.models import BusinessModelType
from memoscope.report import analyze_responses

RESPONSES = {
    "problem": "Everyone needs this, we believe it will work",
    "business_model": "We charge $49 per month",
    "traction": "120 paying customers",
    "competitive_moat": "Deep integration into customer workflow creates switching costs.",
}


class TestAnalyzeResponses:
    def test_sections_present_get_evidence(self) -> None:
        report = analyze_responses(RESPONSES)
        assert set(report.evidence) == {"problem", "business_model"}
        assert report.evidence["problem"].checklist.grade is EvidenceGrade.D

    def test_only_sections_with_blind_spots_are_listed(self) -> None:
        report = analyze_responses(RESPONSES)
        assert list(report.blind_spots) == ["problem"]
        assert len(report.blind_spots["problem"]) == 2

    def test_dismissed_messages_apply(self) -> None:
        report = analyze_responses(RESPONSES, frozenset({"Sounds like an assumption"}))
        assert [s.rule_id for s in report.blind_spots["problem"]] == [
            "problem.overgeneralization"
        ]

    def test_pain_moat_and_pricing(self) -> None:
        report = analyze_responses(RESPONSES)
        assert report.pain.analysis.overall_score == 30
        assert report.moat.scores.switching_costs.score == 10
        assert report.moat.scores.overall_score == 20
        assert report.moat.grade.label == "WEAK"
        assert report.pricing.business_model_type is BusinessModelType.SAAS
        assert report.pricing.avg_monthly_revenue == 49
        assert report.pricing.current_customers == 120
        assert report.unit_economics.overall_health == "Insufficient Data"

    def test_moat_key_alias(self) -> None:
        report = analyze_responses({"moat": "We hold a patent."})
        assert report.moat.scores.cost_advantage.score == 5

    def test_empty_and_odd_values(self) -> None:
        report = analyze_responses({"problem": None, "traction": 42})
        assert report.blind_spots == {}
        assert report.pain.analysis.overall_score == 30
        assert set(report.evidence) == {"problem"}
