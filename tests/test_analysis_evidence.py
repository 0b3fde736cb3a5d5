"""Tests for the evidence checklist analyzer."""

from __future__ import annotations

import pytest

from memoscope.analysis.evidence import (
    analyze_evidence,
    build_evidence_report,
    get_validation_grade,
    grade_for_counts,
)
from memoscope.analysis.models import EvidenceGrade
from memoscope.patterns.models import SectionKey


class TestGradeForCounts:
    @pytest.mark.parametrize(
        ("detected", "total", "expected"),
        [
            (9, 10, EvidenceGrade.A),
            (89, 100, EvidenceGrade.B),
            (7, 10, EvidenceGrade.B),
            (69, 100, EvidenceGrade.C),
            (1, 2, EvidenceGrade.C),
            (49, 100, EvidenceGrade.D),
            (0, 5, EvidenceGrade.D),
            (0, 0, EvidenceGrade.D),
        ],
    )
    def test_boundaries(self, detected: int, total: int, expected: EvidenceGrade) -> None:
        assert grade_for_counts(detected, total) is expected


class TestAnalyzeEvidence:
    def test_problem_section_fully_covered(self) -> None:
        result = analyze_evidence(
            "We interviewed 30 customers who lose 10 hours weekly using a spreadsheet workaround.",
            "problem",
        )
        assert [item.key for item in result.items] == [
            "interviews",
            "pain_quantified",
            "frequency",
            "workarounds",
        ]
        assert all(item.detected for item in result.items)
        assert result.score == 100
        assert result.grade is EvidenceGrade.A

    def test_half_covered_is_c(self) -> None:
        result = analyze_evidence("We talked to operators who use Excel.", SectionKey.PROBLEM)
        detected = {item.key for item in result.items if item.detected}
        assert detected == {"interviews", "workarounds"}
        assert result.score == 50
        assert result.grade is EvidenceGrade.C

    def test_single_item_is_d(self) -> None:
        result = analyze_evidence("We interviewed 12 founders.", "problem")
        assert result.detected_count == 1
        assert result.score == 25
        assert result.grade is EvidenceGrade.D

    def test_pain_quantified_matches_currency_amounts(self) -> None:
        result = analyze_evidence("Each error costs them €5k", "problem")
        by_key = {item.key: item.detected for item in result.items}
        assert by_key["pain_quantified"] is True

    def test_items_keep_label_and_hint(self) -> None:
        item = analyze_evidence("", "team").items[0]
        assert item.label == "Founder-market fit explained"
        assert item.hint
        assert item.detected is False

    def test_unknown_section_is_empty(self) -> None:
        result = analyze_evidence("We interviewed 30 customers", "pricing_page")
        assert result.is_empty
        assert result.items == []
        assert result.score == 0
        assert result.grade is EvidenceGrade.D

    def test_empty_flag_is_serialized(self) -> None:
        empty = analyze_evidence("", "pricing_page").model_dump(mode="json")
        assert empty["is_empty"] is True
        filled = analyze_evidence("", "problem").model_dump(mode="json")
        assert filled["is_empty"] is False

    def test_non_string_text(self) -> None:
        result = analyze_evidence(None, "solution")
        assert result.detected_count == 0
        assert result.grade is EvidenceGrade.D


class TestValidationGrade:
    def test_labels(self) -> None:
        assert get_validation_grade(EvidenceGrade.A).label == "Strong Discovery"
        assert get_validation_grade("B").label == "Good Progress"
        assert get_validation_grade("C").label == "Early Discovery"
        assert get_validation_grade("D").label == "Hypothesis Only"

    def test_unknown_grade_raises(self) -> None:
        with pytest.raises(ValueError):
            get_validation_grade("E")


class TestBuildEvidenceReport:
    def test_report_carries_section_and_validation(self) -> None:
        report = build_evidence_report("We interviewed 12 founders.", SectionKey.PROBLEM)
        assert report.section_key == "problem"
        assert report.checklist.grade is EvidenceGrade.D
        assert report.validation.label == "Hypothesis Only"
