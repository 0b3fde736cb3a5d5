"""Evidence checklist analyzer.

Grades how much validation evidence a section's narrative cites. Each
section declares an ordered list of evidence items; every item is detected
independently and the grade is a pure function of the detected/total ratio.
"""

from __future__ import annotations

from memoscope.analysis.models import (
    EvidenceChecklistResult,
    EvidenceGrade,
    EvidenceItem,
    EvidenceReport,
    ValidationGrade,
)
from memoscope.patterns.library import get_evidence_items
from memoscope.patterns.matcher import match_rule
from memoscope.rounding import clamp, round_int
from memoscope.text.normalize import coerce_text

# Percent boundaries, highest first. Compared with integer arithmetic so that
# 9/10 lands exactly on A and 89/100 does not.
GRADE_BOUNDARIES: tuple[tuple[int, EvidenceGrade], ...] = (
    (90, EvidenceGrade.A),
    (70, EvidenceGrade.B),
    (50, EvidenceGrade.C),
)

_VALIDATION_GRADES: dict[EvidenceGrade, ValidationGrade] = {
    EvidenceGrade.A: ValidationGrade(
        grade=EvidenceGrade.A,
        label="Strong Discovery",
        description="Evidence covers nearly every validation checkpoint",
    ),
    EvidenceGrade.B: ValidationGrade(
        grade=EvidenceGrade.B,
        label="Good Progress",
        description="Most validation checkpoints are backed by evidence",
    ),
    EvidenceGrade.C: ValidationGrade(
        grade=EvidenceGrade.C,
        label="Early Discovery",
        description="Some evidence cited; key checkpoints still open",
    ),
    EvidenceGrade.D: ValidationGrade(
        grade=EvidenceGrade.D,
        label="Hypothesis Only",
        description="Claims are not yet backed by customer evidence",
    ),
}


def grade_for_counts(detected: int, total: int) -> EvidenceGrade:
    """Grade a detected/total ratio against the fixed boundaries.

    Args:
        detected: Number of detected items.
        total: Number of declared items.

    Returns:
        Evidence grade; D when total is zero.
    """
    if total <= 0:
        return EvidenceGrade.D
    for boundary, grade in GRADE_BOUNDARIES:
        if detected * 100 >= boundary * total:
            return grade
    return EvidenceGrade.D


def get_validation_grade(grade: EvidenceGrade | str) -> ValidationGrade:
    """Human-readable descriptor for an evidence grade."""
    return _VALIDATION_GRADES[EvidenceGrade(grade)]


def analyze_evidence(text: object, section_key: object) -> EvidenceChecklistResult:
    """Build the evidence checklist for one section.

    Unknown sections and sections without declared items return an empty
    result (``is_empty`` is True); callers should not render it.
    """
    specs = get_evidence_items(section_key)
    if not specs:
        return EvidenceChecklistResult(items=[], score=0, grade=EvidenceGrade.D)

    original = coerce_text(text, "evidence.analyze_evidence")
    lowered = original.lower()

    items = [
        EvidenceItem(
            key=spec.key,
            label=spec.label,
            hint=spec.hint,
            detected=match_rule(original, spec.rule, lowered=lowered) is not None,
        )
        for spec in specs
    ]
    detected = sum(1 for item in items if item.detected)
    total = len(items)

    return EvidenceChecklistResult(
        items=items,
        score=clamp(round_int(detected * 100 / total), 0, 100),
        grade=grade_for_counts(detected, total),
    )


def build_evidence_report(text: object, section_key: object) -> EvidenceReport:
    """Run the checklist and attach the grade descriptor."""
    checklist = analyze_evidence(text, section_key)
    return EvidenceReport(
        section_key=str(section_key),
        checklist=checklist,
        validation=get_validation_grade(checklist.grade),
    )
