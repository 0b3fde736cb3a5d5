"""Narrative analyzers.

Pure, synchronous scorers over founder-written text:
- Pain point intensity (four dimensions, heat level, tips)
- Evidence checklist completeness per section (A-D grade)
- Blind-spot detection (risky language, message-keyed dismissal)
- Competitive moat scoring (five dimensions, grade, tips)
"""

from memoscope.analysis.blind_spots import detect_blind_spots
from memoscope.analysis.evidence import (
    analyze_evidence,
    build_evidence_report,
    get_validation_grade,
    grade_for_counts,
)
from memoscope.analysis.models import (
    BlindSpot,
    DimensionScore,
    EvidenceChecklistResult,
    EvidenceGrade,
    EvidenceItem,
    EvidenceReport,
    HeatLevel,
    HeatLevelInfo,
    MoatDimensionScore,
    MoatGrade,
    MoatReport,
    MoatScores,
    PainAnalysis,
    PainReport,
    ValidationGrade,
)
from memoscope.analysis.moat import (
    build_moat_report,
    extract_moat_scores,
    get_moat_grade,
    get_moat_suggestions,
)
from memoscope.analysis.pain import (
    analyze_pain_points,
    build_pain_report,
    get_heat_level,
    get_pain_suggestions,
)

__all__ = [
    "BlindSpot",
    "DimensionScore",
    "EvidenceChecklistResult",
    "EvidenceGrade",
    "EvidenceItem",
    "EvidenceReport",
    "HeatLevel",
    "HeatLevelInfo",
    "MoatDimensionScore",
    "MoatGrade",
    "MoatReport",
    "MoatScores",
    "PainAnalysis",
    "PainReport",
    "ValidationGrade",
    "analyze_evidence",
    "analyze_pain_points",
    "build_evidence_report",
    "build_moat_report",
    "build_pain_report",
    "detect_blind_spots",
    "extract_moat_scores",
    "get_heat_level",
    "get_moat_grade",
    "get_moat_suggestions",
    "get_pain_suggestions",
    "get_validation_grade",
    "grade_for_counts",
]
