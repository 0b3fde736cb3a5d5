"""Financial metrics extraction: currency, business model, pricing, unit economics."""

from memoscope.financial.business_model import CLASSIFICATION_TABLE, classify_business_model
from memoscope.financial.currency import CURRENCY_MARKERS, detect_currency
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.financial.models import (
    BusinessModelType,
    Currency,
    DataSource,
    HealthStatus,
    MetricHealth,
    PricingMetrics,
    UnitEconomics,
    UnitEconomicsReport,
)
from memoscope.financial.numbers import NumberCandidate, NumberKind, parse_number, scan_numbers
from memoscope.financial.scan import build_scan_text
from memoscope.financial.unit_economics import (
    assess_health,
    build_unit_economics_report,
    extract_unit_economics,
    get_optimization_suggestions,
    overall_health,
)

__all__ = [
    "CLASSIFICATION_TABLE",
    "CURRENCY_MARKERS",
    "BusinessModelType",
    "Currency",
    "DataSource",
    "HealthStatus",
    "MetricHealth",
    "NumberCandidate",
    "NumberKind",
    "PricingMetrics",
    "UnitEconomics",
    "UnitEconomicsReport",
    "assess_health",
    "build_scan_text",
    "build_unit_economics_report",
    "classify_business_model",
    "detect_currency",
    "extract_pricing_metrics",
    "extract_unit_economics",
    "get_optimization_suggestions",
    "overall_health",
    "parse_number",
    "scan_numbers",
]
