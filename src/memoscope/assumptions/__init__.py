"""Anchored assumptions: primary metric selection with provenance-tracked fallback."""

from memoscope.assumptions.defaults import STAGE_DEFAULTS, get_default_value
from memoscope.assumptions.estimator import (
    EstimationError,
    HttpMetricEstimator,
    MetricEstimator,
    StaticMetricEstimator,
    UnavailableMetricEstimator,
)
from memoscope.assumptions.models import (
    AnchoredAssumptions,
    AssumptionSource,
    CompanyDescriptor,
    EstimateConfidence,
    EstimateRequest,
    EstimateResponse,
    MetricUnit,
    Periodicity,
    ResolutionState,
    Stage,
)
from memoscope.assumptions.primary_metric import (
    PRIMARY_METRICS,
    PrimaryMetricSpec,
    get_primary_metric_spec,
    read_primary_metric,
)
from memoscope.assumptions.resolver import ResolutionTrace, resolve_anchored_assumptions

__all__ = [
    "PRIMARY_METRICS",
    "STAGE_DEFAULTS",
    "AnchoredAssumptions",
    "AssumptionSource",
    "CompanyDescriptor",
    "EstimateConfidence",
    "EstimateRequest",
    "EstimateResponse",
    "EstimationError",
    "HttpMetricEstimator",
    "MetricEstimator",
    "MetricUnit",
    "Periodicity",
    "PrimaryMetricSpec",
    "ResolutionState",
    "ResolutionTrace",
    "Stage",
    "StaticMetricEstimator",
    "UnavailableMetricEstimator",
    "get_default_value",
    "get_primary_metric_spec",
    "read_primary_metric",
    "resolve_anchored_assumptions",
]
