"""Primary metric selection per business model.

Each business model anchors on exactly one headline metric. The table is
exhaustive over BusinessModelType and validated at import.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from memoscope.assumptions.models import MetricUnit, Periodicity
from memoscope.financial.models import BusinessModelType, PricingMetrics


@dataclass(frozen=True)
class PrimaryMetricSpec:
    """How to read the headline metric for one business model."""

    label: str
    periodicity: Periodicity
    unit: MetricUnit
    read: Callable[[PricingMetrics], float | None]


def _aum_fee_revenue(metrics: PricingMetrics) -> float | None:
    if metrics.aum_total is None or metrics.aum_fee_percent is None:
        return None
    return round(metrics.aum_total * metrics.aum_fee_percent / 100, 2)


def _project_value(metrics: PricingMetrics) -> float | None:
    if metrics.avg_deal_size is not None:
        return metrics.avg_deal_size
    return metrics.setup_fee


PRIMARY_METRICS: dict[BusinessModelType, PrimaryMetricSpec] = {
    BusinessModelType.SAAS: PrimaryMetricSpec(
        label="Average Monthly Revenue",
        periodicity=Periodicity.MONTHLY,
        unit=MetricUnit.CURRENCY,
        read=lambda m: m.avg_monthly_revenue,
    ),
    BusinessModelType.B2C: PrimaryMetricSpec(
        label="ARPU",
        periodicity=Periodicity.MONTHLY,
        unit=MetricUnit.CURRENCY,
        read=lambda m: m.avg_monthly_revenue,
    ),
    BusinessModelType.ENTERPRISE: PrimaryMetricSpec(
        label="ACV",
        periodicity=Periodicity.ANNUAL,
        unit=MetricUnit.CURRENCY,
        read=lambda m: m.avg_deal_size,
    ),
    BusinessModelType.MARKETPLACE: PrimaryMetricSpec(
        label="Take Rate",
        periodicity=Periodicity.PER_TRANSACTION,
        unit=MetricUnit.PERCENT,
        read=lambda m: m.transaction_fee_percent,
    ),
    BusinessModelType.AUM: PrimaryMetricSpec(
        label="Annual Fee Revenue",
        periodicity=Periodicity.ANNUAL,
        unit=MetricUnit.CURRENCY,
        read=_aum_fee_revenue,
    ),
    BusinessModelType.PROJECT: PrimaryMetricSpec(
        label="Average Project Value",
        periodicity=Periodicity.PER_TRANSACTION,
        unit=MetricUnit.CURRENCY,
        read=_project_value,
    ),
}

_missing = [m.value for m in BusinessModelType if m not in PRIMARY_METRICS]
if _missing:
    raise ValueError(f"PRIMARY_METRICS missing business models: {_missing}")


def get_primary_metric_spec(model_type: BusinessModelType | str) -> PrimaryMetricSpec:
    """Look up the primary metric for a business model.

    Raises:
        ValueError: If model_type is not a known business model.
    """
    return PRIMARY_METRICS[BusinessModelType(model_type)]


def read_primary_metric(metrics: PricingMetrics) -> float | None:
    """Extracted primary metric value, or None when the text did not support it."""
    return get_primary_metric_spec(metrics.business_model_type).read(metrics)
