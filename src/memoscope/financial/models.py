"""Financial extraction models.

PricingMetrics and UnitEconomics are partially populated: a field
the text does not support stays None. None means "unknown"; 0 means a known
zero.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Currency(StrEnum):
    """Supported ISO currency codes."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    SEK = "SEK"
    NOK = "NOK"
    DKK = "DKK"


class BusinessModelType(StrEnum):
    """Business model classification labels (exactly one per company)."""

    B2C = "b2c"
    SAAS = "saas"
    ENTERPRISE = "enterprise"
    MARKETPLACE = "marketplace"
    AUM = "aum"
    PROJECT = "project"


class DataSource(StrEnum):
    """Where a PricingMetrics record's figures came from."""

    TEXT_EXTRACTION = "text_extraction"
    ANCHORED_ASSUMPTION = "anchored_assumption"
    NONE = "none"


class HealthStatus(StrEnum):
    """Unit economics metric health."""

    HEALTHY = "healthy"
    CAUTION = "caution"
    CONCERN = "concern"
    UNKNOWN = "unknown"


# Headline phrase per model. Each phrase classifies back to its own label.
_SUMMARY_HEADLINES: dict[BusinessModelType, str] = {
    BusinessModelType.AUM: "fees on assets under management",
    BusinessModelType.PROJECT: "project-based fees",
    BusinessModelType.MARKETPLACE: "marketplace take rate",
    BusinessModelType.ENTERPRISE: "enterprise annual contract value",
    BusinessModelType.B2C: "consumer per-user pricing",
    BusinessModelType.SAAS: "recurring subscription revenue",
}

# Field labels are chosen to avoid every business-model trigger phrase.
_SUMMARY_FIELDS: tuple[tuple[str, str], ...] = (
    ("avg_monthly_revenue", "Average monthly price"),
    ("current_customers", "Paying customers"),
    ("current_mrr", "Recurring revenue per month"),
    ("ltv", "Lifetime value"),
    ("avg_deal_size", "Average contract size"),
    ("aum_total", "Asset base"),
    ("aum_fee_percent", "Annual fee percent"),
    ("setup_fee", "One-time setup charge"),
    ("transaction_fee_percent", "Platform share percent"),
    ("avg_transaction_value", "Average order size"),
)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}".rstrip("0")


class PricingMetrics(BaseModel):
    """Pricing figures extracted from narrative text for one company."""

    model_config = ConfigDict(frozen=True)

    currency: Currency = Currency.USD
    business_model_type: BusinessModelType = BusinessModelType.SAAS
    avg_monthly_revenue: float | None = Field(None, ge=0)
    current_customers: int | None = Field(None, ge=0)
    current_mrr: float | None = Field(None, ge=0)
    ltv: float | None = Field(None, ge=0)
    avg_deal_size: float | None = Field(None, ge=0)
    aum_fee_percent: float | None = Field(None, ge=0, le=100)
    aum_total: float | None = Field(None, ge=0)
    setup_fee: float | None = Field(None, ge=0)
    transaction_fee_percent: float | None = Field(None, ge=0, le=100)
    avg_transaction_value: float | None = Field(None, ge=0)
    is_b2c: bool = False
    is_transaction_based: bool = False
    data_source: DataSource = DataSource.NONE

    def summary_text(self) -> str:
        """Render as plain text that classifies back to the same business model."""
        parts = [f"Business model: {_SUMMARY_HEADLINES[self.business_model_type]}."]
        parts.append(f"Currency: {self.currency.value}.")
        for field_name, label in _SUMMARY_FIELDS:
            value = getattr(self, field_name)
            if value is not None:
                parts.append(f"{label}: {_format_number(value)}.")
        return " ".join(parts)


class UnitEconomics(BaseModel):
    """Unit economics figures. Percentages are 0-100."""

    model_config = ConfigDict(frozen=True)

    ltv: float | None = Field(None, ge=0)
    cac: float | None = Field(None, ge=0)
    ltv_cac_ratio: float | None = Field(None, ge=0)
    payback_months: float | None = Field(None, ge=0)
    gross_margin: float | None = Field(None, ge=0, le=100)
    monthly_churn: float | None = Field(None, ge=0, le=100)


class MetricHealth(BaseModel):
    """Health assessment for one unit economics metric."""

    model_config = ConfigDict(frozen=True)

    metric: str
    status: HealthStatus
    label: str
    benchmark: str


class UnitEconomicsReport(BaseModel):
    """Unit economics with per-metric health, overall verdict and tips."""

    model_config = ConfigDict(frozen=True)

    metrics: UnitEconomics
    health: list[MetricHealth]
    overall_health: str
    suggestions: list[str]
