"""Pricing metrics extraction.

Turns business-model, traction and market narratives plus the response map
into a single PricingMetrics record. The extractor is total: it never
raises, and any field the text does not support is left as None.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from memoscope.financial.business_model import classify_business_model
from memoscope.financial.currency import detect_currency
from memoscope.financial.models import BusinessModelType, DataSource, PricingMetrics
from memoscope.financial.numbers import NumberCandidate, NumberKind, nearest_candidate, scan_numbers
from memoscope.financial.scan import build_scan_text
from memoscope.financial.unit_economics import LTV_KEYWORD

if TYPE_CHECKING:
    from memoscope.assumptions.models import AnchoredAssumptions

logger = logging.getLogger(__name__)

_MONEY = frozenset({NumberKind.MONEY, NumberKind.PLAIN})
_PERCENT = frozenset({NumberKind.PERCENT})
_COUNT = frozenset({NumberKind.PLAIN})

# Field an anchored primary metric value backfills, per business model. AUM
# anchors annual fee revenue, which has no single PricingMetrics field.
ANCHORED_BACKFILL_FIELDS: dict[BusinessModelType, str | None] = {
    BusinessModelType.SAAS: "avg_monthly_revenue",
    BusinessModelType.B2C: "avg_monthly_revenue",
    BusinessModelType.ENTERPRISE: "avg_deal_size",
    BusinessModelType.MARKETPLACE: "transaction_fee_percent",
    BusinessModelType.AUM: None,
    BusinessModelType.PROJECT: "avg_deal_size",
}

# Counts above this are almost certainly revenue or market-size figures.
MAX_CUSTOMER_COUNT = 10_000_000

FIELD_KEYWORDS: dict[str, re.Pattern[str]] = {
    "avg_monthly_revenue": re.compile(
        r"per month|/\s?mo(?:nth)?\b|a month|monthly (?:price|fee|subscription|plan)"
        r"|\barpu\b|per seat|per user|per-user"
    ),
    "current_customers": re.compile(
        r"\b(?:paying )?(?:customers?|clients?|users?|accounts?|subscribers?|members?)\b"
    ),
    "current_mrr": re.compile(r"\bmrr\b|monthly recurring revenue|monthly revenue"),
    "arr": re.compile(r"\barr\b|annual recurring revenue|annual run rate|annual revenue"),
    "ltv": LTV_KEYWORD,
    "avg_deal_size": re.compile(
        r"\bacv\b|annual contract value|deal size|contract value|average contract"
        r"|per project|project value|per engagement|per deal|per contract"
    ),
    "aum_total": re.compile(r"\baum\b|assets under management|under management|managing"),
    "aum_fee_percent": re.compile(
        r"\bfees?\b|management fee|\bbps\b|basis points?|\bcharge"
    ),
    "setup_fee": re.compile(r"set-?up fee|onboarding fee|implementation fee|\bsetup\b"),
    "transaction_fee_percent": re.compile(
        r"take rate|commissions?|transaction fees?|per transaction|platform fee|\bcut\b"
    ),
    "avg_transaction_value": re.compile(
        r"average order value|\baov\b|average transaction|order value|basket size"
        r"|transaction value|average booking"
    ),
}


def _money(text: str, candidates: list[NumberCandidate], field: str) -> float | None:
    hit = nearest_candidate(text, candidates, FIELD_KEYWORDS[field], _MONEY)
    return hit.value if hit is not None else None


def _percent(text: str, candidates: list[NumberCandidate], field: str) -> float | None:
    hit = nearest_candidate(text, candidates, FIELD_KEYWORDS[field], _PERCENT)
    if hit is None or hit.value > 100:
        return None
    return hit.value


def _count(text: str, candidates: list[NumberCandidate]) -> int | None:
    hit = nearest_candidate(
        text,
        candidates,
        FIELD_KEYWORDS["current_customers"],
        _COUNT,
        integers_only=True,
    )
    if hit is None or hit.value > MAX_CUSTOMER_COUNT:
        return None
    return int(hit.value)


def _round_money(value: float) -> float:
    return round(value, 2)


def extract_pricing_metrics(
    business_model_text: object,
    traction_text: object,
    responses: Mapping[str, object] | None = None,
    market_text: object = None,
    anchored: AnchoredAssumptions | None = None,
) -> PricingMetrics:
    """Extract pricing metrics from narrative text.

    Args:
        business_model_text: Business model section answer.
        traction_text: Traction section answer.
        responses: Full response map; values are scanned after the
            section texts in ascending key order.
        market_text: Optional market section answer.
        anchored: Previously resolved anchored assumptions. Their currency
            wins over detection and, when the text yields no figures, their
            primary value backfills the matching field.

    Returns:
        A PricingMetrics record. Never raises for any text input.
    """
    scan_text = build_scan_text(business_model_text, traction_text, market_text, responses)
    lowered = scan_text.lower()

    model_type = classify_business_model(lowered)
    currency = anchored.currency if anchored is not None else detect_currency(lowered)

    candidates = scan_numbers(lowered)

    customers = _count(lowered, candidates)
    mrr = _money(lowered, candidates, "current_mrr")
    if mrr is None:
        arr = _money(lowered, candidates, "arr")
        if arr is not None:
            mrr = _round_money(arr / 12)

    avg_monthly = _money(lowered, candidates, "avg_monthly_revenue")
    if avg_monthly is None and mrr is not None and customers:
        avg_monthly = _round_money(mrr / customers)

    fields: dict[str, float | int | None] = {
        "avg_monthly_revenue": avg_monthly,
        "current_customers": customers,
        "current_mrr": mrr,
        "ltv": _money(lowered, candidates, "ltv"),
        "avg_deal_size": _money(lowered, candidates, "avg_deal_size"),
        "setup_fee": _money(lowered, candidates, "setup_fee"),
        "transaction_fee_percent": _percent(lowered, candidates, "transaction_fee_percent"),
        "avg_transaction_value": _money(lowered, candidates, "avg_transaction_value"),
        "aum_total": None,
        "aum_fee_percent": None,
    }
    if model_type is BusinessModelType.AUM:
        fields["aum_total"] = _money(lowered, candidates, "aum_total")
        fields["aum_fee_percent"] = _percent(lowered, candidates, "aum_fee_percent")

    data_source = DataSource.NONE
    if any(value is not None for value in fields.values()):
        data_source = DataSource.TEXT_EXTRACTION
    elif anchored is not None and anchored.primary_metric_value is not None:
        backfill = _anchored_field(anchored)
        if backfill is not None:
            fields[backfill] = anchored.primary_metric_value
            data_source = DataSource.ANCHORED_ASSUMPTION

    logger.debug(
        "Extracted pricing metrics: model=%s currency=%s fields=%d",
        model_type.value,
        currency.value,
        sum(1 for value in fields.values() if value is not None),
    )

    return PricingMetrics(
        currency=currency,
        business_model_type=model_type,
        is_b2c=model_type is BusinessModelType.B2C,
        is_transaction_based=model_type is BusinessModelType.MARKETPLACE,
        data_source=data_source,
        **fields,
    )


def _anchored_field(anchored: AnchoredAssumptions) -> str | None:
    """PricingMetrics field that an anchored primary value maps onto."""
    field = ANCHORED_BACKFILL_FIELDS.get(anchored.business_model_type)
    value = anchored.primary_metric_value
    if field is None or value is None or value < 0:
        return None
    if field.endswith("_percent") and value > 100:
        return None
    return field
