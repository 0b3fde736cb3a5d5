"""Unit economics extraction and health assessment."""

from __future__ import annotations

import re
from collections.abc import Mapping

from memoscope.financial.models import (
    HealthStatus,
    MetricHealth,
    UnitEconomics,
    UnitEconomicsReport,
)
from memoscope.financial.numbers import NumberKind, nearest_candidate, parse_number, scan_numbers
from memoscope.rounding import round_one_decimal
from memoscope.text.normalize import join_texts

MAX_SUGGESTIONS = 3
VENTURE_GRADE_MESSAGE = "Maintain current trajectory - unit economics are venture-grade"

_MONEY = frozenset({NumberKind.MONEY, NumberKind.PLAIN})
_RATE = frozenset({NumberKind.PERCENT, NumberKind.PLAIN})
_PLAIN = frozenset({NumberKind.PLAIN})

# Ratio labels such as "ltv:cac" name the ratio, not either amount.
_RATIO_LABEL = (
    r"\b(?:ltv|lifetime value)\s*(?::|/|to)\s*(?:cac|customer acquisition cost)(?:\s*ratio)?"
)
_RATIO_LABEL_RE = re.compile(_RATIO_LABEL)
_EXPLICIT_RATIO = re.compile(
    _RATIO_LABEL + r"[^\d\n]{0,16}?(?P<value>\d+(?:\.\d+)?)\s*(?::\s*1\b|x\b)?"
)

_NOT_RATIO = r"(?!\s*(?::|/|to)\s*(?:cac|customer acquisition))"
LTV_KEYWORD = re.compile(rf"(?:\bltv\b|lifetime value){_NOT_RATIO}")

_KEYWORDS: dict[str, re.Pattern[str]] = {
    "ltv": LTV_KEYWORD,
    # "cac payback" is a payback period.
    "cac": re.compile(r"(?:\bcac\b|customer acquisition cost|acquisition cost)(?!\s*payback)"),
    "gross_margin": re.compile(r"gross margins?"),
    "monthly_churn": re.compile(r"\bchurn(?: rate)?\b|monthly churn"),
    "payback_months": re.compile(r"payback(?: period)?|pay back|recoup"),
}

_FIELD_KINDS: dict[str, frozenset[NumberKind]] = {
    "ltv": _MONEY,
    "cac": _MONEY,
    "gross_margin": _RATE,
    "monthly_churn": _RATE,
    "payback_months": _PLAIN,
}

_PERCENT_FIELDS = frozenset({"gross_margin", "monthly_churn"})


def _structured_value(structured: Mapping[str, object] | None, field: str) -> float | None:
    if not structured:
        return None
    value = parse_number(structured.get(field))
    if value is None or value < 0:
        return None
    if field in _PERCENT_FIELDS and value > 100:
        return None
    return value


def _mask(text: str, pattern: re.Pattern[str]) -> str:
    return pattern.sub(lambda m: " " * len(m.group()), text)


def _explicit_ratio(text: str) -> float | None:
    match = _EXPLICIT_RATIO.search(text)
    if match is None:
        return None
    value = float(match.group("value"))
    return value if value > 0 else None


def _text_value(text: str, field: str) -> float | None:
    hit = nearest_candidate(text, scan_numbers(text), _KEYWORDS[field], _FIELD_KINDS[field])
    if hit is None:
        return None
    if field in _PERCENT_FIELDS and hit.value > 100:
        return None
    return hit.value


def extract_unit_economics(
    business_model_text: object,
    traction_text: object,
    structured: Mapping[str, object] | None = None,
) -> UnitEconomics:
    """Extract unit economics.

    Structured values take precedence; narrative text fills the gaps.
    The LTV:CAC ratio is derived when both LTV and CAC are positive;
    otherwise an explicitly stated ratio ("LTV:CAC is 4:1") is used.
    Payback is never derived, only read from explicit input.

    Args:
        business_model_text: Business model section answer.
        traction_text: Traction section answer.
        structured: Optional structured values keyed ``ltv``, ``cac``,
            ``gross_margin``, ``monthly_churn`` and ``payback_months``.

    Returns:
        A partially populated UnitEconomics record.
    """
    text = join_texts([business_model_text, traction_text], "unit_economics.extract").lower()
    stated_ratio = _explicit_ratio(text)
    text = _mask(_mask(text, _EXPLICIT_RATIO), _RATIO_LABEL_RE)

    values: dict[str, float | None] = {}
    for field in _KEYWORDS:
        value = _structured_value(structured, field)
        if value is None:
            value = _text_value(text, field)
        values[field] = value

    ltv, cac = values["ltv"], values["cac"]
    ratio = None
    if ltv is not None and cac is not None and ltv > 0 and cac > 0:
        ratio = round_one_decimal(ltv / cac)
    elif stated_ratio is not None:
        ratio = round_one_decimal(stated_ratio)

    return UnitEconomics(ltv_cac_ratio=ratio, **values)


def _fmt(value: float) -> str:
    return f"{value:g}"


def _ltv_cac_health(ratio: float | None) -> MetricHealth:
    if ratio is None:
        return MetricHealth(
            metric="ltv_cac_ratio",
            status=HealthStatus.UNKNOWN,
            label="Not Available",
            benchmark="Healthy: ≥3x",
        )
    if ratio >= 3:
        status = HealthStatus.HEALTHY
    elif ratio >= 2:
        status = HealthStatus.CAUTION
    else:
        status = HealthStatus.CONCERN
    return MetricHealth(
        metric="ltv_cac_ratio", status=status, label=f"{_fmt(ratio)}x", benchmark="≥3x"
    )


def _payback_health(months: float | None) -> MetricHealth:
    if months is None:
        return MetricHealth(
            metric="payback_months",
            status=HealthStatus.UNKNOWN,
            label="Not Available",
            benchmark="Healthy: ≤12mo",
        )
    if months <= 12:
        status = HealthStatus.HEALTHY
    elif months <= 18:
        status = HealthStatus.CAUTION
    else:
        status = HealthStatus.CONCERN
    return MetricHealth(
        metric="payback_months", status=status, label=f"{_fmt(months)} mo", benchmark="≤12 months"
    )


def _margin_health(margin: float | None) -> MetricHealth:
    if margin is None:
        return MetricHealth(
            metric="gross_margin",
            status=HealthStatus.UNKNOWN,
            label="Not Available",
            benchmark="SaaS: ≥70%",
        )
    if margin >= 70:
        status = HealthStatus.HEALTHY
    elif margin >= 50:
        status = HealthStatus.CAUTION
    else:
        status = HealthStatus.CONCERN
    return MetricHealth(
        metric="gross_margin", status=status, label=f"{_fmt(margin)}%", benchmark="≥70%"
    )


def _churn_health(churn: float | None) -> MetricHealth:
    if churn is None:
        return MetricHealth(
            metric="monthly_churn",
            status=HealthStatus.UNKNOWN,
            label="Not Available",
            benchmark="Healthy: ≤2%",
        )
    if churn <= 2:
        status = HealthStatus.HEALTHY
    elif churn <= 5:
        status = HealthStatus.CAUTION
    else:
        status = HealthStatus.CONCERN
    return MetricHealth(
        metric="monthly_churn", status=status, label=f"{_fmt(churn)}%", benchmark="≤2% monthly"
    )


def assess_health(metrics: UnitEconomics) -> list[MetricHealth]:
    """Per-metric health in display order: LTV:CAC, payback, margin, churn.

    A missing value is reported as unknown; a known zero is assessed.
    """
    return [
        _ltv_cac_health(metrics.ltv_cac_ratio),
        _payback_health(metrics.payback_months),
        _margin_health(metrics.gross_margin),
        _churn_health(metrics.monthly_churn),
    ]


def overall_health(health: list[MetricHealth]) -> str:
    known = [h.status for h in health if h.status is not HealthStatus.UNKNOWN]
    if len(known) < 2:
        return "Insufficient Data"
    if known.count(HealthStatus.CONCERN) >= 2:
        return "Needs Work"
    if known.count(HealthStatus.HEALTHY) >= 2:
        return "Venture Grade"
    return "Developing"


def get_optimization_suggestions(metrics: UnitEconomics) -> list[str]:
    """Tips for each metric outside its healthy band, or the venture-grade message."""
    suggestions: list[str] = []
    if metrics.ltv_cac_ratio and metrics.ltv_cac_ratio < 3:
        suggestions.append(
            "Improve LTV:CAC ratio by focusing on customer retention or reducing acquisition costs"
        )
    if metrics.payback_months and metrics.payback_months > 12:
        suggestions.append(
            "Reduce payback period through pricing optimization or upsell strategies"
        )
    if metrics.gross_margin and metrics.gross_margin < 70:
        suggestions.append(
            "Increase gross margins by automating support, optimizing infrastructure costs"
        )
    if metrics.monthly_churn and metrics.monthly_churn > 2:
        suggestions.append(
            "Address churn through better onboarding, product stickiness, or customer success"
        )
    if not suggestions:
        suggestions.append(VENTURE_GRADE_MESSAGE)
    return suggestions[:MAX_SUGGESTIONS]


def build_unit_economics_report(
    business_model_text: object,
    traction_text: object,
    structured: Mapping[str, object] | None = None,
) -> UnitEconomicsReport:
    metrics = extract_unit_economics(business_model_text, traction_text, structured)
    health = assess_health(metrics)
    return UnitEconomicsReport(
        metrics=metrics,
        health=health,
        overall_health=overall_health(health),
        suggestions=get_optimization_suggestions(metrics),
    )
