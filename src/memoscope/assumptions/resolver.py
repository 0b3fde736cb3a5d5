"""Anchored assumptions resolver.

Resolves the headline metric through three strictly sequential tiers:

    NOT_RESOLVED -> EXTRACTED                  (source = user_provided)
    NOT_RESOLVED -> ESTIMATING -> ESTIMATED    (source = ai_estimated)
    NOT_RESOLVED -> ESTIMATING -> FALLEN_BACK  (source = fallback_default)

Estimation is attempted only after extraction has produced no value, and
exactly once: there is no retry. Any exception from the estimator is
downgraded to the static default tier. The resolver imposes no timeout;
callers that need one wrap the coroutine (e.g. asyncio.wait_for).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from memoscope.assumptions.defaults import get_default_value
from memoscope.assumptions.estimator import MetricEstimator
from memoscope.assumptions.models import (
    AnchoredAssumptions,
    AssumptionSource,
    CompanyDescriptor,
    EstimateRequest,
    EstimateResponse,
    ResolutionState,
)
from memoscope.assumptions.primary_metric import get_primary_metric_spec, read_primary_metric
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.financial.models import Currency, DataSource, PricingMetrics
from memoscope.text.normalize import coerce_text

logger = logging.getLogger(__name__)


@dataclass
class ResolutionTrace:
    """Ordered record of the states a single resolution passed through."""

    states: list[ResolutionState] = field(default_factory=lambda: [ResolutionState.NOT_RESOLVED])

    def advance(self, state: ResolutionState) -> None:
        logger.debug("Anchored assumption resolution: %s -> %s", self.states[-1].value, state.value)
        self.states.append(state)

    @property
    def final(self) -> ResolutionState:
        return self.states[-1]


def _string_responses(responses: Mapping[str, object] | None) -> dict[str, str]:
    if not responses:
        return {}
    return {
        str(key): coerce_text(value, "resolver.responses")
        for key, value in sorted(responses.items(), key=lambda item: str(item[0]))
    }


async def resolve_anchored_assumptions(
    metrics: PricingMetrics | None,
    responses: Mapping[str, object] | None,
    currency: Currency | None,
    company: CompanyDescriptor,
    estimator: MetricEstimator,
    *,
    trace: ResolutionTrace | None = None,
) -> AnchoredAssumptions:
    """Resolve the anchored primary metric.

    Args:
        metrics: Extractor output, or None to extract from the response map
            (``business_model``, ``traction`` and ``market`` answers).
        responses: Full response map.
        currency: Resolved currency; None uses the metrics' currency.
        company: Company descriptor (name, category, stage).
        estimator: Estimation collaborator, called at most once.
        trace: Optional trace that records every state transition.

    Returns:
        AnchoredAssumptions whose ``source`` records the tier that produced
        the value. The value is never None on return.
    """
    trace = trace if trace is not None else ResolutionTrace()
    answers = _string_responses(responses)

    if metrics is None:
        metrics = extract_pricing_metrics(
            answers.get("business_model"),
            answers.get("traction"),
            answers,
            market_text=answers.get("market"),
        )

    resolved_currency = currency if currency is not None else metrics.currency
    model_type = metrics.business_model_type
    spec = get_primary_metric_spec(model_type)

    base = {
        "primary_metric_label": spec.label,
        "currency": resolved_currency,
        "business_model_type": model_type,
        "periodicity": spec.periodicity,
        "unit": spec.unit,
    }

    # A value backfilled from earlier anchored assumptions is not founder input.
    extracted = None
    if metrics.data_source is not DataSource.ANCHORED_ASSUMPTION:
        extracted = read_primary_metric(metrics)
    if extracted is not None:
        trace.advance(ResolutionState.EXTRACTED)
        return AnchoredAssumptions(
            **base,
            primary_metric_value=extracted,
            source=AssumptionSource.USER_PROVIDED,
        )

    trace.advance(ResolutionState.ESTIMATING)
    request = EstimateRequest(
        metric_label=spec.label,
        business_model_type=model_type,
        currency=resolved_currency,
        company=company,
        responses=answers,
    )
    try:
        estimate = EstimateResponse.model_validate(
            await estimator.estimate(request), from_attributes=True
        )
    except Exception as exc:
        logger.warning(
            "Estimation failed for %s (%s); using static default: %s: %s",
            spec.label,
            model_type.value,
            type(exc).__name__,
            exc,
        )
        trace.advance(ResolutionState.FALLEN_BACK)
        return AnchoredAssumptions(
            **base,
            primary_metric_value=get_default_value(model_type, company.stage),
            source=AssumptionSource.FALLBACK_DEFAULT,
        )

    trace.advance(ResolutionState.ESTIMATED)
    return AnchoredAssumptions(
        **base,
        primary_metric_value=estimate.estimated_value,
        source=AssumptionSource.AI_ESTIMATED,
        estimate_confidence=estimate.confidence,
        estimate_reasoning=estimate.reasoning,
    )
