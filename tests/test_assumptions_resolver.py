"""Tests for the anchored assumptions resolver.

The resolver is async; tests drive it with asyncio.run and deterministic
estimators (no live network).
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from memoscope.assumptions.estimator import (
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
)
from memoscope.assumptions.resolver import ResolutionTrace, resolve_anchored_assumptions
from memoscope.financial.extractor import extract_pricing_metrics
from memoscope.financial.models import BusinessModelType, Currency, DataSource, PricingMetrics

PRE_SEED = CompanyDescriptor(name="Acme", category="dental software", stage="pre-seed")
SEED = CompanyDescriptor(name="Acme", category="dental software", stage="seed")

NO_FIGURES = {"business_model": "Subscription software for dental clinics."}


class ExplodingEstimator:
    """Estimator that fails with an arbitrary exception."""

    def __init__(self) -> None:
        self.calls = 0

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        self.calls += 1
        raise RuntimeError("estimator crashed")


class MalformedEstimator:
    """Estimator whose reply is not an EstimateResponse."""

    def __init__(self, reply: object) -> None:
        self.reply = reply

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        return self.reply  # type: ignore[return-value]


def _resolve(
    responses: dict[str, object] | None,
    company: CompanyDescriptor,
    estimator: MetricEstimator,
    *,
    metrics: PricingMetrics | None = None,
    currency: Currency | None = None,
    trace: ResolutionTrace | None = None,
) -> AnchoredAssumptions:
    return asyncio.run(
        resolve_anchored_assumptions(
            metrics, responses, currency, company, estimator, trace=trace
        )
    )


class TestExtractedTier:
    def test_extracted_value_skips_estimator(self) -> None:
        estimator = StaticMetricEstimator(999)
        trace = ResolutionTrace()
        result = _resolve(
            {"business_model": "We charge $49 per month."}, SEED, estimator, trace=trace
        )

        assert result.source is AssumptionSource.USER_PROVIDED
        assert result.primary_metric_value == 49
        assert result.primary_metric_label == "Average Monthly Revenue"
        assert result.periodicity is Periodicity.MONTHLY
        assert result.unit is MetricUnit.CURRENCY
        assert estimator.requests == []
        assert trace.states == [ResolutionState.NOT_RESOLVED, ResolutionState.EXTRACTED]

    def test_precomputed_metrics_are_used(self) -> None:
        metrics = PricingMetrics(
            business_model_type=BusinessModelType.AUM,
            aum_total=1_000_000,
            aum_fee_percent=1,
            currency=Currency.GBP,
        )
        result = _resolve(None, SEED, UnavailableMetricEstimator(), metrics=metrics)
        assert result.source is AssumptionSource.USER_PROVIDED
        assert result.primary_metric_label == "Annual Fee Revenue"
        assert result.primary_metric_value == 10_000
        assert result.periodicity is Periodicity.ANNUAL
        assert result.currency is Currency.GBP

    def test_known_zero_counts_as_extracted(self) -> None:
        metrics = PricingMetrics(avg_monthly_revenue=0)
        result = _resolve(None, SEED, StaticMetricEstimator(5), metrics=metrics)
        assert result.source is AssumptionSource.USER_PROVIDED
        assert result.primary_metric_value == 0


class TestEstimatedTier:
    def test_estimate_used_when_extraction_finds_nothing(self) -> None:
        estimator = StaticMetricEstimator(
            700, confidence=EstimateConfidence.MEDIUM, reasoning="Dental SaaS comparables"
        )
        trace = ResolutionTrace()
        result = _resolve(NO_FIGURES, SEED, estimator, trace=trace)

        assert result.source is AssumptionSource.AI_ESTIMATED
        assert result.primary_metric_value == 700
        assert result.estimate_confidence is EstimateConfidence.MEDIUM
        assert result.estimate_reasoning == "Dental SaaS comparables"
        assert trace.states == [
            ResolutionState.NOT_RESOLVED,
            ResolutionState.ESTIMATING,
            ResolutionState.ESTIMATED,
        ]
        assert trace.final is ResolutionState.ESTIMATED

    def test_estimator_called_once_with_context(self) -> None:
        estimator = StaticMetricEstimator(700)
        _resolve(NO_FIGURES, SEED, estimator)

        (request,) = estimator.requests
        assert request.metric_label == "Average Monthly Revenue"
        assert request.business_model_type is BusinessModelType.SAAS
        assert request.company == SEED
        assert request.responses == NO_FIGURES

    def test_currency_argument_overrides_metrics(self) -> None:
        result = _resolve(NO_FIGURES, SEED, StaticMetricEstimator(700), currency=Currency.EUR)
        assert result.currency is Currency.EUR


class TestFallbackTier:
    def test_pre_seed_saas_falls_back_to_static_default(self) -> None:
        trace = ResolutionTrace()
        result = _resolve(NO_FIGURES, PRE_SEED, UnavailableMetricEstimator(), trace=trace)

        assert result.source is AssumptionSource.FALLBACK_DEFAULT
        assert result.primary_metric_value == 250
        assert result.business_model_type is BusinessModelType.SAAS
        assert result.estimate_confidence is None
        assert trace.final is ResolutionState.FALLEN_BACK

    def test_any_exception_is_downgraded(self, caplog: pytest.LogCaptureFixture) -> None:
        estimator = ExplodingEstimator()
        with caplog.at_level(logging.WARNING, logger="memoscope.assumptions.resolver"):
            result = _resolve(NO_FIGURES, SEED, estimator)

        assert result.source is AssumptionSource.FALLBACK_DEFAULT
        assert result.primary_metric_value == 667
        assert estimator.calls == 1
        assert "RuntimeError" in caplog.text

    def test_unknown_stage_uses_seed_row(self) -> None:
        company = CompanyDescriptor(name="Acme", stage="bootstrapped")
        result = _resolve(
            {"business_model": "We sell to enterprise customers."},
            company,
            UnavailableMetricEstimator(),
        )
        assert result.business_model_type is BusinessModelType.ENTERPRISE
        assert result.primary_metric_label == "ACV"
        assert result.primary_metric_value == 200_000

    def test_empty_responses_still_resolve(self) -> None:
        result = _resolve(None, PRE_SEED, UnavailableMetricEstimator())
        assert result.primary_metric_value == 250
        assert result.currency is Currency.USD

    @pytest.mark.parametrize(
        "reply",
        [None, object(), {"estimated_value": "lots"}, {"estimated_value": -5}],
    )
    def test_malformed_estimate_is_downgraded(self, reply: object) -> None:
        trace = ResolutionTrace()
        result = _resolve(NO_FIGURES, PRE_SEED, MalformedEstimator(reply), trace=trace)

        assert result.source is AssumptionSource.FALLBACK_DEFAULT
        assert result.primary_metric_value == 250
        assert trace.final is ResolutionState.FALLEN_BACK

    def test_mapping_reply_is_accepted(self) -> None:
        result = _resolve(NO_FIGURES, SEED, MalformedEstimator({"estimated_value": 640}))
        assert result.source is AssumptionSource.AI_ESTIMATED
        assert result.primary_metric_value == 640


class TestBackfilledMetrics:
    """Metrics backfilled from earlier assumptions keep their provenance."""

    def test_fallback_value_is_not_relabelled_as_founder_input(self) -> None:
        first = _resolve(NO_FIGURES, PRE_SEED, UnavailableMetricEstimator())
        metrics = extract_pricing_metrics(
            NO_FIGURES["business_model"], None, NO_FIGURES, anchored=first
        )
        assert metrics.data_source is DataSource.ANCHORED_ASSUMPTION
        assert metrics.avg_monthly_revenue == 250

        second = _resolve(NO_FIGURES, PRE_SEED, UnavailableMetricEstimator(), metrics=metrics)

        assert second.source is first.source
        assert second.source is AssumptionSource.FALLBACK_DEFAULT
        assert second.primary_metric_value == 250

    def test_backfilled_value_goes_through_estimation(self) -> None:
        metrics = PricingMetrics(
            avg_monthly_revenue=700, data_source=DataSource.ANCHORED_ASSUMPTION
        )
        estimator = StaticMetricEstimator(700)
        trace = ResolutionTrace()
        result = _resolve(NO_FIGURES, SEED, estimator, metrics=metrics, trace=trace)

        assert result.source is AssumptionSource.AI_ESTIMATED
        assert len(estimator.requests) == 1
        assert ResolutionState.EXTRACTED not in trace.states
