"""Tests for the financial extraction routes."""

from __future__ import annotations

from fastapi.testclient import TestClient

from memoscope.api.main import create_app
from memoscope.assumptions.estimator import StaticMetricEstimator

NO_FIGURES = {"business_model": "Subscription software for dental clinics."}


def _client(estimator: StaticMetricEstimator | None = None) -> TestClient:
    return TestClient(create_app(estimator=estimator or StaticMetricEstimator(700)))


class TestPricingRoute:
    def test_reads_texts_from_response_map(self) -> None:
        response = _client().post(
            "/v1/financials/pricing",
            json={
                "responses": {
                    "business_model": "We manage $2.5M AUM and charge a 1.5% management fee.",
                    "traction": "We have 40 clients.",
                }
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["business_model_type"] == "aum"
        assert body["aum_total"] == 2_500_000
        assert body["aum_fee_percent"] == 1.5
        assert body["current_customers"] == 40
        assert body["currency"] == "USD"

    def test_explicit_texts(self) -> None:
        body = _client().post(
            "/v1/financials/pricing",
            json={
                "business_model_text": "We charge €49 per month",
                "traction_text": "We have 120 paying customers.",
            },
        ).json()
        assert body["currency"] == "EUR"
        assert body["avg_monthly_revenue"] == 49
        assert body["current_customers"] == 120
        assert body["data_source"] == "text_extraction"

    def test_anchored_backfill(self) -> None:
        body = _client().post(
            "/v1/financials/pricing",
            json={
                "anchored": {
                    "primary_metric_label": "ACV",
                    "primary_metric_value": 150000,
                    "currency": "GBP",
                    "source": "ai_estimated",
                    "business_model_type": "enterprise",
                    "periodicity": "annual",
                    "unit": "currency",
                }
            },
        ).json()
        assert body["avg_deal_size"] == 150000
        assert body["currency"] == "GBP"
        assert body["data_source"] == "anchored_assumption"


class TestAnchoredAssumptionsRoute:
    def test_uses_injected_estimator(self) -> None:
        estimator = StaticMetricEstimator(700)
        response = _client(estimator).post(
            "/v1/financials/anchored-assumptions",
            json={"responses": NO_FIGURES, "company": {"name": "Acme", "stage": "seed"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "ai_estimated"
        assert body["primary_metric_value"] == 700
        assert body["primary_metric_label"] == "Average Monthly Revenue"
        assert len(estimator.requests) == 1
        assert estimator.requests[0].company.name == "Acme"

    def test_extracted_value_wins(self) -> None:
        body = _client().post(
            "/v1/financials/anchored-assumptions",
            json={"responses": {"business_model": "We charge $49 per month."}},
        ).json()
        assert body["source"] == "user_provided"
        assert body["primary_metric_value"] == 49

    def test_precomputed_metrics_and_currency(self) -> None:
        body = _client().post(
            "/v1/financials/anchored-assumptions",
            json={
                "metrics": {"business_model_type": "marketplace", "transaction_fee_percent": 12},
                "currency": "SEK",
            },
        ).json()
        assert body["primary_metric_label"] == "Take Rate"
        assert body["primary_metric_value"] == 12
        assert body["unit"] == "percent"
        assert body["currency"] == "SEK"

    def test_default_app_falls_back_without_estimator_config(self) -> None:
        """No estimator URL in the environment: the static default tier applies."""
        client = TestClient(create_app())
        body = client.post(
            "/v1/financials/anchored-assumptions",
            json={"responses": NO_FIGURES, "company": {"stage": "pre-seed"}},
        ).json()
        assert body["source"] == "fallback_default"
        assert body["primary_metric_value"] == 250

    def test_invalid_currency_is_422(self) -> None:
        response = _client().post(
            "/v1/financials/anchored-assumptions", json={"currency": "XYZ"}
        )
        assert response.status_code == 422
        assert response.json()["code"] == "REQUEST_VALIDATION_FAILED"

    def test_backfilled_metrics_keep_estimated_source(self) -> None:
        client = _client()
        first = client.post(
            "/v1/financials/anchored-assumptions",
            json={"responses": NO_FIGURES, "company": {"stage": "seed"}},
        ).json()
        metrics = client.post(
            "/v1/financials/pricing",
            json={"business_model_text": NO_FIGURES["business_model"], "anchored": first},
        ).json()
        assert metrics["data_source"] == "anchored_assumption"

        second = client.post(
            "/v1/financials/anchored-assumptions",
            json={"responses": NO_FIGURES, "metrics": metrics},
        ).json()
        assert second["source"] == "ai_estimated"
        assert second["primary_metric_value"] == 700
