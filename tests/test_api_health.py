"""Tests for the API health endpoint and request ID middleware."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from memoscope import __version__
from memoscope.api.main import create_app
from memoscope.api.middleware.request_id import resolve_request_id
from memoscope.assumptions.estimator import StaticMetricEstimator


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(estimator=StaticMetricEstimator(700)))


def test_health_returns_200(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200


def test_health_fields(client: TestClient) -> None:
    """GET /health returns status, ISO-8601 time and the package version."""
    data = client.get("/health").json()

    assert data["status"] == "ok"
    assert data["version"] == __version__
    datetime.fromisoformat(data["time"])


def test_health_generates_request_id_when_not_provided(client: TestClient) -> None:
    request_id = client.get("/health").headers["X-Request-Id"]

    assert len(request_id) == 36
    assert request_id.count("-") == 4


def test_health_echoes_provided_request_id(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-Id": "req-12345"})
    assert response.headers["X-Request-Id"] == "req-12345"


def test_blank_request_id_is_replaced(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-Id": "   "})
    assert len(response.headers["X-Request-Id"]) == 36


def test_resolve_request_id_strips_incoming_value() -> None:
    assert resolve_request_id("  req-9  ") == "req-9"
    assert len(resolve_request_id(None)) == 36
    assert resolve_request_id("") != resolve_request_id("")
