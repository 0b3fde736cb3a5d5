"""Estimation collaborator adapters.

The resolver asks an external service to estimate the primary metric when
extraction found nothing. Adapters implement the MetricEstimator protocol:

- HttpMetricEstimator: POSTs JSON to the configured estimation endpoint
- StaticMetricEstimator: returns a fixed value (tests, demos)
- UnavailableMetricEstimator: always fails, forcing the default tier

Adapters make a single attempt. Retries and timeouts are the caller's
concern; the HTTP adapter applies a timeout only when one is configured.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from memoscope.assumptions.models import EstimateConfidence, EstimateRequest, EstimateResponse

logger = logging.getLogger(__name__)


class EstimationError(Exception):
    """Raised when the estimation collaborator cannot produce an estimate."""


@runtime_checkable
class MetricEstimator(Protocol):
    """Estimates a primary metric value for a company."""

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        """Return an estimate or raise."""
        ...


def _parse_estimate(payload: Any) -> EstimateResponse:
    """Validate a collaborator response body.

    Accepts ``estimatedValue`` or ``value`` for the number.

    Raises:
        EstimationError: If the body has no positive finite estimate.
    """
    if not isinstance(payload, dict):
        raise EstimationError("Estimation response is not a JSON object")

    raw = payload.get("estimatedValue", payload.get("value"))
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise EstimationError("Estimation response has no numeric estimate")
    if not math.isfinite(raw) or raw <= 0:
        raise EstimationError(f"Estimation response value out of range: {raw}")

    confidence = payload.get("confidence")
    if confidence not in {c.value for c in EstimateConfidence}:
        confidence = None
    reasoning = payload.get("reasoning")
    if not isinstance(reasoning, str):
        reasoning = None

    try:
        return EstimateResponse(
            estimated_value=float(raw),
            confidence=confidence,
            reasoning=reasoning,
        )
    except ValidationError as exc:
        raise EstimationError(f"Invalid estimation response: {exc}") from exc


class HttpMetricEstimator:
    """Calls the estimation service over HTTP.

    Uses an injected httpx.AsyncClient when given (tests use MockTransport);
    otherwise opens a short-lived client per call.
    """

    def __init__(
        self,
        url: str,
        *,
        api_key: str | None = None,
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the estimator.

        Args:
            url: Estimation endpoint.
            api_key: Optional bearer token.
            timeout_seconds: Request timeout; None disables the timeout.
            http_client: Optional httpx.AsyncClient for dependency injection.
        """
        self._url = url
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        """POST the request and parse the estimate.

        Raises:
            EstimationError: On transport failure, non-2xx status, or a body
                without a positive numeric estimate.
        """
        client = self._http_client
        should_close = False
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_seconds)
            should_close = True
        try:
            response = await client.post(
                self._url,
                json=request.to_wire(),
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise EstimationError(f"Estimation request failed: {type(exc).__name__}") from exc
        finally:
            if should_close:
                await client.aclose()

        if not response.is_success:
            logger.warning(
                "Estimation service returned HTTP %d for %s",
                response.status_code,
                request.metric_label,
            )
            raise EstimationError(f"Estimation service returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise EstimationError("Estimation response is not valid JSON") from exc

        return _parse_estimate(payload)


class StaticMetricEstimator:
    """Deterministic estimator returning a fixed value."""

    def __init__(
        self,
        value: float,
        *,
        confidence: EstimateConfidence = EstimateConfidence.LOW,
        reasoning: str = "Static estimate",
    ) -> None:
        self._response = EstimateResponse(
            estimated_value=value, confidence=confidence, reasoning=reasoning
        )
        self.requests: list[EstimateRequest] = []

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        self.requests.append(request)
        return self._response


class UnavailableMetricEstimator:
    """Estimator used when no estimation service is configured."""

    def __init__(self, reason: str = "No estimation service configured") -> None:
        self._reason = reason

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        raise EstimationError(self._reason)
