"""Environment-driven settings.

Environment variables:
    MEMOSCOPE_ESTIMATOR_URL: Estimation service endpoint. Unset means no
        HTTP estimator; the resolver then falls back to static defaults.
    MEMOSCOPE_ESTIMATOR_API_KEY: Optional bearer token for the service.
    MEMOSCOPE_ESTIMATOR_TIMEOUT_SECONDS: Optional positive float. Unset
        means no timeout.
    MEMOSCOPE_LOG_LEVEL: Logging level name for the CLI (default INFO).
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field

from memoscope.assumptions.estimator import (
    HttpMetricEstimator,
    MetricEstimator,
    UnavailableMetricEstimator,
)

ENV_ESTIMATOR_URL = "MEMOSCOPE_ESTIMATOR_URL"
ENV_ESTIMATOR_API_KEY = "MEMOSCOPE_ESTIMATOR_API_KEY"
ENV_ESTIMATOR_TIMEOUT = "MEMOSCOPE_ESTIMATOR_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "MEMOSCOPE_LOG_LEVEL"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigError(Exception):
    """Raised when an environment variable holds a malformed value."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings. The API key is excluded from repr."""

    estimator_url: str | None = None
    estimator_api_key: str | None = field(default=None, repr=False)
    estimator_timeout_seconds: float | None = None
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    def build_estimator(self) -> MetricEstimator:
        """Estimator for these settings; always-failing when no URL is set."""
        if not self.estimator_url:
            return UnavailableMetricEstimator()
        return HttpMetricEstimator(
            self.estimator_url,
            api_key=self.estimator_api_key,
            timeout_seconds=self.estimator_timeout_seconds,
        )


def _get_env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default).strip()


def _get_env_float(key: str) -> float | None:
    """Get an optional positive float from environment variable."""
    raw = _get_env_str(key)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{key} must be a positive number, got {raw!r}")
    return value


def load_settings() -> Settings:
    """Read settings from the environment.

    Raises:
        ConfigError: If a variable is set to a malformed value.
    """
    log_level = _get_env_str(ENV_LOG_LEVEL, "INFO").upper() or "INFO"
    if log_level not in _LOG_LEVELS:
        raise ConfigError(
            f"{ENV_LOG_LEVEL} must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}"
        )

    return Settings(
        estimator_url=_get_env_str(ENV_ESTIMATOR_URL) or None,
        estimator_api_key=_get_env_str(ENV_ESTIMATOR_API_KEY) or None,
        estimator_timeout_seconds=_get_env_float(ENV_ESTIMATOR_TIMEOUT),
        log_level=log_level,
    )
