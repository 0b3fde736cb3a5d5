"""Tests for environment-driven settings."""

from __future__ import annotations

import logging

import pytest

from memoscope.assumptions.estimator import HttpMetricEstimator, UnavailableMetricEstimator
from memoscope.config import (
    ENV_ESTIMATOR_API_KEY,
    ENV_ESTIMATOR_TIMEOUT,
    ENV_ESTIMATOR_URL,
    ENV_LOG_LEVEL,
    ConfigError,
    Settings,
    load_settings,
)


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings == Settings()
        assert settings.log_level == "INFO"
        assert settings.log_level_value == logging.INFO

    def test_reads_estimator_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_ESTIMATOR_URL, " https://estimator.test/v1/estimate ")
        monkeypatch.setenv(ENV_ESTIMATOR_API_KEY, "secret-token")
        monkeypatch.setenv(ENV_ESTIMATOR_TIMEOUT, "2.5")

        settings = load_settings()

        assert settings.estimator_url == "https://estimator.test/v1/estimate"
        assert settings.estimator_api_key == "secret-token"
        assert settings.estimator_timeout_seconds == 2.5

    def test_log_level_is_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_level_value == logging.DEBUG

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_LOG_LEVEL, "LOUD")
        with pytest.raises(ConfigError, match=ENV_LOG_LEVEL):
            load_settings()

    @pytest.mark.parametrize("raw", ["abc", "0", "-1", "inf", "nan"])
    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv(ENV_ESTIMATOR_TIMEOUT, raw)
        with pytest.raises(ConfigError, match=ENV_ESTIMATOR_TIMEOUT):
            load_settings()

    def test_blank_values_are_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_ESTIMATOR_URL, "   ")
        monkeypatch.setenv(ENV_ESTIMATOR_TIMEOUT, "")
        settings = load_settings()
        assert settings.estimator_url is None
        assert settings.estimator_timeout_seconds is None


class TestSettings:
    def test_api_key_not_in_repr(self) -> None:
        settings = Settings(estimator_url="https://x.test", estimator_api_key="secret-token")
        assert "secret-token" not in repr(settings)

    def test_builds_unavailable_estimator_without_url(self) -> None:
        assert isinstance(Settings().build_estimator(), UnavailableMetricEstimator)

    def test_builds_http_estimator_with_url(self) -> None:
        estimator = Settings(estimator_url="https://x.test").build_estimator()
        assert isinstance(estimator, HttpMetricEstimator)
