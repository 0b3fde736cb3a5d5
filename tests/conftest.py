"""Pytest configuration and fixtures for memoscope tests."""

from __future__ import annotations

import pytest

from memoscope.config import (
    ENV_ESTIMATOR_API_KEY,
    ENV_ESTIMATOR_TIMEOUT,
    ENV_ESTIMATOR_URL,
    ENV_LOG_LEVEL,
)


@pytest.fixture(autouse=True)
def clear_memoscope_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without estimator or logging configuration.

    Tests that exercise configuration set the variables they need.
    """
    for key in (ENV_ESTIMATOR_URL, ENV_ESTIMATOR_API_KEY, ENV_ESTIMATOR_TIMEOUT, ENV_LOG_LEVEL):
        monkeypatch.delenv(key, raising=False)
