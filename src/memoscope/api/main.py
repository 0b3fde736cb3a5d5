"""FastAPI application factory for the memoscope API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from memoscope import __version__
from memoscope.api.errors import (
    MemoscopeHttpError,
    generic_exception_handler,
    http_exception_handler,
    memoscope_http_error_handler,
    request_validation_error_handler,
)
from memoscope.api.middleware.request_id import RequestIdMiddleware
from memoscope.api.routes.analysis import router as analysis_router
from memoscope.api.routes.financials import router as financials_router
from memoscope.api.routes.health import router as health_router
from memoscope.assumptions.estimator import MetricEstimator
from memoscope.config import load_settings

logger = logging.getLogger(__name__)


def create_app(estimator: MetricEstimator | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        estimator: Estimation collaborator for the anchored-assumptions
            route. If None, it is built from environment settings.

    Returns:
        Configured FastAPI application instance.
    """
    if estimator is None:
        estimator = load_settings().build_estimator()

    app = FastAPI(
        title="memoscope API",
        description="Deterministic narrative analysis and scoring for investment memos",
        version=__version__,
    )
    app.state.estimator = estimator
    logger.debug("Estimator configured: %s", type(estimator).__name__)

    app.add_exception_handler(MemoscopeHttpError, memoscope_http_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.add_middleware(RequestIdMiddleware)

    app.include_router(health_router)
    app.include_router(analysis_router)
    app.include_router(financials_router)

    return app
