"""Exception handlers that render every failure as the error envelope.

Application errors raise MemoscopeHttpError with a stable code. Routing
errors (404, 405), body validation failures and unexpected exceptions are
translated here so clients only ever see ``{code, message, details,
request_id}``.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from memoscope.api.error_model import get_error_code_for_status, make_error_response

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the field path.
_LOCATION_ROOTS = frozenset({"body", "query", "path"})


class ErrorResponse(BaseModel):
    """Error envelope schema."""

    code: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class MemoscopeHttpError(Exception):
    """Raised by routes to return a specific status and error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Field path and message of each error; input values are never echoed."""
    errors: list[dict[str, str]] = []
    for error in exc.errors():
        path = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
        errors.append(
            {
                "field": ".".join(path) or "request",
                "message": error.get("msg", "Validation error"),
            }
        )
    return errors


async def memoscope_http_error_handler(request: Request, exc: MemoscopeHttpError) -> JSONResponse:
    return make_error_response(
        request,
        code=exc.code,
        message=exc.message,
        http_status=exc.status_code,
        details=exc.details,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Routing and framework errors: unknown path, wrong method and the like."""
    return make_error_response(
        request,
        code=get_error_code_for_status(exc.status_code),
        message=str(exc.detail) if exc.detail else f"HTTP {exc.status_code}",
        http_status=exc.status_code,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _field_errors(exc)
    return make_error_response(
        request,
        code="REQUEST_VALIDATION_FAILED",
        message="Request validation failed",
        http_status=422,
        details={"errors": errors} if errors else None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with a 500 that exposes no internals."""
    logger.exception(
        "Unhandled %s on %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return make_error_response(
        request,
        code="INTERNAL_ERROR",
        message="An internal error occurred",
        http_status=500,
    )
