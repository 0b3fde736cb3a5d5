"""Request correlation IDs.

A caller-supplied ``X-Request-Id`` is reused so memoscope log lines and
error envelopes line up with the caller's own logs; otherwise a fresh
uuid4 is issued. The ID is echoed on every response.
"""

import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-Id"


def resolve_request_id(header_value: str | None) -> str:
    """Stripped incoming ID, or a new uuid4 when absent or blank."""
    if header_value is not None and header_value.strip():
        return header_value.strip()
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Stores the ID on ``request.state.request_id`` and sets the response header."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request.state.request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
