"""
Produtos API — Request ID Middleware
=====================================

What:  Gives every request a short correlation id and returns it in X-Request-ID.
Why:   Access log lines and error log lines of one request share the id, so a
       client reporting a 500 can hand over the header value.
How:   Reuses a well-formed incoming X-Request-ID or generates one, exposes it
       through a ContextVar for the whole request and echoes it on the response.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client ids end up in log lines, so only short token-like values are trusted
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Return the client's id when it is usable, otherwise a fresh 8-char hex id."""
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds one request id to the request's context and response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        # Left set after the response: the fallback 500 handler runs outside
        # this middleware and still logs the id
        request_id_var.set(rid)
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
