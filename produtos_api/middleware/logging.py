"""
Produtos API — Request Logging Middleware
==========================================

What:  One access log line per HTTP request, e.g.
           PUT /produtos/7 → 404 in 2.4ms [rid=1f3a9c0e]
How:   Times the downstream call; the level follows the status class
       (5xx → ERROR, 4xx → WARNING, otherwise INFO). A request that escapes
       the exception handlers is logged as 500 and re-raised.

Request bodies are never logged. /health is skipped: probes hit it every few
seconds and would drown the product traffic.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from produtos_api.middleware.request_id import request_id_var

logger = logging.getLogger("produtos_api.access")

SKIPPED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise

        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get()
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        logger.log(
            level_for_status(status),
            "%s %s → %d in %.1fms [rid=%s]",
            request.method,
            target,
            status,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
