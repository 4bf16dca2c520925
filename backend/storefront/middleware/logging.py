"""
Storefront Backend — Access Log Middleware
============================================

What:  One `storefront.access` line per request.
How:   Times call_next, then logs method, path, status, duration, request ID
       and client. Requests that raise are logged at ERROR with status 500
       before the exception propagates to the server error handler.
       Request bodies are never logged: orders carry customer names and
       phone numbers.

Example lines:
    2024-05-02T10:14:03 [INFO] storefront.access: POST /orders 201 12.4ms [1f2e3d4c5b6a] from 10.0.0.7
    2024-05-02T10:14:09 [WARNING] storefront.access: POST /orders 400 3.1ms [9a8b7c6d5e4f] from 10.0.0.7
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")

# Load balancer probes
QUIET_PATHS = frozenset({"/health"})


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
        if request.url.path in QUIET_PATHS:
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
        duration_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        rid = request_id_var.get()
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client,
            extra={"request_id": rid, "status": status, "duration_ms": round(duration_ms, 2)},
        )
