"""
JournalFit Backend — Access Log Middleware
============================================

What:  One access-log line per HTTP request.
How:   Times the downstream handler and logs the outcome together with the
       request ID assigned by RequestIDMiddleware.

Logged: method, path, status, duration, response size, client address.
Never logged: request bodies. Manuscripts are unpublished work.

Typical durations:
    - POST /documents/analyze: 3-15s (one provider call dominates)
    - POST /documents/generate-by-template*: 10-60s (whole-article rewrite)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from journalfit.middleware.request_id import request_id_var

logger = logging.getLogger("journalfit.access")

# Probes and API docs
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """5xx at ERROR, 4xx at WARNING, everything else at INFO."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "unknown"
        size = response.headers.get("content-length", "-")
        logger.log(
            level_for_status(response.status_code),
            "[%s] %s %s -> %d in %.0fms (%s bytes) from %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            size,
            client,
        )
        return response
