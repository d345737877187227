"""
JournalFit Backend — Request ID Middleware
============================================

What:  Gives every request a correlation ID and echoes it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused only if it is short and made
       of safe characters, since it ends up verbatim in log lines. Otherwise
       an 8-character ID is generated. The ID is stored in a ContextVar for
       loggers and exception handlers.

A provider failure is logged by DocumentService, by the exception handler
and by the access log; the shared ID ties those lines to one request.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    """The client's ID when it is safe to log, else a fresh one."""
    if supplied and _SAFE_REQUEST_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
