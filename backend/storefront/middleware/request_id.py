"""
Storefront Backend — Request ID Middleware
============================================

What:  Tags each request with an ID that is echoed in X-Request-ID.
How:   A well-formed client X-Request-ID is kept; anything else (missing,
       too long, or containing characters outside [A-Za-z0-9._-]) is replaced
       with a fresh 12-hex-digit ID. The ID lives in a ContextVar for the
       duration of the request so log lines and error bodies can carry it.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# IDs end up in access-log lines; keep them printable and short
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def accept_request_id(candidate: Optional[str]) -> str:
    """The client's ID when it is well-formed, otherwise a new one."""
    if candidate and _VALID_REQUEST_ID.fullmatch(candidate):
        return candidate
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
