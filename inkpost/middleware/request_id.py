"""
Inkpost Backend — Request ID Middleware
========================================

What:  Tags every request with a correlation id and echoes it back.
How:   Accepts a caller's X-Request-ID when it is short and printable,
       otherwise mints one; the id lives in a ContextVar read by the access
       log and the error handlers, and goes back out in the response header.
When:  Outermost custom middleware, so everything after it can read the id.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids end up in log lines and error bodies
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: str | None) -> str:
    """Keep a well-formed caller id, else generate an 8-character one."""
    if header_value and _ACCEPTED_ID.match(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
