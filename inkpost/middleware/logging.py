"""
Inkpost Backend — Request Logging Middleware
=============================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request id and client IP.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Privacy:
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request bodies (passwords), cookies (identity tokens), uploads
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inkpost.middleware.request_id import request_id_var

logger = logging.getLogger("inkpost.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with a level chosen from the response status:
        5xx → ERROR, 4xx → WARNING, everything else → INFO

    /health is skipped; probes would drown out real traffic.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
        )

        return response
