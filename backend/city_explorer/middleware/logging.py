"""
City Explorer Backend — Request Logging Middleware
====================================================

What:  One access-log line per request: method, path, status, duration,
       request ID and client IP.
How:   Log level follows the status class (5xx ERROR, 4xx WARNING, else
       INFO). Query strings are not logged; they carry user search text.

Typical durations:
    GET /location (cache hit)   5-20ms
    GET /location (cache miss)  300-1000ms (LocationIQ round trip)
    GET /weather, /parks, ...   200-1500ms (one provider call)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from city_explorer.middleware.request_id import request_id_var

logger = logging.getLogger("city_explorer.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request except health probes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        path = request.url.path

        if path == "/health":
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
