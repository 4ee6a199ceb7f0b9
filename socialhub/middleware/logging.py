"""
SocialHub Backend - Request Logging Middleware
================================================

What:  One access-log line per HTTP request.
How:   Times the downstream handler and logs method, route, status,
       duration, request ID and client IP.

The route is logged as its template (/api/posts/like/{post_id}) when one
matched, so log aggregation groups all likes together instead of one
bucket per post.

Never logged: request bodies (post text, comments) and Authorization headers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from socialhub.middleware.request_id import request_id_var

logger = logging.getLogger("socialhub.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = frozenset({"/health", "/"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for the posts API."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client = request.client.host if request.client else "unknown"
        route = _route_template(request)

        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d (%.1fms) rid=%s client=%s",
            request.method,
            route,
            response.status_code,
            elapsed_ms,
            rid,
            client,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client,
            },
        )
        return response
