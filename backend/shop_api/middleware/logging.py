"""
ShopAPI Backend — Access Log Middleware
=========================================

What:  One access-log line per HTTP request.
Who:   Added to both services inside RequestIDMiddleware, so the request ID is
       already set when the line is written.

Line format:
    GET /products/{product_id} -> 404 (3.2ms) rid=1f2e3d4c

The matched route template is logged rather than the raw URL, so lines for
/products/1 and /products/2 group together. Unmatched paths fall back to the
raw path. Query strings and bodies are never logged (bodies carry passwords).

Log level follows the status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shop_api.middleware.request_id import request_id_var

logger = logging.getLogger("shop_api.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """`/products/{product_id}` for a matched route, the raw path otherwise."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        template = route_template(request)
        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d (%.1fms) rid=%s",
            request.method,
            template,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            extra={
                "route": template,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
        return response
