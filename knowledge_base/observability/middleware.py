"""
Request observability middleware.

CorrelationMiddleware assigns each request a correlation id (taken from the
X-Correlation-ID header when present) and echoes it on the response.
RequestLoggingMiddleware logs one line per request with status and latency.

Dependencies: fastapi, starlette, knowledge_base.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from knowledge_base.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Polled by load balancers; logged at DEBUG only
_QUIET_PATHS = ("/api/v1/health",)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status, and latency of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        path = request.url.path
        context = {
            "method": request.method,
            "path": path,
            "client_host": request.client.host if request.client else None,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {path} - unhandled {type(e).__name__}",
                extra={**context, "duration_ms": _elapsed_ms(started)},
            )
            raise

        level = logging.DEBUG if path.startswith(_QUIET_PATHS) else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} - {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to the request context and the response headers."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
