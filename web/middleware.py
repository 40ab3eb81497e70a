"""
FastAPI middleware for observability.

Every request gets a correlation ID (reusing X-Request-ID when the caller
sends one) so that dashboard requests and the orders service calls they
trigger share one ID in the logs.
"""
import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.observability import (
    get_logger,
    generate_correlation_id,
    set_correlation_id,
    metrics,
)
from web.config import QUIET_PATHS

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _metrics_key(request: Request) -> str:
    """Method and matched route template; unrouted paths share one key."""
    route = request.scope.get("route")
    return f"{request.method} {getattr(route, 'path', None) or 'unmatched'}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Correlation IDs, request logging and request metrics.

    Health checks are not logged but still counted.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("X-Request-ID") or generate_correlation_id()
        set_correlation_id(correlation_id)

        endpoint = f"{request.method} {request.url.path}"
        log_extra = {"method": request.method, "path": request.url.path}
        verbose = request.url.path not in QUIET_PATHS
        start = time.perf_counter()

        if verbose:
            client_ip = request.client.host if request.client else "unknown"
            logger.info(f"Request started: {endpoint}", extra={**log_extra, "client_ip": client_ip})

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Request failed: {endpoint}",
                extra={**log_extra, "duration_ms": _elapsed_ms(start), "error": str(e)}
            )
            metrics.record_error(type(e).__name__)
            raise

        duration_ms = _elapsed_ms(start)
        response.headers["X-Request-ID"] = correlation_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        # One entry per route, not per concrete path
        metrics_key = _metrics_key(request)
        metrics.record_request(metrics_key)
        metrics.record_timing(metrics_key, duration_ms)

        failed = response.status_code >= 400
        if failed:
            metrics.record_error(f"HTTP_{response.status_code}")

        if verbose:
            logger.log(
                logging.WARNING if failed else logging.INFO,
                f"Request completed: {endpoint}",
                extra={**log_extra, "status_code": response.status_code, "duration_ms": duration_ms}
            )

        return response
