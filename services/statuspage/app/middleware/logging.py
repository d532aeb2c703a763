"""
Request logging middleware.

Every request gets an id (taken from X-Request-ID when the caller sends one)
that is bound into the structlog context for the duration of the request and
echoed back in the response headers.
"""
import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
# Polled by probes and scrapers, not worth a log line per hit
QUIET_PATHS = frozenset({"/health", "/metrics"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        path = request.url.path
        quiet = path in QUIET_PATHS

        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request.failed",
                method=request.method,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                exc_info=True,
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        if not quiet:
            logger.info(
                "request.completed",
                request_id=request_id,
                method=request.method,
                path=path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                client=request.client.host if request.client else None,
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
