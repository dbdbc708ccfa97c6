"""
FastAPI middleware for observability.

Correlation ID and request logging middleware.

Dependencies: fastapi, starlette, mediator.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from mediator.observability.correlation import clear_correlation_id, set_correlation_id
from mediator.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
PIN_HEADER = "X-Partner-Pin"
QUIET_PATHS = ("/api/v1/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request on arrival and one on completion.

    Health checks log at DEBUG. The partner PIN header is reported only as
    present or absent.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO

        log_with_context(
            logger,
            level,
            f"{method} {path}",
            client_host=request.client.host if request.client else None,
            has_pin=PIN_HEADER in request.headers,
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{method} {path} - Exception",
                e,
                process_time_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        log_with_context(
            logger,
            level,
            f"{method} {path} - {response.status_code}",
            status_code=response.status_code,
            process_time_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        """
        Inject correlation ID into request context and echo it on the response.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
