"""
HTTP middleware: correlation IDs and per-request access logging.

CorrelationMiddleware must wrap RequestLoggingMiddleware so both access
log lines carry the request's correlation ID.

Dependencies: starlette, om2chat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from om2chat.observability.correlation import clear_correlation_id, set_correlation_id
from om2chat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line when a request arrives and one when it completes."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"

        log_with_context(
            logger, logging.INFO, route,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger, f"{route} - unhandled", e,
                method=request.method,
                path=request.url.path,
                process_time_ms=_elapsed_ms(started),
            )
            raise

        log_with_context(
            logger, _level_for_status(response.status_code),
            f"{route} - {response.status_code}",
            status_code=response.status_code,
            process_time_ms=_elapsed_ms(started),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Binds a correlation ID to the request context.

    A well-formed inbound X-Correlation-ID is reused; anything else is
    replaced with a fresh UUID. The ID is echoed on the response and
    cleared once the request finishes.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
