"""Request logging and context propagation.

Each request gets a correlation id (taken from X-Correlation-ID or freshly
generated) and the acting principal from X-Principal-ID. Both are bound
into the observability context for the duration of the request so that
service log lines carry them, and the correlation id is echoed back.

Completion is logged at a level that follows the response class:
rejections (4xx) at warning, server faults (5xx) at error.
"""

import time
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from grievance_workflow.infrastructure.observability.correlation import (
    bind_request_context,
    generate_correlation_id,
    reset_request_context,
)

CORRELATION_HEADER = "X-Correlation-ID"
PRINCIPAL_HEADER = "X-Principal-ID"

logger = structlog.get_logger("grievance_workflow.api")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        tokens = bind_request_context(correlation_id, request.headers.get(PRINCIPAL_HEADER))
        log = logger.bind(method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                log.exception(
                    "request_failed",
                    duration_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                )
                raise

            status = response.status_code
            emit = log.error if status >= 500 else log.warning if status >= 400 else log.info
            emit("request_completed", status_code=status, duration_ms=_elapsed_ms(started))
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            reset_request_context(tokens)
