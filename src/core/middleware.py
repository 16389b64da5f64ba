"""
Request middleware.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.shared.context import (
    clear_request_context,
    set_locale,
    set_request_id,
    set_trace_id,
)
from src.shared.errors import get_message_catalog, unhandled_error_response
from src.shared.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware for request tracing and locale negotiation.

    Adds a request ID to every request, picks the locale for error messages
    from ``Accept-Language`` and logs request outcomes.
    """

    # Endpoints skipped for request logging
    SKIP_LOG_ENDPOINTS: set[str] = {
        "/observability/health",
        "/observability/live",
    }

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Process the request with tracing context and locale."""
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )
        trace_id = request.headers.get("X-Trace-ID") or request_id
        request.state.request_id = request_id

        catalog = get_message_catalog()
        locale = catalog.negotiate(request.headers.get("Accept-Language")) if catalog else ""

        set_request_id(request_id)
        set_trace_id(trace_id)
        set_locale(locale)

        start_time = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as e:
                # Answered here so the response and its log carry the request context
                response = unhandled_error_response(request, e)

            response.headers["X-Request-ID"] = request_id
            if locale:
                response.headers["Content-Language"] = locale

            self._log_request(request, response, time.perf_counter() - start_time)
            return response

        finally:
            clear_request_context()

    def _log_request(self, request: Request, response: Response, duration: float) -> None:
        """Log request details."""
        if request.url.path in self.SKIP_LOG_ENDPOINTS:
            return

        log_level = "info" if response.status_code < 400 else "warning"
        if response.status_code >= 500:
            log_level = "error"

        getattr(logger, log_level)(
            "Request completed",
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
