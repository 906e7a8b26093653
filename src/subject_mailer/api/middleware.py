"""FastAPI middleware for request tracing and logging."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by Prometheus and load balancers; logged at debug only
QUIET_PATHS = frozenset({"/metrics", "/health"})


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line of a request.

    The id comes from the caller's X-Request-ID header when present, else a
    fresh UUID4, and is echoed back on the response. One summary line is
    logged per request: warning for 5xx, info otherwise, debug for polling
    endpoints.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        path = request.url.path

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        start_time = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    "Request failed",
                    exc_info=exc,
                    duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
                raise

            if path in QUIET_PATHS:
                log = logger.debug
            elif response.status_code >= 500:
                log = logger.warning
            else:
                log = logger.info
            log(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            # Prevent context leakage to other requests
            structlog.contextvars.clear_contextvars()
