"""
Request logging middleware.

Every request gets a correlation id (taken from ``X-Correlation-ID`` when the
caller sends a usable one) that is echoed back in the response and prefixed
to the access log lines and to the error logs of the exception handlers.
"""

import logging
import re
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
_CORRELATION_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def correlation_id(request: Request) -> str:
    """Correlation id assigned to the request, or "-" outside the middleware."""
    return getattr(request.state, "correlation_id", "-")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log with method, path, status and duration per request.

    4xx/5xx responses are logged at WARNING so booking conflicts and rejected
    cancellations stand out from regular traffic.
    """

    def __init__(self, app: ASGIApp, quiet_paths: tuple[str, ...] = ("/health",)) -> None:
        super().__init__(app)
        self._quiet_paths = quiet_paths

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request.state.correlation_id = self._resolve_correlation_id(request)
        cid = request.state.correlation_id

        if request.url.path.startswith(self._quiet_paths):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = cid
            return response

        start_time = time.perf_counter()
        logger.info(f"[{cid}] --> {request.method} {request.url.path} from {self._client_ip(request)}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"[{cid}] <-- {request.method} {request.url.path} ERROR in {duration_ms:.2f}ms: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            log_level,
            f"[{cid}] <-- {request.method} {request.url.path} {response.status_code} in {duration_ms:.2f}ms",
        )

        response.headers[CORRELATION_HEADER] = cid
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response

    @staticmethod
    def _resolve_correlation_id(request: Request) -> str:
        incoming = request.headers.get(CORRELATION_HEADER)
        if incoming and _CORRELATION_PATTERN.match(incoming):
            return incoming
        return uuid.uuid4().hex[:12]

    @staticmethod
    def _client_ip(request: Request) -> str:
        # First hop of X-Forwarded-For is the original client
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
