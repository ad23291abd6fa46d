"""
Request logging middleware.

Each request gets an id, taken from a well-formed incoming
``X-Request-ID`` header or generated, which is bound to the logging
context for the lifetime of the request and echoed back in the response.
"""

import re
import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from stockledger.config import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Stock-changing calls are logged at info, reads at debug
_WRITE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def resolve_request_id(header_value: str | None) -> str:
    if header_value and _REQUEST_ID_PATTERN.fullmatch(header_value):
        return header_value
    return uuid.uuid4().hex[:8]


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds request context, logs the outcome and sets tracing headers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        bind_request_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        log = logger.info if request.method in _WRITE_METHODS else logger.debug
        start = time.perf_counter()

        try:
            log("request_started", client=request.client.host if request.client else None)
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("request_failed", duration_ms=_elapsed_ms(start))
                raise

            duration_ms = _elapsed_ms(start)
            if response.status_code >= 500:
                log = logger.error
            elif response.status_code >= 400:
                log = logger.warning
            log("request_completed", status=response.status_code, duration_ms=duration_ms)
        finally:
            clear_request_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
