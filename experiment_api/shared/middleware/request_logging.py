"""Request logging middleware.

Every request gets an id, taken from an incoming ``X-Request-ID`` header when
the proxy set one. The id is bound to the structlog context so that all log
lines emitted while serving the request carry it, and is echoed back on the
response.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from experiment_api.core.logging import logger

REQUEST_ID_HEADER = "X-Request-ID"


def client_address(request: Request) -> str:
    """Best-effort caller address, honouring reverse proxy headers."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.headers.get("x-real-ip"):
        return request.headers["x-real-ip"]
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one start and one end event per request, with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            http_method=request.method,
            http_path=request.url.path,
        )

        started = time.perf_counter()
        logger.info(
            "request_received",
            client=client_address(request),
            bearer_present="authorization" in request.headers,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_crashed",
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                error_type=type(exc).__name__,
            )
            raise

        logger.info(
            "request_served",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
