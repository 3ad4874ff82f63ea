"""
HTTP request logging middleware.

Logs every request with method, path, status code, duration and which
credential headers were present. Header values are never logged. The request
id and gateway title are bound to the structlog context for the request.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.stdlib.get_logger("http")

_CREDENTIAL_MARKERS = ("key", "auth", "token", "private", "gasless")


def credential_presence(headers) -> dict[str, bool]:
    """Map each credential-looking header name to True without exposing its value."""
    return {
        name.lower(): True
        for name in headers.keys()
        if any(marker in name.lower() for marker in _CREDENTIAL_MARKERS)
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with timing, status and credential presence."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid.uuid4())[:8])

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, gateway=request.app.title)

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 1)

            log = logger.info if status_code < 400 else logger.warning
            if status_code >= 500:
                log = logger.error

            log(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=status_code,
                duration_ms=duration_ms,
                client=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
                credentials=sorted(credential_presence(request.headers)),
            )
