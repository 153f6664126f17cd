"""
iam_service.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Generate/propagate request IDs.
- Bind request metadata into structlog contextvars.
- Emit one access log line per request (status + latency, no headers or bodies).
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from iam_service.observability.logging import get_logger

log = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Request bodies carry credentials on /api/auth/login and are never logged here.
