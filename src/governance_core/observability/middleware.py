"""
governance_core.observability.middleware

HTTP middleware for request-scoped logging context.

Responsibilities:
- Accept or mint an `x-request-id` per HTTP request and echo it back.
- Bind it (with method/path) into structlog contextvars for every log line.
- Emit one access log line per request with status and latency.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from governance_core.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        http_request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            http_request_id=http_request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            response: Response = await call_next(request)
            log.info(
                "http_request",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = http_request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Orchestrator calls bind their own `governance_request_id`; the two ids differ
# because one HTTP call can carry any governance request id in its body.
