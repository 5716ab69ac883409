"""Observability middleware — request IDs, logging, and metrics."""

import re
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from kql_intellisense.core.config import settings
from kql_intellisense.core.metrics import (
    http_request_duration_seconds,
    http_requests_total,
)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a well-formed client request id, otherwise mint a uuid4."""
    if incoming and _REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Binds a request_id, logs each request and records HTTP metrics.

    Suggestion requests fire on every keystroke, so completed requests are
    logged at DEBUG; anything 4xx/5xx is logged at INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger = structlog.stdlib.get_logger("kql_intellisense.http")
        start = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start
        status = response.status_code

        # Route pattern keeps label cardinality independent of workspace ids
        route = request.scope.get("route")
        path = route.path if route else request.url.path
        method = request.method

        if settings.metrics_enabled:
            http_requests_total.labels(method=method, path=path, status=status).inc()
            http_request_duration_seconds.labels(method=method, path=path).observe(
                duration
            )

        response.headers[REQUEST_ID_HEADER] = request_id

        log = logger.info if status >= 400 else logger.debug
        log(
            "request_completed",
            method=method,
            path=path,
            status=status,
            duration_ms=round(duration * 1000, 2),
        )

        structlog.contextvars.clear_contextvars()
        return response
