"""Request logging middleware.

Binds the correlation id, method and path to the structlog context for the
lifetime of a request and emits one ``request_completed`` line per request.
"""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.atogato.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

# Probes would drown out real traffic
QUIET_PATHS = frozenset({"/health", "/metrics"})


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request context and log the outcome of the request."""
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in QUIET_PATHS:
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        return response
    finally:
        clear_request_context()
