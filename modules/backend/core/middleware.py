"""
Request Context Middleware.

Middleware for request tracking, timing, source identification, and context propagation.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.backend.core.logging import VALID_SOURCES, get_logger

logger = get_logger(__name__)

SOURCE_HEADER = "X-Frontend-ID"


def _resolve_source(request: Request) -> str:
    """Read the caller's declared source, falling back to 'unknown'."""
    source = request.headers.get(SOURCE_HEADER, "unknown").lower()
    if source not in VALID_SOURCES:
        return "unknown"
    return source


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    - Generates or propagates the request ID (X-Request-ID header)
    - Reads the caller's source from X-Frontend-ID (web, cli, api, internal)
    - Reports handling time in X-Response-Time
    - Binds request_id, source, method and path to structlog contextvars

    Access in endpoints:
        request.state.request_id
        request.state.source
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        source = _resolve_source(request)
        started = time.perf_counter()

        request.state.request_id = request_id
        request.state.source = source

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=source,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            response = await call_next(request)

            duration_ms = int((time.perf_counter() - started) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            return response

        except Exception as exc:
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()
