"""Access log middleware."""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from wayuu_search.logging_config import get_logger

logger = get_logger("http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request once the response is ready.

    Format: ``METHOD path status content-length - user-agent - Nms``.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Time the request and log its outcome."""
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        content_length = response.headers.get("content-length", "-")
        user_agent = request.headers.get("user-agent", "")

        logger.info(
            f"{request.method} {path} {response.status_code} {content_length}"
            f" - {user_agent} - {duration_ms:.0f}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
