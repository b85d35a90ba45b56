"""FastAPI application entry point.

Configures the application with logging, exception handling, metrics,
health checks and the search route.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wayuu_search import __version__
from wayuu_search.api.dependencies import build_services
from wayuu_search.api.routes import router
from wayuu_search.config import get_settings
from wayuu_search.exceptions import ErrorCode, WayuuSearchError
from wayuu_search.logging_config import get_logger, setup_logging
from wayuu_search.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)
from wayuu_search.observability.request_logging import RequestLoggingMiddleware

logger = get_logger(__name__)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.COLLECTION_NOT_FOUND: 404,
    ErrorCode.VECTOR_STORE_AUTH_ERROR: 502,
    ErrorCode.LLM_RATE_LIMIT: 429,
    ErrorCode.LLM_TIMEOUT: 504,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the shared clients on startup and closes them on shutdown.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)

    app.state.services = build_services(settings)
    logger.info(
        "Starting Wayuu search service",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
            "collection": settings.qdrant.collection_name,
            "remote_embeddings": settings.embedding.remote_enabled,
        },
    )

    yield

    logger.info("Shutting down Wayuu search service")
    await app.state.services.close()
    app.state.services = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Raises:
        ConfigurationError: If required settings are missing.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Wayuu Semantic Search",
        description="Semantic search and grounded answers over Wayuu documents",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.services = None

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(WayuuSearchError, search_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_api_route("/", service_info, methods=["GET"], tags=["Info"])
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["Metrics"])
    app.include_router(router)

    return app


def error_body(
    request: Request,
    status_code: int,
    message: str | list[str],
    error: str | None = None,
) -> dict[str, Any]:
    """Build the error envelope returned for every failed request."""
    return {
        "message": message,
        "statusCode": status_code,
        "error": error or HTTPStatus(status_code).phrase,
        "timestamp": datetime.now(UTC).isoformat(),
        "path": request.url.path,
    }


async def search_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle WayuuSearchError exceptions."""
    if not isinstance(exc, WayuuSearchError):
        return await unhandled_exception_handler(request, exc)

    status_code = _STATUS_BY_CODE.get(exc.code, 500)
    logger.error(
        f"HTTP {status_code} Error: {exc.message} - {request.method} {request.url.path}",
        extra={"error_code": exc.code.value, "details": exc.details},
    )
    return JSONResponse(
        status_code=status_code,
        content=error_body(request, status_code, exc.message),
    )


async def http_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle HTTP exceptions raised by routing or handlers."""
    if not isinstance(exc, StarletteHTTPException):
        return await unhandled_exception_handler(request, exc)

    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("message") or HTTPStatus(exc.status_code).phrase
        error = detail.get("error")
    else:
        message = str(detail)
        error = None

    logger.warning(
        f"HTTP {exc.status_code} Error: {message} - {request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, exc.status_code, message, error),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Report request validation failures as 400 with one message per field."""
    if not isinstance(exc, RequestValidationError):
        return await unhandled_exception_handler(request, exc)

    messages = [
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(
        f"HTTP 400 Error: validation failed - {request.method} {request.url.path}",
        extra={"errors": messages},
    )
    return JSONResponse(
        status_code=400,
        content=error_body(request, 400, messages),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Last-resort handler for unexpected exceptions."""
    logger.error(
        f"Unhandled exception: {exc} - {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_body(request, 500, "Internal server error"),
    )


async def service_info() -> dict[str, Any]:
    """Describe the service and its endpoints."""
    return {
        "message": "Wayuu Semantic Search API",
        "version": __version__,
        "status": "operational",
        "timestamp": datetime.now(UTC).isoformat(),
        "endpoints": {
            "GET /": "API information",
            "POST /search": "Semantic search through Wayuu documents",
            "GET /health": "Health check",
            "GET /metrics": "Prometheus metrics",
        },
    }


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(request: Request) -> JSONResponse:
    """Kubernetes readiness probe.

    Ready once the clients are built and the collection is reachable.
    """
    checks: dict[str, str] = {"config": "ok"}

    services = getattr(request.app.state, "services", None)
    if services is None:
        checks["vector_store"] = "not_initialized"
    else:
        try:
            exists = await services.vector_store.collection_exists(services.collection)
            checks["vector_store"] = "ok" if exists else "collection_missing"
        except WayuuSearchError as e:
            logger.warning(f"Readiness check failed: {e.message}")
            checks["vector_store"] = "unavailable"

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


# Create the application instance
app = create_app()
