"""
FastAPI application entry point for the Finance Tracker API.

This module provides the main FastAPI application with:
- API routers mounted under the configured base path
- Identity resolution and protected-route gating
- A single error boundary producing JSON error envelopes
- Request logging with correlation IDs
- Prometheus metrics
- Health endpoint
"""

import time
import uuid
import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import APIRouter, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from prometheus_client import Counter, Gauge, Histogram, generate_latest, CONTENT_TYPE_LATEST

from finance_api.src.config import Settings, get_settings
from finance_api.src.errors import INTERNAL_ERROR_BODY, ApiError, ErrorKind, ValidationFailed, classify_error
from finance_api.src.middleware.auth import AuthMiddleware
from finance_api.src.repositories.account_repo import AccountRepository
from finance_api.src.routers import accounts, example, hello
from finance_api.src.services.identity import IdentityProvider, JWTIdentityProvider
from shared.logging import bind_context, configure_logging, unbind_context

logger = structlog.get_logger(__name__)

REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")
UNMATCHED_ENDPOINT = "unmatched"

# ============================================================================
# Prometheus Metrics
# ============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"]
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "HTTP requests currently in progress",
    ["method", "endpoint"]
)

# ============================================================================
# Request Logging and Metrics Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, metrics and correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        endpoint = route_template(request)

        bind_context(correlation_id=correlation_id)
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()

        logger.info("request_started", method=method, path=path)

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            record_request(method, endpoint, response.status_code, duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s"
            )

            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            duration = time.time() - start_time
            record_request(method, endpoint, status.HTTP_500_INTERNAL_SERVER_ERROR, duration)

            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s"
            )
            raise

        finally:
            http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()
            unbind_context("correlation_id")


def route_template(request: Request) -> str:
    """
    Resolve the route path template ("/api/accounts/{account_id}") for metric labels.

    Returns:
        The template of the first matching route, or UNMATCHED_ENDPOINT
    """
    partial: Optional[str] = None
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return route.path
        if match is Match.PARTIAL and partial is None:
            partial = route.path
    return partial or UNMATCHED_ENDPOINT


def record_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status=status_code
    ).inc()

    http_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint
    ).observe(duration)


# ============================================================================
# Exception Handlers
# ============================================================================


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an error that carries its own status and body."""
    logger.info(
        "api_error",
        path=request.url.path,
        kind=exc.kind.value,
        status_code=exc.status_code
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.body,
        headers=exc.headers
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors raised by FastAPI parameter parsing."""
    details: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in REQUEST_LOCATIONS:
            location = location[1:]
        details.setdefault(".".join(location), error["msg"])

    logger.warning("validation_error", path=request.url.path, fields=sorted(details))
    return await api_error_handler(request, ValidationFailed(details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routing (404, 405, ...)."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing their details."""
    if classify_error(exc) is not ErrorKind.UNKNOWN:
        return await api_error_handler(request, exc)

    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=dict(INTERNAL_ERROR_BODY)
    )


# ============================================================================
# Application Factory
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    settings: Settings = app.state.settings

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.log_format == "json",
        service_name=settings.app_name,
        environment=settings.environment,
    )

    logger.info(
        "application_started",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    yield

    logger.info("application_shutdown_complete")


def create_app(
    settings: Optional[Settings] = None,
    identity_provider: Optional[IdentityProvider] = None,
    account_repo: Optional[AccountRepository] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    The route table is assembled once here and not changed afterwards.

    Args:
        settings: Application settings (defaults to cached settings)
        identity_provider: Identity collaborator (defaults to JWT verification)
        account_repo: Account store (defaults to a fresh in-memory store)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Personal finance API: accounts, budgets, transactions and validation.",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.account_repo = account_repo or AccountRepository()

    # Middleware: the last one added runs first
    app.add_middleware(
        AuthMiddleware,
        identity_provider=identity_provider or JWTIdentityProvider(settings),
        protected_routes=settings.auth_protected_routes,
    )
    app.add_middleware(RequestLoggingMiddleware)

    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
        )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    api_router = APIRouter()
    api_router.include_router(hello.router)
    api_router.include_router(accounts.router, prefix="/accounts")
    api_router.include_router(example.router, prefix="/example")
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", tags=["Health"], response_class=JSONResponse)
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint.

        Returns basic health status. Use for container health checks.
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment
        }

    if settings.metrics_enabled:
        @app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
        async def metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST
            )

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()

    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "finance_api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
