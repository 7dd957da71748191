"""
FastAPI Relay Application

Application factory for the payment relay. Settings are read once and turned
into immutable upstream configuration before the app is built.
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payment_proxy.config import Settings, get_settings
from payment_proxy.routes import health, payments, webhook
from payment_proxy.services.upstream_service import UpstreamService
from payment_proxy.utils.exceptions import (
    ProxyException,
    UpstreamException,
    ValidationException,
)
from payment_proxy.utils.logging_config import (
    bind_request_context,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Application settings, loaded from the environment if omitted
        transport: Optional httpx transport for upstream calls

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(log_level=settings.log_level)

    upstream_service = UpstreamService(settings.upstream, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting {settings.app_name} v{settings.app_version}",
            extra={
                "environment": settings.environment,
                "upstream": settings.upstream_base_url,
            },
        )

        missing = settings.missing_credentials()
        if missing:
            logger.warning(
                f"Upstream credentials not configured: {', '.join(missing)}",
                extra={"missing": missing},
            )

        yield

        logger.info("Shutting down application...")
        await upstream_service.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Relay for the KryptoGO payment API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.upstream_service = upstream_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        """Add correlation ID to all requests for tracing"""
        correlation_id = bind_request_context(
            request.headers.get("X-Correlation-ID"),
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response

    @app.exception_handler(ValidationException)
    async def validation_exception_handler(request: Request, exc: ValidationException):
        logger.info(
            f"Rejected request: {exc.error}",
            extra={"path": request.url.path, "error": exc.to_dict()},
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(UpstreamException)
    async def upstream_exception_handler(request: Request, exc: UpstreamException):
        return JSONResponse(status_code=exc.relay_status, content=exc.to_response())

    @app.exception_handler(ProxyException)
    async def proxy_exception_handler(request: Request, exc: ProxyException):
        logger.error(
            f"Proxy exception: {exc.message}",
            extra={"error": exc.to_dict()},
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unexpected exception: {exc}",
            extra={"error": str(exc), "type": type(exc).__name__},
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            },
        )

    app.include_router(health.router)
    app.include_router(payments.router)
    app.include_router(webhook.router)

    return app


app = create_app()
