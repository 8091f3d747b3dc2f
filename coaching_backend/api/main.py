"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, httpx, uvicorn, coaching_backend.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coaching_backend.api import api_router
from coaching_backend.api.routers.router_utils import exception_to_http
from coaching_backend.boundary.aws import S3MediaClient
from coaching_backend.boundary.db import dispose_engine, get_async_session_factory
from coaching_backend.configs import get_settings
from coaching_backend.core.exceptions import CoachingSiteException
from coaching_backend.core.settings_store import SiteSettingsStore
from coaching_backend.observability import configure_logging
from coaching_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Creates the shared HTTP client, settings store and media client on
    startup and releases them on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    # Startup
    if settings.auth.is_configured:
        app.state.http_client = httpx.AsyncClient(timeout=settings.auth.request_timeout)
    else:
        app.state.http_client = None
        logger.warning(
            f"{__name__}:lifespan - Identity service not configured "
            "(SUPABASE_URL / SUPABASE_ANON_KEY); every visitor is signed out"
        )

    app.state.settings_store = SiteSettingsStore(get_async_session_factory())
    app.state.media_client = S3MediaClient(
        bucket=settings.storage.bucket,
        region=settings.storage.region,
        endpoint_url=settings.storage.endpoint_url,
        public_base_url=settings.storage.public_base_url,
        cache_control=settings.storage.cache_control,
    )
    logger.info(f"{__name__}:lifespan - Application started ({settings.environment})")

    yield

    # Shutdown
    app.state.settings_store.clear()
    if app.state.http_client is not None:
        await app.state.http_client.aclose()
    await dispose_engine()
    logger.info(f"{__name__}:lifespan - Application stopped")


async def service_exception_handler(request: Request, exc: CoachingSiteException) -> JSONResponse:
    """Map service exceptions raised outside decorated handlers (e.g. in dependencies)."""
    http_exc = exception_to_http(exc)
    logger.error(
        f"{__name__}:service_exception_handler - {type(exc).__name__}: {exc.message}",
        extra={"path": request.url.path},
    )
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="Agile Coaching Site API",
        description="Course catalogue, registrations and back-office for an agile-coaching business",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_url] if settings.environment == "production" else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    if settings.observability.log_requests:
        app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationMiddleware,
        header_name=settings.observability.correlation_header,
    )

    app.add_exception_handler(CoachingSiteException, service_exception_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "coaching_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
