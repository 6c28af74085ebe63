"""
CORS Filter - FastAPI Application

Host application with the CORS filter registered in front of its routes.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from corsfilter.config import ConfigurationProvider, CORSFilterSettings, settings
from corsfilter.middleware.cors import setup_cors
from corsfilter.middleware.logging import logging_middleware
from corsfilter.routes import config, health


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger = structlog.get_logger()
    policy = app.state.cors_config.current()

    logger.info(
        "Starting CORS filter service",
        version=app.version,
        cors_enabled=policy.enabled,
        allowed_origins=policy.allowed_origins,
    )
    try:
        yield
    finally:
        logger.info("Shutting down CORS filter service")


def create_app(
    provider: ConfigurationProvider | None = None,
    app_settings: CORSFilterSettings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.SERVICE_NAME,
        description="Allow-list based CORS filter in front of the application routes",
        version=app_settings.SERVICE_VERSION,
        docs_url="/docs" if app_settings.DEBUG else None,
        redoc_url="/redoc" if app_settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Setup CORS filter
    setup_cors(app, provider or ConfigurationProvider(app_settings))

    # Add logging middleware, outermost so preflight answers are logged too
    @app.middleware("http")
    async def add_logging_middleware(request, call_next):
        return await logging_middleware(request, call_next)

    # Include routers
    app.include_router(health.router, tags=["health"])

    if app_settings.CONFIG_API_ENABLED:
        app.include_router(config.router, tags=["cors"])

    # Prometheus instrumentation
    if app_settings.ENABLE_METRICS:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "corsfilter.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )
