"""FastAPI application factory for taglit."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from taglit import __version__
from taglit.api.deps import init_session_manager, reset_session_manager
from taglit.api.middleware import (
    RequestBodyLimitMiddleware,
    RequestTimingMiddleware,
    SecurityHeadersMiddleware,
)
from taglit.api.routers import analyze, catalog, sessions
from taglit.api.schemas import HealthResponse
from taglit.service.session_manager import SessionManager
from taglit.settings import Settings

logger = logging.getLogger("taglit.api")


def build_session_manager(settings: Settings) -> SessionManager:
    return SessionManager(
        ttl_seconds=settings.session_ttl_seconds,
        cleanup_interval=settings.session_cleanup_interval,
        leaders=settings.literal_leaders,
        max_nesting_depth=settings.max_nesting_depth,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Start/stop the SessionManager alongside the application."""
    mgr = build_session_manager(app.state.settings)
    mgr.start()
    init_session_manager(mgr)
    try:
        yield
    finally:
        mgr.stop()
        reset_session_manager()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="taglit",
        description="HTML diagnostics, fold ranges and completions for tagged template literals.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware)

    app.include_router(analyze.router, prefix="/analyze", tags=["analyze"])
    app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
    app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "taglit API server v%s starting (host=%s, port=%d, leaders=%s)",
        __version__,
        settings.api_server_host,
        settings.effective_port,
        ",".join(settings.literal_leaders),
    )

    uvicorn.run(
        "taglit.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
