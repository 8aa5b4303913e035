"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from dashboard_persistence.api.middleware.error_handler import register_error_handlers
from dashboard_persistence.api.routes import health, jobs
from dashboard_persistence.core.config import APIConfig, AppSettings
from dashboard_persistence.core.startup_checks import validate_settings
from dashboard_persistence.hooks import setup_logging
from dashboard_persistence.services.persistence_service import DashboardPersistenceService


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("dashboard-persistence")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the app; ``settings`` defaults to the environment."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application startup/shutdown lifecycle."""
        resolved = settings or AppSettings()
        validate_settings(resolved)
        setup_logging(resolved.observability)

        service = DashboardPersistenceService.from_settings(resolved)
        app.state.settings = resolved
        app.state.service = service
        try:
            yield
        finally:
            service.shutdown(wait=True)

    api_config = settings.api if settings is not None else APIConfig()
    app = FastAPI(
        title=api_config.title,
        description=api_config.description,
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(jobs.router, prefix="/api")
    return app


app = create_app()
