"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dashboard_persistence.exceptions import (
    ConfigurationError,
    DashboardPersistenceError,
    JobError,
    JobNotFoundError,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(JobNotFoundError)
    async def handle_not_found(request: Request, exc: JobNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc), "type": "not_found"})

    @app.exception_handler(JobError)
    async def handle_job_error(request: Request, exc: JobError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"error": str(exc), "type": "job_error"})

    @app.exception_handler(ConfigurationError)
    async def handle_config_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "configuration_error"})

    @app.exception_handler(DashboardPersistenceError)
    async def handle_generic_error(request: Request, exc: DashboardPersistenceError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "dashboard_persistence_error"})
