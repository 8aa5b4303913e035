"""Nested pydantic-settings configuration for the application.

Each group reads its own ``DASHBOARD_<GROUP>_*`` env vars::

    export DASHBOARD_PERSISTENCE_ROOT_PATH=/var/lib/station/files
    export DASHBOARD_PERSISTENCE_DIRECTORY=dashboards
    export DASHBOARD_JOBS_MAX_WORKERS=2
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class PersistenceConfig(BaseSettings):
    """Storage resolver configuration.

    Env vars use ``DASHBOARD_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "DASHBOARD_PERSISTENCE_"}

    backend: Literal["file", "memory"] = "file"
    root_path: Path = Path(".")
    directory: Optional[str] = None
    encoding: str = "utf-8"


class JobsConfig(BaseSettings):
    """Background job runner configuration.

    Env vars use ``DASHBOARD_JOBS_`` prefix.
    """

    model_config = {"env_prefix": "DASHBOARD_JOBS_"}

    max_workers: int = Field(default=4, ge=1, le=64)
    thread_name_prefix: str = "dashboard-persistence"
    wait_timeout_seconds: float = Field(default=30.0, gt=0.0)
    retention_seconds: Optional[float] = Field(default=3600.0, ge=0.0)


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``DASHBOARD_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "DASHBOARD_OBSERVABILITY_"}

    service_name: str = "dashboard-persistence"
    log_level: str = "INFO"
    # "auto" renders for a console on a TTY and JSON lines otherwise
    log_format: Literal["auto", "console", "json"] = "auto"


class APIConfig(BaseSettings):
    """HTTP surface configuration.

    Env vars use ``DASHBOARD_API_`` prefix.
    """

    model_config = {"env_prefix": "DASHBOARD_API_"}

    title: str = "Dashboard Persistence"
    description: str = "Background save/load of dashboard state files"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    persistence: PersistenceConfig = PersistenceConfig()
    jobs: JobsConfig = JobsConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    api: APIConfig = APIConfig()
