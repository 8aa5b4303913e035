"""Startup validation for the dashboard store.

Directories are never created by a save, so a missing root is fatal and a
missing default directory is worth a warning before the first request.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from dashboard_persistence.exceptions import ConfigurationError

if TYPE_CHECKING:
    from dashboard_persistence.core.config import AppSettings

log = logging.getLogger(__name__)

_CONTAINER_ENV_VARS = ("ECS_CONTAINER_METADATA_URI", "KUBERNETES_SERVICE_HOST")


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ConfigurationError on fatal misconfig."""
    _check_root_path(settings)
    _check_default_directory(settings)
    _check_memory_backend(settings)


def _check_root_path(settings: AppSettings) -> None:
    if settings.persistence.backend != "file":
        return
    root = settings.persistence.root_path
    if not root.is_dir():
        raise ConfigurationError(
            f"DASHBOARD_PERSISTENCE_ROOT_PATH '{root}' does not exist or is not a directory. "
            f"Create it before starting the service."
        )


def _check_default_directory(settings: AppSettings) -> None:
    """Warn when requests without a directory would all fail to create their file."""
    persistence = settings.persistence
    if persistence.backend != "file" or not persistence.directory:
        return
    target = persistence.root_path / persistence.directory
    if not target.is_dir():
        log.warning(
            f"DASHBOARD_PERSISTENCE_DIRECTORY '{persistence.directory}' resolves to {target}, "
            f"which does not exist. Saving any dashboard key there will fail until it is created."
        )


def _check_memory_backend(settings: AppSettings) -> None:
    """Dashboard layouts kept in memory do not survive a container restart."""
    if settings.persistence.backend != "memory":
        return
    if any(os.environ.get(name) for name in _CONTAINER_ENV_VARS):
        log.warning(
            "DASHBOARD_PERSISTENCE_BACKEND=memory in a container: custom cards, hidden points "
            "and card order saved by dashboards are lost on restart. Use the file backend "
            "with DASHBOARD_PERSISTENCE_ROOT_PATH on a mounted volume."
        )
