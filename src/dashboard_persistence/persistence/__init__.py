"""Pluggable storage resolvers for dashboard files."""

from __future__ import annotations

from pathlib import Path

from dashboard_persistence.exceptions import ConfigurationError
from dashboard_persistence.persistence.file_backend import FileStorageResolver
from dashboard_persistence.persistence.memory_backend import MemoryStorageResolver
from dashboard_persistence.persistence.protocols import IStorageResolver

__all__ = ["IStorageResolver", "FileStorageResolver", "MemoryStorageResolver", "create_resolver"]


def create_resolver(backend: str, root_path: Path | None = None, encoding: str = "utf-8") -> IStorageResolver:
    """Build the resolver named by ``PersistenceConfig.backend``."""
    if backend == "file":
        return FileStorageResolver(root_path or Path("."), encoding=encoding)
    if backend == "memory":
        return MemoryStorageResolver()
    raise ConfigurationError(f"Unknown persistence backend: {backend}")
