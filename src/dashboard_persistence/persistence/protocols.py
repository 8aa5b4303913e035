"""Storage resolver protocol defining the contract all backends implement."""

from __future__ import annotations

from typing import Protocol, TextIO, runtime_checkable

from dashboard_persistence.models import FileIdentity


@runtime_checkable
class IStorageResolver(Protocol):
    """Protocol for storage resolvers (local filesystem, memory, etc.).

    Every method that touches storage raises ``StorageError`` on failure.
    """

    def exists(self, identity: FileIdentity) -> bool:
        """Check whether the file currently exists."""
        ...

    def create(self, identity: FileIdentity) -> None:
        """Create an empty file. The containing directory must already exist."""
        ...

    def open_write(self, identity: FileIdentity) -> TextIO:
        """Open the file for writing, truncating any prior content."""
        ...

    def open_read(self, identity: FileIdentity) -> TextIO:
        """Open an existing file for reading text with universal newlines."""
        ...
