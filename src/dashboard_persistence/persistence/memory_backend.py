"""In-memory storage resolver: dict-backed, nothing touches disk."""

from __future__ import annotations

import io
import logging
import threading
from typing import Callable, TextIO

from dashboard_persistence.exceptions import StorageError
from dashboard_persistence.models import FileIdentity

log = logging.getLogger(__name__)


class _CommitOnClose(io.StringIO):
    """Text buffer that hands its content to a callback when closed."""

    def __init__(self, commit: Callable[[str], None]) -> None:
        super().__init__()
        self._commit = commit

    def close(self) -> None:
        if not self.closed:
            self._commit(self.getvalue())
        super().close()


class MemoryStorageResolver:
    """Stores file contents in a dict keyed by ``FileIdentity.location``.

    ``directories`` restricts which directories exist; ``None`` means any.
    """

    def __init__(self, directories: set[str] | None = None) -> None:
        self._files: dict[str, str] = {}
        self._directories = directories
        self._lock = threading.Lock()

    def _check_directory(self, identity: FileIdentity) -> None:
        if self._directories is not None and identity.directory not in self._directories:
            raise StorageError(
                f"Directory not found: {identity.directory}",
                reason="No such file or directory",
            )

    def exists(self, identity: FileIdentity) -> bool:
        with self._lock:
            return identity.location in self._files

    def create(self, identity: FileIdentity) -> None:
        self._check_directory(identity)
        with self._lock:
            self._files.setdefault(identity.location, "")

    def open_write(self, identity: FileIdentity) -> TextIO:
        self._check_directory(identity)
        with self._lock:
            self._files[identity.location] = ""

        def commit(content: str) -> None:
            with self._lock:
                self._files[identity.location] = content
            log.debug(f"Saved {identity.location} to memory store")

        return _CommitOnClose(commit)

    def open_read(self, identity: FileIdentity) -> TextIO:
        with self._lock:
            if identity.location not in self._files:
                raise StorageError(
                    f"Not found in memory store: {identity.location}",
                    reason="No such file or directory",
                )
            content = self._files[identity.location]
        # newline=None mirrors universal-newline reads from disk
        return io.StringIO(content, newline=None)

    def contents(self, identity: FileIdentity) -> str | None:
        """Raw stored text for ``identity``, or None when absent."""
        with self._lock:
            return self._files.get(identity.location)
