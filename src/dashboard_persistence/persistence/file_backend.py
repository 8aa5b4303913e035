"""File-based storage resolver: dashboard files on the local filesystem."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from dashboard_persistence.exceptions import StorageError
from dashboard_persistence.models import FileIdentity

log = logging.getLogger(__name__)


class FileStorageResolver:
    """Resolves directory references against a root path on local disk.

    Absolute directories are used as-is.  Directories are never created.
    """

    def __init__(self, root_path: Path, encoding: str = "utf-8") -> None:
        self._root = root_path
        self._encoding = encoding

    def path_for(self, identity: FileIdentity) -> Path:
        return self._root / identity.directory / identity.file_name

    def exists(self, identity: FileIdentity) -> bool:
        path = self.path_for(identity)
        try:
            return path.is_file()
        except OSError as exc:
            raise StorageError(f"Cannot check {path}", reason=_reason(exc)) from exc

    def create(self, identity: FileIdentity) -> None:
        path = self.path_for(identity)
        try:
            path.touch(exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {path}", reason=_reason(exc)) from exc
        log.debug(f"Created {path}")

    def open_write(self, identity: FileIdentity) -> TextIO:
        path = self.path_for(identity)
        try:
            # newline="" keeps the payload byte-for-byte
            return path.open("w", encoding=self._encoding, newline="")
        except OSError as exc:
            raise StorageError(f"Cannot open {path} for writing", reason=_reason(exc)) from exc

    def open_read(self, identity: FileIdentity) -> TextIO:
        path = self.path_for(identity)
        try:
            return path.open("r", encoding=self._encoding)
        except OSError as exc:
            raise StorageError(f"Cannot open {path} for reading", reason=_reason(exc)) from exc


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)
