"""Pydantic data models for dashboard-persistence."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OPERATION = "save"
DEFAULT_DATA_KEY = "dashboard_state"
DEFAULT_PAYLOAD = ""

FILE_NAME_PREFIX = "dashboard_"
FILE_NAME_SUFFIX = ".json"


class Operation(str, Enum):
    SAVE = "save"
    LOAD = "load"


# ── Task configuration ───────────────────────────────────────────────


class TaskConfiguration(BaseModel):
    """Inputs for one persistence run, read once at task start.

    ``operation`` stays a plain string so an unrecognized value reaches
    dispatch and fails the job instead of failing construction.  ``None``
    for ``operation`` or ``data_key`` falls back to the default; ``payload``
    must be a string when given.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    directory: Optional[str] = None
    operation: str = DEFAULT_OPERATION
    data_key: str = Field(default=DEFAULT_DATA_KEY, alias="dataKey")
    payload: str = Field(default=DEFAULT_PAYLOAD, alias="jsonData")

    @field_validator("operation", mode="before")
    @classmethod
    def _default_operation(cls, value: Any) -> Any:
        return DEFAULT_OPERATION if value is None else value

    @field_validator("data_key", mode="before")
    @classmethod
    def _default_data_key(cls, value: Any) -> Any:
        return DEFAULT_DATA_KEY if value is None else value

    @field_validator("directory", mode="before")
    @classmethod
    def _blank_directory(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            value = os.fspath(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


def file_name_for(data_key: str) -> str:
    """Map a logical data key to its file name, e.g. ``dashboard_customCards.json``."""
    return f"{FILE_NAME_PREFIX}{data_key}{FILE_NAME_SUFFIX}"


class FileIdentity(BaseModel):
    """The concrete location a (directory, data_key) pair maps to."""

    model_config = ConfigDict(frozen=True)

    directory: str
    file_name: str

    @classmethod
    def for_key(cls, directory: str, data_key: str) -> FileIdentity:
        return cls(directory=directory, file_name=file_name_for(data_key))

    @property
    def location(self) -> str:
        return str(PurePosixPath(self.directory) / self.file_name)


# ── Operation results ────────────────────────────────────────────────


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    IO = "io"


class OperationResult(BaseModel):
    """Outcome of a single Save or Load, aggregated into the job status.

    ``cleanup_error`` records a failed stream close; it never changes ``ok``.
    """

    ok: bool = True
    error_kind: Optional[ErrorKind] = None
    reason: str = ""
    cleanup_error: str = ""
    chars: int = 0

    @classmethod
    def success(cls, chars: int = 0) -> OperationResult:
        return cls(ok=True, chars=chars)

    @classmethod
    def failure(cls, kind: ErrorKind, reason: str) -> OperationResult:
        return cls(ok=False, error_kind=kind, reason=reason)


# ── Job models ───────────────────────────────────────────────────────


class JobState(str, Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.SUCCEEDED, JobState.FAILED)


class JobLogEntry(BaseModel):
    """One line in a job's append-only log."""

    level: Literal["message", "failed"]
    text: str
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class JobStatus(BaseModel):
    """Point-in-time snapshot of a job, safe to hand to callers."""

    job_id: str
    name: str = ""
    state: JobState
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    error: Optional[str] = None
    log: list[JobLogEntry] = Field(default_factory=list)
