"""A single tracked execution: append-only log plus terminal status."""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone

from dashboard_persistence.exceptions import JobError
from dashboard_persistence.models import JobLogEntry, JobState, JobStatus

log = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Job:
    """One execution instance owned by a ``JobRunner``.

    Log entries are mirrored to the module logger.  The first failure reason
    recorded is the job's error; later failures are logged but never
    replace it.
    """

    def __init__(self, name: str = "", job_id: str | None = None) -> None:
        self.job_id = job_id or uuid.uuid4().hex[:12]
        self.name = name
        self.created_at = _now()
        self.started_at: datetime | None = None
        self.finished_at: datetime | None = None
        self._state = JobState.QUEUED
        self._error: str | None = None
        self._entries: list[JobLogEntry] = []
        self._lock = threading.Lock()
        self._done = threading.Event()

    @property
    def state(self) -> JobState:
        with self._lock:
            return self._state

    @property
    def error(self) -> str | None:
        with self._lock:
            return self._error

    @property
    def entries(self) -> list[JobLogEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def has_failed(self) -> bool:
        return self.error is not None

    def message(self, text: str) -> None:
        """Append an informational entry."""
        with self._lock:
            self._entries.append(JobLogEntry(level="message", text=text))
        log.info(text)

    def failed(self, reason: str, terminal: bool = True) -> None:
        """Append a failure entry.

        The first terminal failure becomes the job's error.  Non-terminal
        failures (e.g. a stream that would not close) are logged only.
        """
        with self._lock:
            self._entries.append(JobLogEntry(level="failed", text=reason))
            if terminal and self._error is None:
                self._error = reason
        log.error(reason)

    def mark_running(self) -> None:
        with self._lock:
            if self._state is not JobState.QUEUED:
                raise JobError(f"Job {self.job_id} already started ({self._state.value})")
            self._state = JobState.RUNNING
            self.started_at = _now()

    def finish(self) -> JobState:
        """Move to the terminal state implied by the recorded failures."""
        with self._lock:
            self._state = JobState.FAILED if self._error is not None else JobState.SUCCEEDED
            self.finished_at = _now()
            state = self._state
        self._done.set()
        return state

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the job is terminal. Returns False on timeout."""
        return self._done.wait(timeout)

    def status(self) -> JobStatus:
        with self._lock:
            return JobStatus(
                job_id=self.job_id,
                name=self.name,
                state=self._state,
                created_at=self.created_at,
                started_at=self.started_at,
                finished_at=self.finished_at,
                error=self._error,
                log=list(self._entries),
            )

    def __repr__(self) -> str:
        return f"Job(job_id={self.job_id!r}, name={self.name!r}, state={self.state.value})"
