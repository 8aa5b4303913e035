"""Worker-pool job runner with a scoped started/ended span.

Usage::

    with JobRunner(max_workers=2) as runner:
        job = runner.submit(lambda job: job.message("hello"), name="demo task")
        job.wait()
        print(job.status().state)
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Callable, Generator

import structlog

from dashboard_persistence.exceptions import JobError, JobNotFoundError
from dashboard_persistence.jobs.job import Job
from dashboard_persistence.models import JobStatus

if TYPE_CHECKING:
    from dashboard_persistence.core.config import JobsConfig

log = logging.getLogger(__name__)

UnitOfWork = Callable[[Job], None]


@contextmanager
def job_span(job: Job, **context: Any) -> Generator[Job, None, None]:
    """Bracket a job's work with "started"/"ended" entries.

    Any exception raised inside the span is recorded as the job's failure and
    does not propagate.  The "ended" entry and the terminal state are written
    on every exit path.
    """
    thread_name = threading.current_thread().name
    structlog.contextvars.bind_contextvars(job_id=job.job_id, **context)
    job.mark_running()
    job.message(f"Started {job.name} [{thread_name}]")
    try:
        yield job
    except Exception as exc:  # noqa: BLE001
        log.debug(f"Unhandled error in job {job.job_id}", exc_info=True)
        job.failed(f"Error in {job.name}: {exc}")
    finally:
        job.message(f"Ended {job.name} [{thread_name}]")
        job.finish()
        structlog.contextvars.unbind_contextvars("job_id", *context)


class JobRunner:
    """Schedules units of work on a thread pool and tracks their jobs.

    Terminal jobs stay tracked until retired, or until ``prune`` finds them
    older than ``retention_seconds``.  ``None`` keeps them indefinitely.
    """

    def __init__(
        self,
        max_workers: int = 4,
        thread_name_prefix: str = "dashboard-persistence",
        retention_seconds: float | None = None,
    ) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._retention_seconds = retention_seconds
        self._jobs: dict[str, Job] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: JobsConfig) -> JobRunner:
        return cls(
            max_workers=config.max_workers,
            thread_name_prefix=config.thread_name_prefix,
            retention_seconds=config.retention_seconds,
        )

    def submit(self, unit_of_work: UnitOfWork, name: str = "job", **context: Any) -> Job:
        """Schedule ``unit_of_work`` and return its job without waiting."""
        job = Job(name=name)
        with self._lock:
            self._jobs[job.job_id] = job
        try:
            self._executor.submit(self._execute, job, unit_of_work, context)
        except RuntimeError as exc:
            with self._lock:
                self._jobs.pop(job.job_id, None)
            raise JobError(f"Cannot submit {name}: {exc}") from exc
        log.debug(f"Submitted job {job.job_id} ({name})")
        return job

    @staticmethod
    def _execute(job: Job, unit_of_work: UnitOfWork, context: dict[str, Any]) -> None:
        with job_span(job, **context):
            unit_of_work(job)

    def get(self, job_id: str) -> Job:
        with self._lock:
            job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(f"Job not found: {job_id}")
        return job

    def retire(self, job_id: str) -> JobStatus:
        """Stop tracking a terminal job and return its final status."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFoundError(f"Job not found: {job_id}")
            if not job.state.is_terminal:
                raise JobError(f"Job {job_id} is still {job.state.value}")
            del self._jobs[job_id]
        return job.status()

    def prune(self) -> list[str]:
        """Stop tracking terminal jobs past the retention window. Returns their ids."""
        if self._retention_seconds is None:
            return []
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=self._retention_seconds)
        with self._lock:
            expired = [
                job_id
                for job_id, job in self._jobs.items()
                if job.state.is_terminal and job.finished_at is not None and job.finished_at <= cutoff
            ]
            for job_id in expired:
                del self._jobs[job_id]
        if expired:
            log.debug(f"Pruned {len(expired)} finished job(s)")
        return expired

    def list_jobs(self) -> list[JobStatus]:
        with self._lock:
            jobs = list(self._jobs.values())
        return [job.status() for job in jobs]

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> JobRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)
