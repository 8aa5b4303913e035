"""Persistence service: wires configuration, resolver and runner for hosts."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from dashboard_persistence.jobs.runner import JobRunner
from dashboard_persistence.models import JobStatus, TaskConfiguration
from dashboard_persistence.persistence import create_resolver
from dashboard_persistence.tasks.output_slot import OutputSlot
from dashboard_persistence.tasks.persistence_task import PersistenceTask

if TYPE_CHECKING:
    from dashboard_persistence.core.config import AppSettings
    from dashboard_persistence.jobs.job import Job
    from dashboard_persistence.persistence.protocols import IStorageResolver

log = logging.getLogger(__name__)


class DashboardPersistenceService:
    """Submit persistence tasks and look up their jobs and ``loadedData``.

    Each submission gets its own ``OutputSlot`` so concurrent loads for
    different callers never share a result.  Slots are dropped together
    with their job, on retire or when the runner prunes expired jobs at
    the next submission.
    """

    def __init__(
        self,
        resolver: IStorageResolver,
        runner: JobRunner,
        default_directory: str | None = None,
    ) -> None:
        self._resolver = resolver
        self._runner = runner
        self._default_directory = default_directory
        self._outputs: dict[str, OutputSlot] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: AppSettings) -> DashboardPersistenceService:
        resolver = create_resolver(
            settings.persistence.backend,
            root_path=settings.persistence.root_path,
            encoding=settings.persistence.encoding,
        )
        return cls(
            resolver=resolver,
            runner=JobRunner.from_config(settings.jobs),
            default_directory=settings.persistence.directory,
        )

    @property
    def resolver(self) -> IStorageResolver:
        return self._resolver

    @property
    def runner(self) -> JobRunner:
        return self._runner

    def submit(self, config: TaskConfiguration) -> Job:
        """Start a Save or Load in the background and return its job."""
        self._forget(self._runner.prune())
        if config.directory is None and self._default_directory is not None:
            config = config.model_copy(update={"directory": self._default_directory})

        task = PersistenceTask(config, self._resolver)
        job = task.submit(self._runner)
        with self._lock:
            self._outputs[job.job_id] = task.output
        log.info(f"Submitted {config.operation} for {config.data_key!r} as job {job.job_id}")
        return job

    def job(self, job_id: str) -> Job:
        return self._runner.get(job_id)

    def loaded_data(self, job_id: str) -> str | None:
        """``loadedData`` for a job, or None if its Load never wrote the slot."""
        with self._lock:
            slot = self._outputs.get(job_id)
        if slot is None or slot.write_count == 0:
            return None
        return slot.value

    def retire(self, job_id: str) -> JobStatus:
        status = self._runner.retire(job_id)
        self._forget([job_id])
        return status

    def _forget(self, job_ids: list[str]) -> None:
        with self._lock:
            for job_id in job_ids:
                self._outputs.pop(job_id, None)

    def shutdown(self, wait: bool = True) -> None:
        self._runner.shutdown(wait=wait)
