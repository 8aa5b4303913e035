"""Dashboard persistence task: resolve the file for a key and save or load it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dashboard_persistence.models import (
    ErrorKind,
    FileIdentity,
    Operation,
    OperationResult,
    TaskConfiguration,
)
from dashboard_persistence.tasks.operations import load_payload, save_payload
from dashboard_persistence.tasks.output_slot import OutputSlot

if TYPE_CHECKING:
    from dashboard_persistence.jobs.job import Job
    from dashboard_persistence.jobs.runner import JobRunner
    from dashboard_persistence.persistence.protocols import IStorageResolver

log = logging.getLogger(__name__)

TASK_NAME = "dashboard persistence task"

DIRECTORY_NOT_CONFIGURED = "Directory not configured"


class PersistenceTask:
    """Runs exactly one Save or Load for a ``TaskConfiguration``.

    ``output`` is the ``loadedData`` slot; only a Load that found its file
    writes to it.
    """

    def __init__(
        self,
        config: TaskConfiguration,
        resolver: IStorageResolver,
        output: OutputSlot | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._output = output if output is not None else OutputSlot()

    @property
    def config(self) -> TaskConfiguration:
        return self._config

    @property
    def output(self) -> OutputSlot:
        return self._output

    def submit(self, runner: JobRunner) -> Job:
        """Schedule this task on ``runner`` and return immediately."""
        return runner.submit(
            self.run,
            name=TASK_NAME,
            operation=self._config.operation,
            data_key=self._config.data_key,
        )

    def run(self, job: Job) -> None:
        """Unit of work for the runner: dispatch, then record the outcome on ``job``."""
        result = self.dispatch(job)
        if not result.ok:
            job.failed(result.reason)
        if result.cleanup_error:
            job.failed(result.cleanup_error, terminal=False)

    def dispatch(self, job: Job) -> OperationResult:
        config = self._config

        if config.directory is None:
            return OperationResult.failure(ErrorKind.CONFIGURATION, DIRECTORY_NOT_CONFIGURED)

        identity = FileIdentity.for_key(config.directory, config.data_key)
        log.debug(f"Resolved {config.data_key!r} to {identity.location}")

        if config.operation == Operation.SAVE.value:
            return save_payload(self._resolver, identity, config.payload, job)
        if config.operation == Operation.LOAD.value:
            return load_payload(self._resolver, identity, self._output, job)

        return OperationResult.failure(
            ErrorKind.CONFIGURATION,
            f"Unknown operation: {config.operation}. Use 'save' or 'load'",
        )
