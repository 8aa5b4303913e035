"""dashboard-persistence: background save/load of dashboard state files.

Usage::

    from dashboard_persistence import (
        JobRunner, PersistenceTask, TaskConfiguration, FileStorageResolver,
    )

    with JobRunner() as runner:
        task = PersistenceTask(
            TaskConfiguration(directory="dashboards", operation="load", dataKey="customCards"),
            FileStorageResolver(Path("/var/lib/station")),
        )
        job = task.submit(runner)
        job.wait()
        print(job.status().state, task.output.value)
"""

from __future__ import annotations

from dashboard_persistence.core.config import AppSettings
from dashboard_persistence.dashboard_keys import DASHBOARD_KEYS
from dashboard_persistence.exceptions import (
    ConfigurationError,
    DashboardPersistenceError,
    JobError,
    JobNotFoundError,
    StorageError,
)
from dashboard_persistence.jobs import Job, JobRunner, job_span
from dashboard_persistence.models import (
    ErrorKind,
    FileIdentity,
    JobLogEntry,
    JobState,
    JobStatus,
    Operation,
    OperationResult,
    TaskConfiguration,
    file_name_for,
)
from dashboard_persistence.persistence import (
    FileStorageResolver,
    IStorageResolver,
    MemoryStorageResolver,
    create_resolver,
)
from dashboard_persistence.services import DashboardPersistenceService
from dashboard_persistence.tasks import OutputSlot, PersistenceTask

__all__ = [
    "AppSettings",
    "ConfigurationError",
    "DASHBOARD_KEYS",
    "DashboardPersistenceError",
    "DashboardPersistenceService",
    "ErrorKind",
    "FileIdentity",
    "FileStorageResolver",
    "IStorageResolver",
    "Job",
    "JobError",
    "JobLogEntry",
    "JobNotFoundError",
    "JobRunner",
    "JobState",
    "JobStatus",
    "MemoryStorageResolver",
    "Operation",
    "OperationResult",
    "OutputSlot",
    "PersistenceTask",
    "StorageError",
    "TaskConfiguration",
    "create_resolver",
    "file_name_for",
    "job_span",
]
