"""Background job execution: tracked jobs on a worker pool."""

from __future__ import annotations

from dashboard_persistence.jobs.job import Job
from dashboard_persistence.jobs.runner import JobRunner, UnitOfWork, job_span

__all__ = ["Job", "JobRunner", "UnitOfWork", "job_span"]
