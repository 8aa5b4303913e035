"""Shared fixtures for dashboard-persistence tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from dashboard_persistence.jobs import Job, JobRunner
from dashboard_persistence.models import TaskConfiguration
from dashboard_persistence.persistence import FileStorageResolver
from dashboard_persistence.persistence.protocols import IStorageResolver
from dashboard_persistence.tasks import OutputSlot, PersistenceTask
from tests.fakes.fake_storage import FakeStorageResolver

WAIT_SECONDS = 5.0


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Generator[None, None, None]:
    """Undo setup_logging() calls made by the app and CLI under test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> Generator[JobRunner, None, None]:
    """Two-worker runner, shut down after the test."""
    job_runner = JobRunner(max_workers=2, thread_name_prefix="test-worker")
    yield job_runner
    job_runner.shutdown(wait=True)


@pytest.fixture
def station_root(tmp_path: Path) -> Path:
    """Root path with an existing ``dashboards`` directory."""
    (tmp_path / "dashboards").mkdir()
    return tmp_path


@pytest.fixture
def file_resolver(station_root: Path) -> FileStorageResolver:
    return FileStorageResolver(station_root)


@pytest.fixture
def fake_resolver() -> FakeStorageResolver:
    return FakeStorageResolver()


RunTask = Callable[..., tuple[Job, PersistenceTask]]


@pytest.fixture
def run_task(runner: JobRunner) -> RunTask:
    """Submit a task built from keyword config and wait for it to finish."""

    def _run(
        resolver: IStorageResolver,
        output: OutputSlot | None = None,
        **config: object,
    ) -> tuple[Job, PersistenceTask]:
        task = PersistenceTask(TaskConfiguration(**config), resolver, output)
        job = task.submit(runner)
        assert job.wait(WAIT_SECONDS), "job did not finish"
        return job, task

    return _run
