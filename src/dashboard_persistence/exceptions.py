"""Exception hierarchy for dashboard-persistence."""


class DashboardPersistenceError(Exception):
    """Base exception for all dashboard-persistence errors."""


class ConfigurationError(DashboardPersistenceError, ValueError):
    """Raised when task or application configuration is unusable."""


class StorageError(DashboardPersistenceError):
    """Raised when a storage resolver operation fails.

    Wraps the underlying ``OSError`` so callers can report the system reason.
    """

    def __init__(self, message: str, reason: str = "") -> None:
        super().__init__(message)
        self.reason = reason or message


class JobError(DashboardPersistenceError):
    """Raised when a job is used in a way its state does not allow."""


class JobNotFoundError(JobError, KeyError):
    """Raised when a job id is not tracked by the runner."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "job not found"
