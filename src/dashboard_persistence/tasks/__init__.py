"""The persistence task and its Save/Load operations."""

from __future__ import annotations

from dashboard_persistence.tasks.operations import load_payload, normalize_lines, save_payload
from dashboard_persistence.tasks.output_slot import OutputSlot
from dashboard_persistence.tasks.persistence_task import DIRECTORY_NOT_CONFIGURED, TASK_NAME, PersistenceTask

__all__ = [
    "DIRECTORY_NOT_CONFIGURED",
    "OutputSlot",
    "PersistenceTask",
    "TASK_NAME",
    "load_payload",
    "normalize_lines",
    "save_payload",
]
