"""Host-facing services."""

from __future__ import annotations

from dashboard_persistence.services.persistence_service import DashboardPersistenceService

__all__ = ["DashboardPersistenceService"]
