"""Process-wide hooks: structured logging."""

from __future__ import annotations

from dashboard_persistence.hooks.logging_config import setup_logging

__all__ = ["setup_logging"]
