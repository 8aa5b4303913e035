"""Dashboard state keys the browser dashboard persists, with their default JSON.

Hosts may use any key; these are the ones the dashboard UI reads on startup.
"""

from __future__ import annotations

from dashboard_persistence.models import file_name_for

DASHBOARD_KEYS: dict[str, str] = {
    "customCards": "[]",
    "hiddenCards": "{}",
    "hiddenPoints": "{}",
    "cardTitles": "{}",
    "cardSizes": "{}",
    "expandedSections": "{}",
    "expandedDevices": "{}",
    "pointAssignments": "{}",
    "cardOrder": '{"types": [], "zones": []}',
    "cardCustomizations": "{}",
}


def default_for(data_key: str) -> str:
    """Default JSON for a known key, ``"{}"`` for anything else."""
    return DASHBOARD_KEYS.get(data_key, "{}")


def known_files() -> dict[str, str]:
    """Known key -> file name."""
    return {key: file_name_for(key) for key in DASHBOARD_KEYS}
