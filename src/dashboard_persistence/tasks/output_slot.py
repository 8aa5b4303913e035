"""Thread-safe holder for the result of a Load (``loadedData``)."""

from __future__ import annotations

import threading


class OutputSlot:
    """Single string field written by Load, read by the caller after the job ends."""

    def __init__(self, initial: str = "") -> None:
        self._value = initial
        self._writes = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> str:
        with self._lock:
            return self._value

    @property
    def write_count(self) -> int:
        with self._lock:
            return self._writes

    def publish(self, value: str) -> None:
        with self._lock:
            self._value = value
            self._writes += 1

    def __repr__(self) -> str:
        return f"OutputSlot(chars={len(self.value)}, writes={self.write_count})"
