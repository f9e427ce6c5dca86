"""Thread-safe single-slot payload cache."""

from __future__ import annotations

import time
from threading import Lock
from typing import Any


class PayloadCache:
    """Thread-safe holder for the last successfully fetched API payload.

    Writer: AlphaVantageDataSource (the only one).
    Readers: HTTP route handlers.

    The payload is never mutated in place, only swapped for a new one, so a
    reference returned by get() stays consistent after a later set().
    """

    def __init__(self) -> None:
        self._payload: dict[str, Any] | None = None
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every set
        self._updated_at: float | None = None

    def set(self, payload: dict[str, Any], timestamp: float | None = None) -> None:
        """Replace the cached payload wholesale."""
        with self._lock:
            self._payload = payload
            self._updated_at = timestamp or time.time()
            self._version += 1

    def get(self) -> dict[str, Any] | None:
        """Current payload, or None if nothing has been fetched yet."""
        with self._lock:
            return self._payload

    @property
    def has_data(self) -> bool:
        with self._lock:
            return self._payload is not None

    @property
    def version(self) -> int:
        """Number of successful writes so far."""
        return self._version

    @property
    def updated_at(self) -> float | None:
        """Unix time of the last successful write, or None."""
        with self._lock:
            return self._updated_at
