"""Thread-safe in-memory request counts keyed by client identity."""

from __future__ import annotations

import threading
from collections import Counter

from pingcount.counting.schemas import CounterEntry


class CounterStore:
    """Per-client request counter shared by request handlers and the reporter.

    A single lock guards the whole map. Increments may arrive from the event loop
    and from worker threads alike; snapshots copy the map while holding the lock
    so every reported count is one the store actually held.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter[str] = Counter()

    def increment(self, identity: str) -> int:
        """Count one request from ``identity`` and return its new total."""

        if not identity or not identity.strip():
            raise ValueError("client identity must be a non-empty string")
        with self._lock:
            self._counts[identity] += 1
            return self._counts[identity]

    def snapshot(self) -> list[CounterEntry]:
        """Return every entry, busiest client first."""

        with self._lock:
            items = list(self._counts.items())
        items.sort(key=lambda item: (-item[1], item[0]))
        return [CounterEntry(identity=identity, count=count) for identity, count in items]

    def get(self, identity: str) -> int:
        with self._lock:
            return self._counts.get(identity, 0)

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()
