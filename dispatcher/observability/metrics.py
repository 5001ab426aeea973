"""Registry activity metrics: running counters plus point-in-time gauges."""

import threading
from collections import Counter
from typing import Dict


class Metrics:
    """
    Counters (feeds_created, items_published, delivery_failures, ...) and
    gauges (feeds) shared by a registry and every feed it owns. Feeds update
    it from publisher threads, so every access goes through one lock.
    """

    def __init__(self) -> None:
        self._counters: Counter = Counter()
        self._gauges: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, name: str, value: int = 1) -> None:
        if value < 0:
            raise ValueError(f"counter {name!r} cannot decrease (got {value})")
        with self._lock:
            self._counters[name] += value

    def set_gauge(self, name: str, value: int) -> None:
        with self._lock:
            self._gauges[name] = value

    def get_counter(self, name: str) -> int:
        with self._lock:
            return self._counters[name]

    def get_gauge(self, name: str) -> int:
        with self._lock:
            return self._gauges.get(name, 0)

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        """Copy of {"counters": {...}, "gauges": {...}} taken under the lock."""
        with self._lock:
            return {"counters": dict(self._counters), "gauges": dict(self._gauges)}
