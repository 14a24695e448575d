"""Thread-safe named counters shared by feed loops and the orchestrator."""

from __future__ import annotations

from collections import Counter
from threading import Lock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class CounterPool:
    """Named integer counters guarded by a lock.

    Missing names read as zero. A species run owns its own pool; the
    orchestrator owns one more pool that species pools are merged into.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._counts: Counter[str] = Counter()

    def increment(self, name: str) -> None:
        self.add(name, 1)

    def add(self, name: str, delta: int) -> None:
        with self._lock:
            self._counts[name] += delta

    def get(self, name: str) -> int:
        with self._lock:
            return self._counts.get(name, 0)

    def merge(self, other: CounterPool | Mapping[str, int]) -> None:
        values = other.snapshot() if isinstance(other, CounterPool) else dict(other)
        with self._lock:
            for name, delta in values.items():
                self._counts[name] += delta

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)
