# src/book_stats/aggregate.py
"""
Thread-safe, increment-only accumulators shared by the file workers.

FrequencyTable maps a normalized key to its count and representative
(first-seen original-case value). Tally is a plain counter. Neither ever
decrements or forgets anything during a run.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from .types import FrequencyEntry


class FrequencyTable:
    def __init__(self) -> None:
        self._entries: dict[str, FrequencyEntry] = {}
        self._lock = threading.Lock()  # guards _entries

    def increment(self, key: str, original: str) -> None:
        """Count one occurrence; ``original`` is kept only if the key is new."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._entries[key] = FrequencyEntry(count=1, representative=original)
            else:
                entry.count += 1

    def merge(self, other: FrequencyTable) -> None:
        """Add every count of ``other`` in one step (file-local table → shared)."""
        if other is self:
            raise ValueError("cannot merge a table into itself")
        incoming = other.snapshot()
        with self._lock:
            for key, src in incoming.items():
                entry = self._entries.get(key)
                if entry is None:
                    self._entries[key] = FrequencyEntry(src.count, src.representative)
                else:
                    entry.count += src.count

    def snapshot(self) -> dict[str, FrequencyEntry]:
        """Consistent copy of the current state."""
        with self._lock:
            return {
                k: FrequencyEntry(e.count, e.representative) for k, e in self._entries.items()
            }

    def count(self, key: str) -> int:
        with self._lock:
            entry = self._entries.get(key)
            return entry.count if entry is not None else 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


class Tally:
    """Increment-only integer counter."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, n: int = 1) -> int:
        if n < 0:
            raise ValueError("Tally only counts up")
        with self._lock:
            self._value += n
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value
