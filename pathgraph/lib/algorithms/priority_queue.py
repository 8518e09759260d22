from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Iterator, List, Optional, Tuple

from pathgraph.lib.algorithms.base import Cost


class Heap:
    """
    Binary min-heap of (item id, priority) entries.

    There is no decrease-key: the same id may be inserted any number of times
    with different priorities, and every copy stays in the heap until it is
    extracted. Callers are responsible for discarding stale copies on extraction.

    Entries with equal priority are extracted in insertion order, so the
    extraction sequence is fully determined by the sequence of inserts.
    """

    __slots__ = ("_entries", "_counter")

    def __init__(self) -> None:
        self._entries: List[Tuple[Cost, int, int]] = []
        self._counter: Iterator[int] = count()

    def insert(self, item_id: int, priority: Cost) -> None:
        """Push a new entry. O(log n)."""
        heappush(self._entries, (priority, next(self._counter), item_id))

    def extract_min(self) -> Optional[Tuple[int, Cost]]:
        """
        Remove and return the entry with the smallest priority.

        Returns:
            (item_id, priority), or None if the heap is empty.
        """
        if not self._entries:
            return None
        priority, _, item_id = heappop(self._entries)
        return item_id, priority

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
