"""A bounded min-heap of athletes ordered by value."""

from __future__ import annotations

import heapq
from itertools import count

from athletefile.records import Athlete


class MinHeap:
    """Min-heap keyed on Athlete.value with a fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: list[tuple[float, int, Athlete]] = []
        self._sequence = count()

    def push(self, athlete: Athlete) -> None:
        """Add an athlete; raise OverflowError when the heap is full."""
        if len(self._items) >= self.capacity:
            raise OverflowError("heap is full")
        heapq.heappush(self._items, (athlete.value, next(self._sequence), athlete))

    def pop(self) -> Athlete:
        """Remove and return the athlete with the smallest value."""
        if not self._items:
            raise IndexError("pop from an empty heap")
        return heapq.heappop(self._items)[2]

    def __len__(self) -> int:
        return len(self._items)