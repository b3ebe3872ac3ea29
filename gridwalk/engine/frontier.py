"""Frontier containers used by the search algorithms."""

from __future__ import annotations

import heapq
from collections import deque
from typing import Protocol

from gridwalk.engine.contracts import Coord


class Frontier(Protocol):
    def push(self, coord: Coord) -> None:
        """Add a coordinate to the frontier."""

    def pop(self) -> Coord:
        """Remove and return the next coordinate to expand."""

    def __len__(self) -> int: ...


class FifoFrontier:
    """Queue frontier for breadth-first search."""

    def __init__(self) -> None:
        self._items: deque[Coord] = deque()

    def push(self, coord: Coord) -> None:
        self._items.append(coord)

    def pop(self) -> Coord:
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


class LifoFrontier:
    """Stack frontier for depth-first search."""

    def __init__(self) -> None:
        self._items: list[Coord] = []

    def push(self, coord: Coord) -> None:
        self._items.append(coord)

    def pop(self) -> Coord:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


class PriorityFrontier:
    """Min-priority frontier with stable ties and decrease-key.

    Entries with equal priority come out in the order their coordinates were
    first discovered. Lowering a priority pushes a fresh heap entry and leaves
    the stale one behind; stale entries are skipped on pop.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Coord]] = []
        self._priority: dict[Coord, float] = {}
        self._order: dict[Coord, int] = {}

    def push(self, coord: Coord, priority: float = 0.0) -> None:
        self._order.setdefault(coord, len(self._order))
        self._priority[coord] = priority
        heapq.heappush(self._heap, (priority, self._order[coord], coord))

    def update(self, coord: Coord, priority: float) -> None:
        if priority >= self._priority[coord]:
            return
        self.push(coord, priority)

    def pop(self) -> Coord:
        while self._heap:
            priority, _, coord = heapq.heappop(self._heap)
            if self._priority.get(coord) == priority:
                del self._priority[coord]
                return coord
        raise IndexError("pop from an empty frontier")

    def __contains__(self, coord: object) -> bool:
        return coord in self._priority

    def __len__(self) -> int:
        return len(self._priority)
