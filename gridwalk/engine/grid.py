"""Mutable grid model: occupancy, terrain, and movement cost."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from gridwalk.engine.contracts import (
    TERRAIN_COSTS,
    CellState,
    Coord,
    GridSnapshot,
    Occupancy,
    SearchStep,
    Terrain,
)
from gridwalk.engine.errors import InvalidSize

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 20
DEFAULT_DENSITY = 0.25
START_INSET = 0.15
GOAL_INSET = 0.85

# North, east, south, west.
DIRECTIONS: tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

_MARKERS = {Occupancy.PATH, Occupancy.EXPLORED}
_ENDPOINTS = {Occupancy.START, Occupancy.GOAL}


class Grid:
    """Square grid of cells with independent occupancy and terrain layers."""

    def __init__(self, size: int = DEFAULT_SIZE, *, terrain_enabled: bool = False) -> None:
        self.terrain_enabled = terrain_enabled
        self.size = 0
        self.start: Coord | None = None
        self.goal: Coord | None = None
        self._occupancy: list[list[Occupancy]] = []
        self._terrain: list[list[Terrain]] = []
        self.resize(size)

    def resize(self, size: int) -> None:
        if size < 2:
            raise InvalidSize(size)
        self.size = size
        self._occupancy = [[Occupancy.EMPTY] * size for _ in range(size)]
        self._terrain = [[Terrain.NONE] * size for _ in range(size)]
        self.start = None
        self.goal = None
        start_at = int(size * START_INSET)
        goal_at = int(size * GOAL_INSET)
        self.set_occupancy((start_at, start_at), Occupancy.START)
        self.set_occupancy((goal_at, goal_at), Occupancy.GOAL)
        logger.debug("Resized grid to %dx%d", size, size)

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def occupancy(self, coord: Coord) -> Occupancy:
        x, y = coord
        return self._occupancy[y][x]

    def terrain(self, coord: Coord) -> Terrain:
        x, y = coord
        return self._terrain[y][x]

    def cell(self, coord: Coord) -> CellState:
        return CellState(self.occupancy(coord), self.terrain(coord))

    def is_walkable(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self.occupancy(coord) != Occupancy.OBSTACLE

    @property
    def has_endpoints(self) -> bool:
        return self.start is not None and self.goal is not None

    def set_occupancy(self, coord: Coord, kind: Occupancy) -> None:
        if not self.in_bounds(coord):
            return
        if kind == Occupancy.START:
            self._place_endpoint(coord, kind, other=self.goal)
            return
        if kind == Occupancy.GOAL:
            self._place_endpoint(coord, kind, other=self.start)
            return
        if self.occupancy(coord) in _ENDPOINTS:
            return
        self._write(coord, kind)
        if kind == Occupancy.OBSTACLE:
            self._write_terrain(coord, Terrain.NONE)

    def toggle_obstacle(self, coord: Coord) -> None:
        if not self.in_bounds(coord):
            return
        current = self.occupancy(coord)
        if current == Occupancy.OBSTACLE:
            self._write(coord, Occupancy.EMPTY)
        elif current == Occupancy.EMPTY:
            self.set_occupancy(coord, Occupancy.OBSTACLE)

    def set_terrain(self, coord: Coord, terrain: Terrain) -> None:
        if not self.in_bounds(coord):
            return
        if self.occupancy(coord) == Occupancy.OBSTACLE or self.occupancy(coord) in _ENDPOINTS:
            return
        self._write_terrain(coord, terrain)

    def set_terrain_enabled(self, enabled: bool) -> None:
        self.terrain_enabled = enabled

    def cell_cost(self, coord: Coord) -> float:
        if not self.terrain_enabled:
            return 1.0
        return TERRAIN_COSTS[self.terrain(coord)]

    def neighbors(self, coord: Coord) -> list[Coord]:
        x, y = coord
        candidates = [(x + dx, y + dy) for dx, dy in DIRECTIONS]
        return [pos for pos in candidates if self.is_walkable(pos)]

    def obstacles(self) -> set[Coord]:
        return set(self._coords_with(Occupancy.OBSTACLE))

    def clear_markers(self) -> None:
        for coord in list(self._coords_with(*_MARKERS)):
            self._write(coord, Occupancy.EMPTY)

    def clear_all(self) -> None:
        start, goal = self.start, self.goal
        self._occupancy = [[Occupancy.EMPTY] * self.size for _ in range(self.size)]
        self._terrain = [[Terrain.NONE] * self.size for _ in range(self.size)]
        self.start = None
        self.goal = None
        if start is not None:
            self.set_occupancy(start, Occupancy.START)
        if goal is not None:
            self.set_occupancy(goal, Occupancy.GOAL)

    def random_obstacles(
        self, density: float = DEFAULT_DENSITY, *, rng: random.Random | None = None
    ) -> list[Coord]:
        rng = rng or random.Random()
        count = int(self.size * self.size * density)
        candidates = list(self._coords_with(Occupancy.EMPTY))
        chosen = rng.sample(candidates, min(count, len(candidates)))
        for coord in chosen:
            self.set_occupancy(coord, Occupancy.OBSTACLE)
        logger.debug("Placed %d random obstacles (density=%.2f)", len(chosen), density)
        return chosen

    def snapshot(self, step: SearchStep | None = None) -> GridSnapshot:
        return GridSnapshot(
            size=self.size,
            terrain_enabled=self.terrain_enabled,
            start=self.start,
            goal=self.goal,
            occupancy=[list(row) for row in self._occupancy],
            terrain=[list(row) for row in self._terrain],
            step=step,
        )

    def mark(self, coord: Coord, kind: Occupancy) -> None:
        """Write a search marker, leaving start and goal untouched."""
        if self.occupancy(coord) in _ENDPOINTS:
            return
        self._write(coord, kind)

    def _place_endpoint(self, coord: Coord, kind: Occupancy, *, other: Coord | None) -> None:
        if coord == other:
            return
        previous = self.start if kind == Occupancy.START else self.goal
        if previous is not None:
            self._write(previous, Occupancy.EMPTY)
        self._write(coord, kind)
        self._write_terrain(coord, Terrain.NONE)
        if kind == Occupancy.START:
            self.start = coord
        else:
            self.goal = coord

    def _coords_with(self, *kinds: Occupancy) -> Iterable[Coord]:
        for y, row in enumerate(self._occupancy):
            for x, occupancy in enumerate(row):
                if occupancy in kinds:
                    yield (x, y)

    def _write(self, coord: Coord, kind: Occupancy) -> None:
        x, y = coord
        self._occupancy[y][x] = kind

    def _write_terrain(self, coord: Coord, terrain: Terrain) -> None:
        x, y = coord
        self._terrain[y][x] = terrain
