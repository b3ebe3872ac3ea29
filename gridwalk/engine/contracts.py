"""Shared data contracts for the grid search engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

Coord = tuple[int, int]


class Occupancy(str, Enum):
    EMPTY = "empty"
    OBSTACLE = "obstacle"
    START = "start"
    GOAL = "goal"
    PATH = "path"
    EXPLORED = "explored"


class Terrain(str, Enum):
    NONE = "none"
    GRASS = "grass"
    MUD = "mud"
    WATER = "water"


TERRAIN_COSTS: dict[Terrain, float] = {
    Terrain.NONE: 1.0,
    Terrain.GRASS: 1.5,
    Terrain.MUD: 2.5,
    Terrain.WATER: 4.0,
}


class Algorithm(str, Enum):
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"

    @property
    def label(self) -> str:
        return _ALGORITHM_LABELS[self]


_ALGORITHM_LABELS = {
    Algorithm.BFS: "Breadth-First Search",
    Algorithm.DFS: "Depth-First Search",
    Algorithm.DIJKSTRA: "Dijkstra",
    Algorithm.ASTAR: "A*",
}


class EditMode(str, Enum):
    NONE = "none"
    SET_START = "set_start"
    SET_GOAL = "set_goal"
    TOGGLE_OBSTACLE = "toggle_obstacle"
    SET_GRASS = "set_grass"
    SET_MUD = "set_mud"
    SET_WATER = "set_water"

    @property
    def paints(self) -> bool:
        """True for modes that keep applying while the pointer is dragged."""
        return self in PAINT_TERRAIN or self == EditMode.TOGGLE_OBSTACLE


PAINT_TERRAIN: dict[EditMode, Terrain] = {
    EditMode.SET_GRASS: Terrain.GRASS,
    EditMode.SET_MUD: Terrain.MUD,
    EditMode.SET_WATER: Terrain.WATER,
}


class Level(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def size(self) -> int:
        return LEVEL_SIZES[self]


LEVEL_SIZES = {
    Level.EASY: 15,
    Level.MEDIUM: 20,
    Level.HARD: 30,
}


@dataclass(frozen=True)
class CellState:
    occupancy: Occupancy
    terrain: Terrain = Terrain.NONE


class SearchStep(BaseModel):
    """One frontier pop, emitted before the popped cell is expanded."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(ge=1)
    current: Coord
    explored: int = Field(ge=0)
    frontier_size: int = Field(ge=0)


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: Algorithm
    path: list[Coord] = Field(default_factory=list)
    explored: int = Field(default=0, ge=0)
    cost: float = Field(default=0.0, ge=0.0)

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def steps(self) -> int:
        return max(len(self.path) - 1, 0)


class GridSnapshot(BaseModel):
    """Immutable copy of the grid handed to the presentation layer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    size: int
    terrain_enabled: bool
    start: Coord | None = None
    goal: Coord | None = None
    occupancy: list[list[Occupancy]]
    terrain: list[list[Terrain]]
    step: SearchStep | None = None

    @model_validator(mode="after")
    def validate_shape(self) -> "GridSnapshot":
        for rows in (self.occupancy, self.terrain):
            if len(rows) != self.size or any(len(row) != self.size for row in rows):
                raise ValueError("snapshot rows must match grid size")
        return self

    def cell(self, coord: Coord) -> CellState:
        x, y = coord
        return CellState(self.occupancy[y][x], self.terrain[y][x])

    def count(self, occupancy: Occupancy) -> int:
        return sum(row.count(occupancy) for row in self.occupancy)
