"""Command surface between a front end and the grid search engine."""

from __future__ import annotations

import asyncio
import logging
import random

from gridwalk.engine.animation import AnimationDriver, Publisher
from gridwalk.engine.contracts import (
    PAINT_TERRAIN,
    Algorithm,
    Coord,
    EditMode,
    GridSnapshot,
    Level,
    Occupancy,
    SearchResult,
)
from gridwalk.engine.errors import GridBusy, NoStartOrGoal
from gridwalk.engine.grid import DEFAULT_DENSITY, Grid
from gridwalk.engine.search import iter_search

logger = logging.getLogger(__name__)


def _discard(snapshot: GridSnapshot) -> None:
    return None


class Workbench:
    """Own one grid and at most one running search.

    Edits are synchronous. ``find_path`` is the only coroutine; while it runs,
    every command that would write to the grid raises :class:`GridBusy`.
    """

    def __init__(
        self,
        grid: Grid | None = None,
        *,
        driver: AnimationDriver | None = None,
        publish: Publisher | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.grid = grid or Grid()
        self.driver = driver or AnimationDriver()
        self.mode = EditMode.NONE
        self.pointer_down = False
        self.last_result: SearchResult | None = None
        self._publish = publish or _discard
        self._rng = rng or random.Random()
        self._task: asyncio.Task[SearchResult] | None = None
        self._last_painted: Coord | None = None

    @property
    def searching(self) -> bool:
        return self._task is not None and not self._task.done()

    def set_publisher(self, publish: Publisher | None) -> None:
        self._publish = publish or _discard

    def snapshot(self) -> GridSnapshot:
        return self.grid.snapshot()

    def set_mode(self, mode: EditMode | str) -> None:
        self.mode = EditMode(mode)

    def click_cell(self, coord: Coord) -> None:
        if self.mode == EditMode.NONE or not self.grid.in_bounds(coord):
            return
        self._ensure_idle("edit the grid")
        if self.mode == EditMode.SET_START:
            self._place_endpoint(coord, Occupancy.START)
        elif self.mode == EditMode.SET_GOAL:
            self._place_endpoint(coord, Occupancy.GOAL)
        elif self.mode == EditMode.TOGGLE_OBSTACLE:
            self.grid.toggle_obstacle(coord)
        else:
            self.grid.set_terrain(coord, PAINT_TERRAIN[self.mode])
        self._last_painted = coord
        self._emit()

    def press(self, coord: Coord) -> None:
        self.pointer_down = True
        self._last_painted = None
        self.click_cell(coord)

    def drag_over_cell(self, coord: Coord) -> None:
        if not self.pointer_down or not self.mode.paints:
            return
        # A drag reports the same cell repeatedly; paint it once per gesture pass.
        if coord == self._last_painted:
            return
        self.click_cell(coord)

    def release(self) -> None:
        self.pointer_down = False
        self._last_painted = None

    async def find_path(self, algorithm: Algorithm | str = Algorithm.ASTAR) -> SearchResult:
        await self.cancel()
        grid = self.grid
        if grid.start is None or grid.goal is None:
            raise NoStartOrGoal()

        algorithm = Algorithm(algorithm)
        grid.clear_markers()
        self.last_result = None
        self._emit()
        logger.info("Starting %s from %s to %s", algorithm.label, grid.start, grid.goal)

        steps = iter_search(grid, grid.start, grid.goal, algorithm)
        task = asyncio.ensure_future(self.driver.run(steps, grid, self._publish))
        self._task = task
        try:
            result = await task
        finally:
            if self._task is task:
                self._task = None
        self.last_result = result
        return result

    async def cancel(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.wait([task])
        if self._task is task:
            self._task = None

    def clear_path(self) -> None:
        self._ensure_idle("clear the path")
        self.grid.clear_markers()
        self.last_result = None
        self._emit()

    def clear_grid(self) -> None:
        self._ensure_idle("clear the grid")
        self.grid.clear_all()
        self.last_result = None
        self._emit()

    def randomize_obstacles(self, density: float = DEFAULT_DENSITY) -> None:
        self._ensure_idle("place obstacles")
        self.grid.clear_all()
        self.grid.random_obstacles(density, rng=self._rng)
        self.last_result = None
        self._emit()

    def resize(self, size: int) -> None:
        self._ensure_idle("resize the grid")
        self.grid.resize(size)
        self.last_result = None
        self._emit()

    def set_level(self, level: Level | str) -> None:
        self.resize(Level(level).size)

    def set_terrain_enabled(self, enabled: bool) -> None:
        self._ensure_idle("change terrain costs")
        self.grid.set_terrain_enabled(enabled)
        self._emit()

    def set_animation_speed(self, factor: float) -> None:
        self.driver.set_speed(factor)

    def _place_endpoint(self, coord: Coord, kind: Occupancy) -> None:
        other = self.grid.goal if kind == Occupancy.START else self.grid.start
        if coord == other:
            return
        self.grid.set_occupancy(coord, kind)
        self.mode = EditMode.NONE

    def _ensure_idle(self, command: str) -> None:
        if self.searching:
            logger.warning("Rejected request to %s during a search", command)
            raise GridBusy(command)

    def _emit(self) -> None:
        self._publish(self.grid.snapshot())
