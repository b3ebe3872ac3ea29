"""Application entry for running searches headless or in the workbench UI."""

from __future__ import annotations

import asyncio
import logging
import os
import random

from rich.console import Console
from rich.logging import RichHandler

from gridwalk.engine.animation import AnimationDriver
from gridwalk.engine.contracts import Algorithm, Level, SearchResult, Terrain
from gridwalk.engine.grid import Grid
from gridwalk.engine.workbench import Workbench
from gridwalk.render.viewer import describe_result, render_grid, render_status

DEFAULT_LEVEL = "medium"
DEFAULT_ALGORITHM = "astar"
DEFAULT_SPEED = 1.0
DEFAULT_DELAY_MS = 30.0
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def build_workbench(
    *,
    level: str | None = None,
    size: int | None = None,
    speed: float | None = None,
    delay_ms: float | None = None,
    terrain: bool = False,
    seed: int | None = None,
) -> Workbench:
    grid_size = size if size is not None else _resolve_level(level).size
    driver = AnimationDriver(
        base_delay_ms=_resolve_delay(delay_ms), speed=_resolve_speed(speed)
    )
    return Workbench(
        Grid(grid_size, terrain_enabled=terrain),
        driver=driver,
        rng=random.Random(seed),
    )


def run_headless(
    workbench: Workbench,
    *,
    algorithm: str | None = None,
    console: Console | None = None,
) -> SearchResult:
    """Run one search to completion and print the final grid."""
    console = console or Console()
    chosen = _resolve_algorithm(algorithm)
    result = asyncio.run(workbench.find_path(chosen))
    snapshot = workbench.snapshot()
    console.print(render_grid(snapshot, title=chosen.label))
    console.print(
        render_status(
            snapshot,
            algorithm=chosen,
            mode=workbench.mode,
            speed=workbench.driver.speed,
            result=result,
            message=describe_result(result, terrain_enabled=snapshot.terrain_enabled),
        )
    )
    return result


def run_interactive(workbench: Workbench, *, algorithm: str | None = None) -> None:
    from gridwalk.render.workbench_screen import run_workbench_app

    run_workbench_app(workbench, algorithm=_resolve_algorithm(algorithm))


def scatter_terrain(
    grid: Grid, *, density: float = 0.2, rng: random.Random | None = None
) -> None:
    """Paint a random share of open cells with grass, mud, or water."""
    rng = rng or random.Random()
    kinds = [Terrain.GRASS, Terrain.MUD, Terrain.WATER]
    for y in range(grid.size):
        for x in range(grid.size):
            if rng.random() < density:
                grid.set_terrain((x, y), rng.choice(kinds))


def configure_logging(
    level: str = "WARNING", *, log_file: str | None = None, rich: bool = True
) -> None:
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    elif rich:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    else:
        handler = logging.NullHandler()
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def _resolve_level(level: str | None) -> Level:
    value = (level or os.getenv("GRIDWALK_LEVEL") or DEFAULT_LEVEL).lower()
    try:
        return Level(value)
    except ValueError:
        logger.warning("Unknown level %r, using %s", value, DEFAULT_LEVEL)
        return Level(DEFAULT_LEVEL)


def _resolve_algorithm(algorithm: str | None) -> Algorithm:
    value = (algorithm or os.getenv("GRIDWALK_ALGORITHM") or DEFAULT_ALGORITHM).lower()
    try:
        return Algorithm(value)
    except ValueError:
        logger.warning("Unknown algorithm %r, using %s", value, DEFAULT_ALGORITHM)
        return Algorithm(DEFAULT_ALGORITHM)


def _resolve_speed(speed: float | None) -> float:
    if speed is not None:
        return speed
    return _env_float("GRIDWALK_SPEED", DEFAULT_SPEED)


def _resolve_delay(delay_ms: float | None) -> float:
    if delay_ms is not None:
        return delay_ms
    return _env_float("GRIDWALK_DELAY_MS", DEFAULT_DELAY_MS)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
