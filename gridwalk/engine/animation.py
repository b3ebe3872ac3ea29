"""Cooperative pacing of a search run for step-by-step display."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from gridwalk.engine.contracts import GridSnapshot, SearchResult
from gridwalk.engine.grid import Grid
from gridwalk.engine.search import SearchRun, log_result

logger = logging.getLogger(__name__)

DEFAULT_BASE_DELAY_MS = 30.0

Publisher = Callable[[GridSnapshot], None]


class AnimationDriver:
    """Pull one search step at a time, publish it, then yield to the loop.

    The sleep between steps is the only suspension point, so cancelling the
    task that awaits :meth:`run` stops the search between two pops. The
    generator is closed on the way out and never touches the grid again.
    """

    def __init__(
        self, *, base_delay_ms: float = DEFAULT_BASE_DELAY_MS, speed: float = 1.0
    ) -> None:
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")
        self.base_delay_ms = base_delay_ms
        self.speed = 1.0
        self.set_speed(speed)

    def set_speed(self, speed: float) -> None:
        if speed <= 0:
            raise ValueError("speed must be positive")
        self.speed = speed

    @property
    def delay(self) -> float:
        """Seconds to wait after each published step."""
        return self.base_delay_ms / self.speed / 1000.0

    async def run(self, steps: SearchRun, grid: Grid, publish: Publisher) -> SearchResult:
        try:
            while True:
                try:
                    step = next(steps)
                except StopIteration as stop:
                    result: SearchResult = stop.value
                    break
                publish(grid.snapshot(step))
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            logger.info("Search cancelled")
            raise
        finally:
            steps.close()

        publish(grid.snapshot())
        log_result(result)
        return result
