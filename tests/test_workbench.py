import asyncio
import random

import pytest

from gridwalk.engine.animation import AnimationDriver
from gridwalk.engine.contracts import Algorithm, EditMode, GridSnapshot, Level, Occupancy, Terrain
from gridwalk.engine.errors import GridBusy, InvalidSize, NoStartOrGoal
from gridwalk.engine.grid import Grid
from gridwalk.engine.workbench import Workbench


def test_set_start_places_and_resets_mode() -> None:
    workbench, published = _build_workbench()
    workbench.set_mode(EditMode.SET_START)
    workbench.click_cell((2, 1))

    assert workbench.grid.start == (2, 1)
    assert workbench.mode == EditMode.NONE
    assert published[-1].start == (2, 1)


def test_set_start_on_goal_is_ignored() -> None:
    workbench, _ = _build_workbench()
    workbench.set_mode("set_start")
    workbench.click_cell(workbench.grid.goal)

    assert workbench.grid.start == (0, 0)
    assert workbench.mode == EditMode.SET_START


def test_click_outside_grid_is_ignored() -> None:
    workbench, published = _build_workbench()
    workbench.set_mode(EditMode.TOGGLE_OBSTACLE)
    workbench.click_cell((-1, 0))
    workbench.click_cell((0, 9))

    assert published == []
    assert workbench.grid.obstacles() == set()


def test_drag_paints_only_while_pressed() -> None:
    workbench, _ = _build_workbench()
    workbench.set_mode(EditMode.TOGGLE_OBSTACLE)

    workbench.drag_over_cell((1, 1))
    assert workbench.grid.obstacles() == set()

    workbench.press((1, 0))
    workbench.drag_over_cell((1, 0))
    workbench.drag_over_cell((1, 1))
    workbench.drag_over_cell((1, 2))
    workbench.release()
    workbench.drag_over_cell((1, 3))

    assert workbench.grid.obstacles() == {(1, 0), (1, 1), (1, 2)}


def test_drag_paints_terrain_but_not_endpoints() -> None:
    workbench, _ = _build_workbench()
    workbench.set_mode(EditMode.SET_MUD)
    workbench.press((0, 1))
    workbench.drag_over_cell((0, 2))
    workbench.release()
    assert workbench.grid.terrain((0, 1)) == Terrain.MUD
    assert workbench.grid.terrain((0, 2)) == Terrain.MUD

    workbench.set_mode(EditMode.SET_GOAL)
    workbench.press((3, 3))
    workbench.drag_over_cell((2, 3))
    workbench.release()
    assert workbench.grid.goal == (3, 3)


def test_find_path_requires_start_and_goal() -> None:
    workbench, _ = _build_workbench()
    workbench.grid.goal = None

    with pytest.raises(NoStartOrGoal):
        asyncio.run(workbench.find_path(Algorithm.BFS))


def test_find_path_clears_previous_markers() -> None:
    workbench, published = _build_workbench()
    first = asyncio.run(workbench.find_path(Algorithm.DFS))
    second = asyncio.run(workbench.find_path("bfs"))
    snapshot = workbench.snapshot()

    assert first.found and second.found
    assert second.steps == 8
    assert workbench.last_result == second
    assert snapshot.count(Occupancy.EXPLORED) + snapshot.count(Occupancy.PATH) == second.explored
    assert any(snap.step is not None for snap in published)


def test_edits_rejected_while_searching() -> None:
    async def scenario() -> list[type[Exception]]:
        workbench, _ = _build_workbench(delay_ms=20.0)
        task = asyncio.ensure_future(workbench.find_path(Algorithm.ASTAR))
        while not workbench.searching:
            await asyncio.sleep(0)
        rejected = []
        workbench.set_mode(EditMode.TOGGLE_OBSTACLE)
        for command in (
            lambda: workbench.click_cell((2, 2)),
            workbench.clear_path,
            workbench.clear_grid,
            workbench.randomize_obstacles,
            lambda: workbench.resize(8),
            lambda: workbench.set_terrain_enabled(True),
        ):
            with pytest.raises(GridBusy) as excinfo:
                command()
            rejected.append(excinfo.type)
        workbench.set_animation_speed(8.0)
        await workbench.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert not workbench.searching
        return rejected

    rejected = asyncio.run(scenario())
    assert rejected == [GridBusy] * 6


def test_new_search_cancels_running_search() -> None:
    async def scenario() -> None:
        workbench, _ = _build_workbench(size=10, delay_ms=20.0)
        first = asyncio.ensure_future(workbench.find_path(Algorithm.BFS))
        while not workbench.searching:
            await asyncio.sleep(0)
        await asyncio.sleep(0.05)
        workbench.driver.base_delay_ms = 0.0

        second = await workbench.find_path(Algorithm.ASTAR)

        with pytest.raises(asyncio.CancelledError):
            await first
        snapshot = workbench.snapshot()
        assert second.algorithm == Algorithm.ASTAR
        assert second.steps == 14
        assert (
            snapshot.count(Occupancy.EXPLORED) + snapshot.count(Occupancy.PATH)
            == second.explored
        )

    asyncio.run(scenario())


def test_clear_path_is_idempotent() -> None:
    workbench, _ = _build_workbench()
    asyncio.run(workbench.find_path(Algorithm.DIJKSTRA))

    workbench.clear_path()
    once = workbench.snapshot()
    workbench.clear_path()

    assert workbench.snapshot() == once
    assert once.count(Occupancy.EXPLORED) == once.count(Occupancy.PATH) == 0
    assert workbench.last_result is None


def test_randomize_obstacles_is_seeded() -> None:
    first, _ = _build_workbench(size=20, seed=4)
    second, _ = _build_workbench(size=20, seed=4)
    first.grid.toggle_obstacle((5, 5))

    first.randomize_obstacles()
    second.randomize_obstacles()

    assert first.grid.obstacles() == second.grid.obstacles()
    assert len(first.grid.obstacles()) == 100
    assert first.grid.occupancy(first.grid.start) == Occupancy.START


def test_resize_and_levels() -> None:
    workbench, _ = _build_workbench()

    with pytest.raises(InvalidSize):
        workbench.resize(1)
    assert workbench.grid.size == 5

    workbench.set_level(Level.HARD)
    assert workbench.grid.size == 30
    assert workbench.grid.start == (4, 4)
    assert workbench.grid.goal == (25, 25)


def test_speed_and_terrain_toggles() -> None:
    workbench, published = _build_workbench()
    workbench.set_animation_speed(2.0)
    assert workbench.driver.speed == 2.0
    with pytest.raises(ValueError):
        workbench.set_animation_speed(-1.0)

    workbench.set_terrain_enabled(True)
    assert workbench.grid.terrain_enabled
    assert published[-1].terrain_enabled


def _build_workbench(
    *, size: int = 5, delay_ms: float = 0.0, seed: int = 0
) -> tuple[Workbench, list[GridSnapshot]]:
    published: list[GridSnapshot] = []
    workbench = Workbench(
        Grid(size),
        driver=AnimationDriver(base_delay_ms=delay_ms),
        publish=published.append,
        rng=random.Random(seed),
    )
    return workbench, published
