"""Grid search algorithms (BFS, DFS, Dijkstra, A*).

Each algorithm is a generator: it yields a :class:`SearchStep` after every
frontier pop and returns the :class:`SearchResult` when it stops. Drain one
with :func:`search`, or pace it with the animation driver.
"""

from __future__ import annotations

import logging
from typing import Callable, Generator

from gridwalk.engine.contracts import Algorithm, Coord, Occupancy, SearchResult, SearchStep
from gridwalk.engine.frontier import FifoFrontier, Frontier, LifoFrontier, PriorityFrontier
from gridwalk.engine.grid import Grid

logger = logging.getLogger(__name__)

SearchRun = Generator[SearchStep, None, SearchResult]
SearchFn = Callable[[Grid, Coord, Coord], SearchRun]


def breadth_first(grid: Grid, start: Coord, goal: Coord) -> SearchRun:
    return (yield from _uninformed(grid, start, goal, FifoFrontier(), Algorithm.BFS))


def depth_first(grid: Grid, start: Coord, goal: Coord) -> SearchRun:
    return (yield from _uninformed(grid, start, goal, LifoFrontier(), Algorithm.DFS))


def dijkstra(grid: Grid, start: Coord, goal: Coord) -> SearchRun:
    return (yield from _best_first(grid, start, goal, Algorithm.DIJKSTRA, _no_heuristic))


def astar(grid: Grid, start: Coord, goal: Coord) -> SearchRun:
    return (yield from _best_first(grid, start, goal, Algorithm.ASTAR, manhattan))


SEARCH_ALGORITHMS: dict[Algorithm, SearchFn] = {
    Algorithm.BFS: breadth_first,
    Algorithm.DFS: depth_first,
    Algorithm.DIJKSTRA: dijkstra,
    Algorithm.ASTAR: astar,
}


def iter_search(
    grid: Grid, start: Coord, goal: Coord, algorithm: Algorithm | str = Algorithm.ASTAR
) -> SearchRun:
    return SEARCH_ALGORITHMS[Algorithm(algorithm)](grid, start, goal)


def search(
    grid: Grid,
    start: Coord,
    goal: Coord,
    algorithm: Algorithm | str = Algorithm.ASTAR,
    *,
    on_step: Callable[[SearchStep], None] | None = None,
) -> SearchResult:
    """Run a search to completion without pacing."""
    steps = iter_search(grid, start, goal, algorithm)
    while True:
        try:
            step = next(steps)
        except StopIteration as stop:
            result: SearchResult = stop.value
            log_result(result)
            return result
        if on_step is not None:
            on_step(step)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct_path(
    came_from: dict[Coord, Coord | None], goal: Coord, grid: Grid
) -> list[Coord]:
    """Walk predecessors back from goal and mark the route on the grid."""
    path = [goal]
    current = came_from[goal]
    while current is not None:
        path.append(current)
        current = came_from[current]
    path.reverse()
    for coord in path[1:-1]:
        grid.mark(coord, Occupancy.PATH)
    return path


def path_cost(grid: Grid, path: list[Coord]) -> float:
    return sum(grid.cell_cost(coord) for coord in path[1:])


def log_result(result: SearchResult) -> None:
    if result.found:
        logger.info(
            "%s found a path: %d steps, cost %.1f, %d cells explored",
            result.algorithm.label,
            result.steps,
            result.cost,
            result.explored,
        )
    else:
        logger.info(
            "%s found no path after exploring %d cells",
            result.algorithm.label,
            result.explored,
        )


def _uninformed(
    grid: Grid, start: Coord, goal: Coord, frontier: Frontier, algorithm: Algorithm
) -> SearchRun:
    came_from: dict[Coord, Coord | None] = {start: None}
    frontier.push(start)
    explored = 0
    index = 0

    while frontier:
        current = frontier.pop()
        if current == goal:
            path = reconstruct_path(came_from, goal, grid)
            return SearchResult(
                algorithm=algorithm,
                path=path,
                explored=explored,
                cost=path_cost(grid, path),
            )

        explored += _mark_explored(grid, current)
        index += 1
        yield SearchStep(
            index=index, current=current, explored=explored, frontier_size=len(frontier)
        )

        for neighbor in grid.neighbors(current):
            if neighbor in came_from:
                continue
            came_from[neighbor] = current
            frontier.push(neighbor)

    return SearchResult(algorithm=algorithm, explored=explored)


def _best_first(
    grid: Grid,
    start: Coord,
    goal: Coord,
    algorithm: Algorithm,
    heuristic: Callable[[Coord, Coord], float],
) -> SearchRun:
    frontier = PriorityFrontier()
    frontier.push(start, heuristic(start, goal))
    came_from: dict[Coord, Coord | None] = {start: None}
    distance: dict[Coord, float] = {start: 0.0}
    closed: set[Coord] = set()
    explored = 0
    index = 0

    while frontier:
        current = frontier.pop()
        if current == goal:
            path = reconstruct_path(came_from, goal, grid)
            return SearchResult(
                algorithm=algorithm,
                path=path,
                explored=explored,
                cost=distance[goal],
            )

        closed.add(current)
        explored += _mark_explored(grid, current)
        index += 1
        yield SearchStep(
            index=index, current=current, explored=explored, frontier_size=len(frontier)
        )

        for neighbor in grid.neighbors(current):
            if neighbor in closed:
                continue
            tentative = distance[current] + grid.cell_cost(neighbor)
            if neighbor not in frontier:
                frontier.push(neighbor, tentative + heuristic(neighbor, goal))
            elif tentative < distance[neighbor]:
                frontier.update(neighbor, tentative + heuristic(neighbor, goal))
            else:
                continue
            distance[neighbor] = tentative
            came_from[neighbor] = current

    return SearchResult(algorithm=algorithm, explored=explored)


def _mark_explored(grid: Grid, coord: Coord) -> int:
    if grid.occupancy(coord) in {Occupancy.START, Occupancy.GOAL}:
        return 0
    grid.mark(coord, Occupancy.EXPLORED)
    return 1


def _no_heuristic(a: Coord, b: Coord) -> float:
    return 0
