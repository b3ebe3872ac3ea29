"""Grid model, search algorithms, and animation pacing."""

from gridwalk.engine.animation import AnimationDriver
from gridwalk.engine.contracts import (
    Algorithm,
    CellState,
    Coord,
    EditMode,
    GridSnapshot,
    Level,
    Occupancy,
    SearchResult,
    SearchStep,
    Terrain,
)
from gridwalk.engine.errors import GridBusy, GridwalkError, InvalidSize, NoStartOrGoal
from gridwalk.engine.grid import Grid
from gridwalk.engine.search import (
    SEARCH_ALGORITHMS,
    astar,
    breadth_first,
    depth_first,
    dijkstra,
    iter_search,
    reconstruct_path,
    search,
)
from gridwalk.engine.workbench import Workbench

__all__ = [
    "Algorithm",
    "AnimationDriver",
    "CellState",
    "Coord",
    "EditMode",
    "Grid",
    "GridBusy",
    "GridSnapshot",
    "GridwalkError",
    "InvalidSize",
    "Level",
    "NoStartOrGoal",
    "Occupancy",
    "SEARCH_ALGORITHMS",
    "SearchResult",
    "SearchStep",
    "Terrain",
    "Workbench",
    "astar",
    "breadth_first",
    "depth_first",
    "dijkstra",
    "iter_search",
    "reconstruct_path",
    "search",
]
