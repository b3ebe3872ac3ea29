"""Rich panels describing the search state next to the grid."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gridwalk.engine.contracts import (
    Algorithm,
    EditMode,
    GridSnapshot,
    Occupancy,
    SearchResult,
    TERRAIN_COSTS,
    Terrain,
)
from gridwalk.render.grid_view import (
    OCCUPANCY_STYLES,
    OCCUPANCY_SYMBOLS,
    TERRAIN_STYLES,
    TERRAIN_SYMBOLS,
    render_grid_lines,
)


def render_grid(snapshot: GridSnapshot, *, title: str = "Grid") -> RenderableType:
    return Panel(Group(*render_grid_lines(snapshot)), title=title, expand=False)


def render_status(
    snapshot: GridSnapshot,
    *,
    algorithm: Algorithm,
    mode: EditMode,
    speed: float,
    result: SearchResult | None = None,
    message: str = "",
) -> RenderableType:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Algorithm", algorithm.label)
    table.add_row("Mode", mode.value.replace("_", " "))
    table.add_row("Grid", f"{snapshot.size}x{snapshot.size}")
    table.add_row("Terrain", "on" if snapshot.terrain_enabled else "off")
    table.add_row("Speed", f"{speed:g}x")
    if snapshot.step is not None:
        table.add_row("Step", str(snapshot.step.index))
        table.add_row("Explored", str(snapshot.step.explored))
        table.add_row("Frontier", str(snapshot.step.frontier_size))
    elif result is not None:
        table.add_row("Explored", str(result.explored))
        table.add_row("Path", str(result.steps) if result.found else "-")
        table.add_row("Cost", f"{result.cost:g}" if result.found else "-")
    if message:
        table.add_row("Note", message)
    return Panel(Group(table, render_legend()), title="Search")


def render_legend() -> RenderableType:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Symbol")
    table.add_column("Meaning")
    for kind in (Occupancy.START, Occupancy.GOAL, Occupancy.OBSTACLE, Occupancy.PATH):
        table.add_row(
            Text(OCCUPANCY_SYMBOLS[kind], style=OCCUPANCY_STYLES[kind]), kind.value
        )
    table.add_row(Text(OCCUPANCY_SYMBOLS[Occupancy.EXPLORED]), Occupancy.EXPLORED.value)
    for terrain in Terrain:
        label = "open" if terrain == Terrain.NONE else terrain.value
        table.add_row(
            Text(TERRAIN_SYMBOLS[terrain], style=TERRAIN_STYLES[terrain]),
            f"{label} ({TERRAIN_COSTS[terrain]:g})",
        )
    return table


def describe_result(result: SearchResult, *, terrain_enabled: bool = False) -> str:
    if not result.found:
        return "No path found. The goal is unreachable."
    summary = f"Path found! Length: {result.steps} steps, Explored: {result.explored} cells"
    if terrain_enabled:
        summary += f", Cost: {result.cost:g}"
    return summary
