"""Rich rendering of grid snapshots."""

from __future__ import annotations

from rich.text import Text

from gridwalk.engine.contracts import Coord, GridSnapshot, Occupancy, Terrain

CELL_WIDTH = 2

TERRAIN_SYMBOLS = {
    Terrain.NONE: ".",
    Terrain.GRASS: ",",
    Terrain.MUD: ":",
    Terrain.WATER: "~",
}

TERRAIN_STYLES = {
    Terrain.NONE: "grey70",
    Terrain.GRASS: "green3",
    Terrain.MUD: "yellow3",
    Terrain.WATER: "blue",
}

OCCUPANCY_SYMBOLS = {
    Occupancy.OBSTACLE: "#",
    Occupancy.START: "S",
    Occupancy.GOAL: "G",
    Occupancy.PATH: "*",
    Occupancy.EXPLORED: "o",
}

OCCUPANCY_STYLES = {
    Occupancy.OBSTACLE: "bold grey50",
    Occupancy.START: "bold bright_green",
    Occupancy.GOAL: "bold bright_red",
    Occupancy.PATH: "bold bright_cyan",
}

EXPLORED_BACKGROUND = "on grey23"
CURRENT_STYLE = "bold bright_yellow on grey23"
CURSOR_STYLE = "reverse"


def cell_glyph(snapshot: GridSnapshot, coord: Coord) -> tuple[str, str]:
    """Return the symbol and style for one cell."""
    cell = snapshot.cell(coord)
    terrain_style = TERRAIN_STYLES[cell.terrain]
    if cell.occupancy == Occupancy.EMPTY:
        return TERRAIN_SYMBOLS[cell.terrain], terrain_style
    if cell.occupancy == Occupancy.EXPLORED:
        return OCCUPANCY_SYMBOLS[cell.occupancy], f"{terrain_style} {EXPLORED_BACKGROUND}"
    return OCCUPANCY_SYMBOLS[cell.occupancy], OCCUPANCY_STYLES[cell.occupancy]


def render_grid_lines(
    snapshot: GridSnapshot, *, cursor: Coord | None = None
) -> list[Text]:
    current = snapshot.step.current if snapshot.step else None
    lines: list[Text] = []
    for y in range(snapshot.size):
        line = Text()
        for x in range(snapshot.size):
            symbol, style = cell_glyph(snapshot, (x, y))
            if (x, y) == current and snapshot.cell((x, y)).occupancy == Occupancy.EXPLORED:
                style = CURRENT_STYLE
            if (x, y) == cursor:
                style = f"{style} {CURSOR_STYLE}"
            line.append(symbol.ljust(CELL_WIDTH), style=style)
        lines.append(line)
    return lines


def grid_origin(size: int, content_width: int, content_height: int) -> tuple[int, int]:
    """Top-left character of cell (0, 0) in a bordered panel that centres the grid."""
    inner_width = max(1, content_width - 2)
    inner_height = max(1, content_height - 2)
    offset_x = 1 + max(0, (inner_width - size * CELL_WIDTH) // 2)
    offset_y = 1 + max(0, (inner_height - size) // 2)
    return offset_x, offset_y


def screen_to_cell(x: int, y: int, *, origin: tuple[int, int] = (0, 0)) -> Coord:
    """Map a character offset inside the grid widget to a grid coordinate."""
    return ((x - origin[0]) // CELL_WIDTH, y - origin[1])
