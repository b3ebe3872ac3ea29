"""Textual widget that renders the grid and reports pointer gestures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.console import RenderableType
from textual.events import MouseDown, MouseMove, MouseUp
from textual.geometry import Size
from textual.message import Message
from textual.widget import Widget

from gridwalk.engine.contracts import Coord
from gridwalk.render.grid_view import screen_to_cell


@dataclass(frozen=True)
class GridRenderResult:
    renderable: RenderableType
    grid_size: int
    offset_x: int
    offset_y: int


class CellPressed(Message):
    """Pointer went down over a grid cell."""

    def __init__(self, *, cell: Coord) -> None:
        super().__init__()
        self.cell = cell


class CellDragged(Message):
    """Pointer moved over a grid cell while held."""

    def __init__(self, *, cell: Coord) -> None:
        super().__init__()
        self.cell = cell


class PointerReleased(Message):
    """Pointer gesture ended."""


class GridWidget(Widget):
    def __init__(
        self,
        render_grid: Callable[[Size], GridRenderResult],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._render_grid = render_grid
        self._held = False
        self._grid_size = 0
        self._offset_x = 0
        self._offset_y = 0

    @property
    def origin(self) -> tuple[int, int]:
        return self._offset_x, self._offset_y

    def render(self) -> RenderableType:
        result = self._render_grid(self.content_size)
        self._grid_size = result.grid_size
        self._offset_x = result.offset_x
        self._offset_y = result.offset_y
        return result.renderable

    def on_mouse_down(self, event: MouseDown) -> None:
        cell = self._cell_for(event)
        if cell is None:
            return
        self._held = True
        self.capture_mouse()
        self.post_message(CellPressed(cell=cell))

    def on_mouse_move(self, event: MouseMove) -> None:
        if not self._held:
            return
        cell = self._cell_for(event)
        if cell is None:
            return
        self.post_message(CellDragged(cell=cell))

    def on_mouse_up(self, event: MouseUp) -> None:
        if not self._held:
            return
        self._held = False
        self.release_mouse()
        self.post_message(PointerReleased())

    def _cell_for(self, event: MouseDown | MouseMove | MouseUp) -> Coord | None:
        offset = event.get_content_offset(self)
        if offset is None:
            return None
        x, y = offset
        cell_x, cell_y = screen_to_cell(x, y, origin=self.origin)
        if not (0 <= cell_x < self._grid_size and 0 <= cell_y < self._grid_size):
            return None
        return cell_x, cell_y
