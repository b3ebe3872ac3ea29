"""Interactive Textual screen for painting grids and watching searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.align import Align
from rich.console import Group
from rich.panel import Panel
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.geometry import Size
from textual.screen import Screen
from textual.widgets import Static

from gridwalk.engine.contracts import Algorithm, EditMode, GridSnapshot, Level
from gridwalk.engine.errors import GridwalkError, NoStartOrGoal
from gridwalk.engine.workbench import Workbench
from gridwalk.render.grid_view import grid_origin, render_grid_lines
from gridwalk.render.textual_widgets import (
    CellDragged,
    CellPressed,
    GridRenderResult,
    GridWidget,
    PointerReleased,
)
from gridwalk.render.viewer import describe_result, render_status


SIDE_WIDTH = 36

KEY_MODES = {
    "s": EditMode.SET_START,
    "g": EditMode.SET_GOAL,
    "o": EditMode.TOGGLE_OBSTACLE,
    "1": EditMode.SET_GRASS,
    "2": EditMode.SET_MUD,
    "3": EditMode.SET_WATER,
    "escape": EditMode.NONE,
}

KEY_ALGORITHMS = {
    "b": Algorithm.BFS,
    "d": Algorithm.DFS,
    "k": Algorithm.DIJKSTRA,
    "a": Algorithm.ASTAR,
}

SPEED_STEPS = (0.25, 0.5, 1.0, 2.0, 4.0, 8.0)


@dataclass
class ScreenState:
    algorithm: Algorithm
    snapshot: GridSnapshot
    message: str = ""


class WorkbenchScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        layout: horizontal;
        height: 1fr;
    }
    #grid {
        width: 1fr;
    }
    #status-bar {
        height: 3;
    }
    """

    def __init__(self, workbench: Workbench, *, algorithm: Algorithm = Algorithm.ASTAR) -> None:
        super().__init__()
        self.workbench = workbench
        self.state = ScreenState(algorithm=algorithm, snapshot=workbench.snapshot())
        self._grid_widget: GridWidget | None = None
        self._side_pane: Static | None = None
        self._status_bar: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            with Horizontal(id="main"):
                yield GridWidget(self._render_grid, id="grid")
                yield Static(id="side-pane")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._grid_widget = self.query_one("#grid", GridWidget)
        self._side_pane = self.query_one("#side-pane", Static)
        self._status_bar = self.query_one("#status-bar", Static)
        self._side_pane.styles.width = SIDE_WIDTH
        self.workbench.set_publisher(self._on_snapshot)
        self._refresh_ui()

    def on_unmount(self) -> None:
        self.workbench.set_publisher(None)

    def on_key(self, event: Key) -> None:
        key = event.key
        if key == "q":
            self.app.exit()
        elif key in KEY_MODES:
            self.workbench.set_mode(KEY_MODES[key])
        elif key in KEY_ALGORITHMS:
            self.state.algorithm = KEY_ALGORITHMS[key]
        elif key in {"enter", "space"}:
            self.run_worker(self._run_search(), exclusive=True, group="search")
        elif key == "c":
            self._command(self.workbench.clear_path)
        elif key == "x":
            self._command(self.workbench.clear_grid)
        elif key == "r":
            self._command(self.workbench.randomize_obstacles)
        elif key == "t":
            self._command(
                self.workbench.set_terrain_enabled,
                not self.workbench.grid.terrain_enabled,
            )
        elif key == "l":
            self._command(self.workbench.set_level, _next_level(self.workbench.grid.size))
        elif event.character in {"+", "=", "-"}:
            delta = -1 if event.character == "-" else 1
            self.workbench.set_animation_speed(_step_speed(self.workbench.driver.speed, delta))
        else:
            return
        event.stop()
        self._refresh_ui()

    def on_cell_pressed(self, message: CellPressed) -> None:
        self._command(self.workbench.press, message.cell)

    def on_cell_dragged(self, message: CellDragged) -> None:
        self._command(self.workbench.drag_over_cell, message.cell)

    def on_pointer_released(self, message: PointerReleased) -> None:
        self.workbench.release()

    async def _run_search(self) -> None:
        algorithm = self.state.algorithm
        self.state.message = f"Running {algorithm.label}..."
        try:
            result = await self.workbench.find_path(algorithm)
        except NoStartOrGoal as exc:
            self.state.message = str(exc)
        else:
            self.state.message = describe_result(
                result, terrain_enabled=self.workbench.grid.terrain_enabled
            )
        self._refresh_ui()

    def _command(self, command: Callable[..., None], *args: object) -> None:
        try:
            command(*args)
        except GridwalkError as exc:
            self.state.message = str(exc)
        self._refresh_ui()

    def _on_snapshot(self, snapshot: GridSnapshot) -> None:
        self.state.snapshot = snapshot
        self._refresh_ui()

    def _render_grid(self, content_size: Size) -> GridRenderResult:
        snapshot = self.state.snapshot
        lines = render_grid_lines(snapshot)
        grid_render = Align.center(Group(*lines), vertical="middle")
        offset_x, offset_y = grid_origin(snapshot.size, content_size.width, content_size.height)
        return GridRenderResult(
            renderable=Panel(grid_render, title="Grid", padding=(0, 0)),
            grid_size=snapshot.size,
            offset_x=offset_x,
            offset_y=offset_y,
        )

    def _refresh_ui(self) -> None:
        if self._side_pane:
            self._side_pane.update(
                render_status(
                    self.state.snapshot,
                    algorithm=self.state.algorithm,
                    mode=self.workbench.mode,
                    speed=self.workbench.driver.speed,
                    result=self.workbench.last_result,
                    message=self.state.message,
                )
            )
        if self._status_bar:
            self._status_bar.update(_render_status_bar())
        if self._grid_widget:
            self._grid_widget.refresh()


class GridwalkApp(App):
    """Host the workbench screen."""

    def __init__(self, workbench: Workbench, *, algorithm: Algorithm = Algorithm.ASTAR) -> None:
        super().__init__()
        self._workbench = workbench
        self._algorithm = algorithm
        self.title = "gridwalk"

    def on_mount(self) -> None:
        self.push_screen(WorkbenchScreen(self._workbench, algorithm=self._algorithm))


def run_workbench_app(workbench: Workbench, *, algorithm: Algorithm = Algorithm.ASTAR) -> None:
    GridwalkApp(workbench, algorithm=algorithm).run()


def _render_status_bar() -> Panel:
    text = Text(
        "s=start | g=goal | o=walls | 1/2/3=grass/mud/water | esc=none | "
        "b/d/k/a=algorithm | enter=find | c=clear path | x=clear | r=random | "
        "t=terrain | l=level | +/-=speed | q=quit",
        style="bold",
    )
    return Panel(text, padding=(0, 1))


def _next_level(size: int) -> Level:
    levels = list(Level)
    for index, level in enumerate(levels):
        if level.size == size:
            return levels[(index + 1) % len(levels)]
    return Level.MEDIUM


def _step_speed(current: float, delta: int) -> float:
    if current in SPEED_STEPS:
        index = SPEED_STEPS.index(current) + delta
    else:
        index = 2 + delta
    return SPEED_STEPS[max(0, min(len(SPEED_STEPS) - 1, index))]
