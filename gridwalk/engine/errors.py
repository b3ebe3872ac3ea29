"""Engine exceptions."""

from __future__ import annotations


class GridwalkError(Exception):
    """Base class for errors reported to the caller of a grid command."""


class InvalidSize(GridwalkError, ValueError):
    def __init__(self, size: int) -> None:
        super().__init__(f"Grid size must be at least 2, got {size}.")
        self.size = size


class NoStartOrGoal(GridwalkError):
    def __init__(self) -> None:
        super().__init__("Please set both start and goal positions.")


class GridBusy(GridwalkError):
    """Raised when the grid is edited while a search is animating."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Cannot {command} while a search is running.")
        self.command = command
