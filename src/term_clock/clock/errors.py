"""Exceptions raised by the clock rendering core."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from term_clock.clock.geometry import GridSize


class ClockError(Exception):
    """Base class for clock errors."""


class ClockUnavailable(ClockError):
    """The system time could not be read. Nothing can be rendered without it."""


class SurfaceTooSmall(ClockError):
    """The terminal grid cannot hold the minimum layout of a display mode."""

    def __init__(self, grid: "GridSize", reason: str):
        self.grid = grid
        self.reason = reason
        super().__init__(f"{grid.rows}x{grid.cols} grid is too small: {reason}")
