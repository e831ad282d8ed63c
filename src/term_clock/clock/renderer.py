"""Common base for the clock display modes."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from term_clock.clock.geometry import GridSize
from term_clock.clock.sampler import TimeSample
from term_clock.clock.surface import Surface
from term_clock.clock.tracker import DirtyRegionTracker


class ClockMode(str, Enum):
    """Display modes. Only one runs at a time."""

    ANALOG = "analog"
    DIGITAL = "digital"


class Renderer(ABC):
    """
    A display mode drawing onto a surface.

    The render loop calls :meth:`relayout` and :meth:`draw_static` after the
    screen has been cleared, then :meth:`draw_frame` every tick. Each
    renderer owns its tracker and layout; nothing is shared between modes.
    """

    mode: ClockMode

    def __init__(self, surface: Surface):
        self.surface = surface
        self.tracker = DirtyRegionTracker(surface)

    @property
    @abstractmethod
    def layout_grid(self) -> Optional[GridSize]:
        """Grid size the cached layout was computed for, or None."""

    @abstractmethod
    def relayout(self, grid: GridSize) -> None:
        """
        Recompute the layout for ``grid``.

        Args:
            grid: Fresh grid size read after the screen was cleared

        Raises:
            SurfaceTooSmall: the grid cannot hold this mode's minimum layout
        """

    @abstractmethod
    def draw_static(self) -> None:
        """Draw the parts that only change on relayout."""

    @abstractmethod
    def draw_frame(self, sample: TimeSample) -> None:
        """
        Update the dynamic parts for ``sample``.

        Args:
            sample: Time to show
        """

    def invalidate(self) -> None:
        """Drop the layout and everything the tracker remembers."""
        self.tracker.reset()
