"""Incremental terminal clock rendering."""

from term_clock.clock.analog import AnalogRenderer
from term_clock.clock.digital import DigitalRenderer
from term_clock.clock.errors import ClockError, ClockUnavailable, SurfaceTooSmall
from term_clock.clock.geometry import CellPoint, GridSize, Style
from term_clock.clock.renderer import ClockMode, Renderer
from term_clock.clock.resize import LayoutState, ResizeCoordinator
from term_clock.clock.sampler import FixedSampler, TimeSample, TimeSampler
from term_clock.clock.service import ClockService, TickResult, run_session
from term_clock.clock.surface import CursesSurface, GridSurface, Surface
from term_clock.clock.tracker import DirtyRegionTracker

__all__ = [
    "AnalogRenderer",
    "DigitalRenderer",
    "ClockError",
    "ClockUnavailable",
    "SurfaceTooSmall",
    "CellPoint",
    "GridSize",
    "Style",
    "ClockMode",
    "Renderer",
    "LayoutState",
    "ResizeCoordinator",
    "FixedSampler",
    "TimeSample",
    "TimeSampler",
    "ClockService",
    "TickResult",
    "run_session",
    "CursesSurface",
    "GridSurface",
    "Surface",
    "DirtyRegionTracker",
]
