"""Analog clock face with hour, minute and second hands."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from term_clock.clock.errors import SurfaceTooSmall
from term_clock.clock.geometry import (
    ASPECT_RATIO,
    CellPoint,
    GridSize,
    Style,
    clip,
    face_border,
    face_marks,
    hand_path,
    text_cells,
)
from term_clock.clock.renderer import ClockMode, Renderer
from term_clock.clock.sampler import TimeSample, hand_angles
from term_clock.logging.config import get_logger

logger = get_logger(__name__)

MIN_RADIUS = 3
PIVOT_GLYPH = "O"
HANDS = ("hour", "minute", "second")
READOUT = "readout"


@dataclass(frozen=True)
class AnalogLayout:
    """Face position and size for one grid size."""

    grid: GridSize
    center_row: int
    center_col: int
    radius: int

    @property
    def center(self) -> Tuple[int, int]:
        return (self.center_row, self.center_col)

    @property
    def readout_row(self) -> int:
        return min(self.grid.rows - 1, self.center_row + self.radius + 1)


def compute_layout(grid: GridSize, ratio: float = ASPECT_RATIO) -> AnalogLayout:
    """
    Fit the face into ``grid``.

    Args:
        grid: Current grid size
        ratio: Horizontal stretch applied to column offsets

    Returns:
        Center and radius of the largest face that fits

    Raises:
        SurfaceTooSmall: the radius would be below MIN_RADIUS
    """
    radius = min(grid.rows // 2, int(grid.cols // (2 * ratio))) - 2
    if radius < MIN_RADIUS:
        raise SurfaceTooSmall(grid, f"face radius {radius} is below {MIN_RADIUS}")
    return AnalogLayout(grid=grid, center_row=grid.rows // 2, center_col=grid.cols // 2, radius=radius)


def hand_lengths(radius: int) -> Tuple[int, int, int]:
    """Hour, minute and second hand lengths for a face of ``radius``."""
    return (
        max(1, radius * 2 // 5),
        max(1, radius * 3 // 5),
        max(1, radius - 2),
    )


class AnalogRenderer(Renderer):
    """Draws the face once per layout and the hands every frame."""

    mode = ClockMode.ANALOG

    def __init__(self, surface, ratio: float = ASPECT_RATIO, show_readout: bool = True):
        super().__init__(surface)
        self.ratio = ratio
        self.show_readout = show_readout
        self.layout: Optional[AnalogLayout] = None

    @property
    def layout_grid(self) -> Optional[GridSize]:
        return self.layout.grid if self.layout else None

    def relayout(self, grid: GridSize) -> None:
        self.layout = compute_layout(grid, self.ratio)
        logger.debug(f"Analog layout: radius {self.layout.radius} centred at {self.layout.center}")

    def invalidate(self) -> None:
        super().invalidate()
        self.layout = None

    def _require_layout(self) -> AnalogLayout:
        if self.layout is None:
            raise RuntimeError("relayout() must run before drawing")
        return self.layout

    def _pivot(self) -> CellPoint:
        layout = self._require_layout()
        return CellPoint(layout.center_row, layout.center_col, PIVOT_GLYPH, Style.PIVOT)

    def static_cells(self) -> List[CellPoint]:
        """Border, hour labels and pivot for the current layout."""
        layout = self._require_layout()
        cells = face_border(layout.center, layout.radius, layout.grid, self.ratio)
        for anchor, label in face_marks(layout.center, layout.radius, layout.grid, self.ratio):
            cells.extend(text_cells(anchor.row, anchor.col, label, Style.MARK))
        cells.append(self._pivot())
        return cells

    def draw_static(self) -> None:
        cells = self.static_cells()
        for cell in cells:
            self.surface.draw(cell)
        self.tracker.set_underlay(cells)

    def draw_frame(self, sample: TimeSample) -> None:
        layout = self._require_layout()

        # Erase everything first so one hand's erase cannot blank another's new stroke
        for key in HANDS + (READOUT,):
            self.tracker.erase_element(key)

        for key, angle, length in zip(HANDS, hand_angles(sample), hand_lengths(layout.radius)):
            self.tracker.paint(key, hand_path(angle, length, layout.center, layout.grid, self.ratio))

        self.surface.draw(self._pivot())

        if self.show_readout:
            text = sample.hhmmss
            col = max(0, layout.center_col - len(text) // 2)
            cells = list(clip(text_cells(layout.readout_row, col, text, Style.TEXT), layout.grid))
            self.tracker.paint(READOUT, cells)
