"""Seven-segment HH:MM:SS display."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from term_clock.clock.errors import SurfaceTooSmall
from term_clock.clock.geometry import CellPoint, GridSize, Style, clip
from term_clock.clock.renderer import ClockMode, Renderer
from term_clock.clock.sampler import TimeSample
from term_clock.logging.config import get_logger

logger = get_logger(__name__)

SEGMENT_GLYPH = "█"
COLON_GLYPH = "o"

# top, middle, bottom, top-left, top-right, bottom-left, bottom-right
SEGMENTS: Dict[int, Tuple[bool, ...]] = {
    0: (True, False, True, True, True, True, True),
    1: (False, False, False, False, True, False, True),
    2: (True, True, True, False, True, True, False),
    3: (True, True, True, False, True, False, True),
    4: (False, True, False, True, True, False, True),
    5: (True, True, True, True, False, False, True),
    6: (True, True, True, True, False, True, True),
    7: (True, False, False, False, True, False, True),
    8: (True, True, True, True, True, True, True),
    9: (True, True, True, True, True, False, True),
}

# Digit positions 0-5 grouped by the field they display
FIELD_POSITIONS = ((0, 1), (2, 3), (4, 5))


@dataclass(frozen=True)
class LayoutMetrics:
    """Digit size and placement for one grid size."""

    grid: GridSize
    scale: int
    digit_width: int
    digit_height: int
    colon_spacing: int
    total_width: int
    start_row: int
    start_col: int

    def digit_col(self, position: int) -> int:
        """Left column of digit ``position`` (0-5)."""
        colons = position // 2
        return self.start_col + position * self.digit_width + colons * self.colon_spacing

    def colon_cols(self) -> Tuple[int, int]:
        half = self.colon_spacing // 2
        return (
            self.start_col + 2 * self.digit_width + half,
            self.start_col + 4 * self.digit_width + self.colon_spacing + half,
        )


def compute_layout(grid: GridSize) -> LayoutMetrics:
    """
    Pick the largest digit scale that fits ``grid`` and centre the display.

    A digit is ``scale + 2`` columns wide and ``2 * scale + 3`` rows high.

    Args:
        grid: Current grid size

    Returns:
        Scale and placement of the six digits and two colons

    Raises:
        SurfaceTooSmall: not even scale 1 fits
    """
    scale = max(1, min((grid.rows - 3) // 2, (grid.cols - 10) // 8))
    digit_width = scale + 2
    digit_height = 2 * scale + 3
    colon_spacing = 3 if scale > 1 else 2
    total_width = 6 * digit_width + 2 * colon_spacing

    if grid.rows < digit_height or grid.cols < total_width:
        raise SurfaceTooSmall(grid, f"display needs {digit_height}x{total_width}")

    return LayoutMetrics(
        grid=grid,
        scale=scale,
        digit_width=digit_width,
        digit_height=digit_height,
        colon_spacing=colon_spacing,
        total_width=total_width,
        start_row=(grid.rows - digit_height) // 2,
        start_col=(grid.cols - total_width) // 2,
    )


def segment_cells(row: int, col: int, digit: int, scale: int) -> List[CellPoint]:
    """Cells lit for ``digit`` drawn with its top-left corner at (row, col)."""
    top, middle, bottom, top_left, top_right, bottom_left, bottom_right = SEGMENTS[digit]
    cells: List[CellPoint] = []

    def horizontal(r: int) -> None:
        cells.extend(CellPoint(r, col + 1 + i, SEGMENT_GLYPH, Style.DIGIT) for i in range(scale))

    def vertical(r: int, c: int) -> None:
        cells.extend(CellPoint(r + i, c, SEGMENT_GLYPH, Style.DIGIT) for i in range(scale))

    if top:
        horizontal(row)
    if middle:
        horizontal(row + scale + 1)
    if bottom:
        horizontal(row + 2 * scale + 2)
    if top_left:
        vertical(row + 1, col)
    if top_right:
        vertical(row + 1, col + scale + 1)
    if bottom_left:
        vertical(row + scale + 2, col)
    if bottom_right:
        vertical(row + scale + 2, col + scale + 1)
    return cells


def colon_cells(metrics: LayoutMetrics) -> List[CellPoint]:
    """The two dots of each separator."""
    upper = max(metrics.start_row + 1, metrics.start_row + metrics.scale // 2)
    lower = metrics.start_row + metrics.scale + 2 + metrics.scale // 2
    return [
        CellPoint(row, col, COLON_GLYPH, Style.DIGIT)
        for col in metrics.colon_cols()
        for row in (upper, lower)
    ]


def changed_positions(
    previous: Optional[Tuple[int, int, int]], current: Tuple[int, int, int]
) -> List[int]:
    """
    Digit positions to redraw going from ``previous`` to ``current`` fields.

    Both digits of a field are redrawn when the field changes, so a rollover
    such as 11:59:59 -> 12:00:00 refreshes every position.

    Args:
        previous: (hours, minutes, seconds) last drawn, or None after a relayout
        current: (hours, minutes, seconds) about to be drawn

    Returns:
        Positions 0-5, in order
    """
    positions: List[int] = []
    for index, pair in enumerate(FIELD_POSITIONS):
        if previous is None or previous[index] != current[index]:
            positions.extend(pair)
    return positions


class DigitalRenderer(Renderer):
    """Redraws only the digits whose field changed since the last frame."""

    mode = ClockMode.DIGITAL

    def __init__(self, surface):
        super().__init__(surface)
        self.metrics: Optional[LayoutMetrics] = None
        self.previous: Optional[Tuple[int, int, int]] = None

    @property
    def layout_grid(self) -> Optional[GridSize]:
        return self.metrics.grid if self.metrics else None

    def relayout(self, grid: GridSize) -> None:
        self.metrics = compute_layout(grid)
        self.previous = None
        logger.debug(f"Digital layout: scale {self.metrics.scale}, {self.metrics.digit_height}x{self.metrics.total_width}")

    def invalidate(self) -> None:
        super().invalidate()
        self.metrics = None
        self.previous = None

    def draw_static(self) -> None:
        if self.metrics is None:
            raise RuntimeError("relayout() must run before drawing")
        for cell in clip(colon_cells(self.metrics), self.metrics.grid):
            self.surface.draw(cell)

    def draw_frame(self, sample: TimeSample) -> None:
        metrics = self.metrics
        if metrics is None:
            raise RuntimeError("relayout() must run before drawing")

        current = sample.fields
        positions = changed_positions(self.previous, current)
        digits = sample.digits

        for position in positions:
            self.tracker.erase_element(position)
        for position in positions:
            cells = segment_cells(metrics.start_row, metrics.digit_col(position), digits[position], metrics.scale)
            self.tracker.paint(position, list(clip(cells, metrics.grid)))

        self.previous = current
