"""Geometry: time values to terminal cells."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

# Terminal cells are roughly twice as tall as they are wide. Horizontal
# offsets are multiplied by this so circles come out round.
ASPECT_RATIO = 2.0

VERTICAL = "|"
FORWARD_DIAGONAL = "/"
BACKWARD_DIAGONAL = "\\"
BORDER_GLYPH = "o"


class Style(str, Enum):
    """Visual role of a cell; surfaces map these to colors."""

    DEFAULT = "default"
    FACE = "face"
    HAND = "hand"
    MARK = "mark"
    PIVOT = "pivot"
    DIGIT = "digit"
    TEXT = "text"


@dataclass(frozen=True)
class GridSize:
    """Size of the character grid, read once per frame."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols


@dataclass(frozen=True)
class CellPoint:
    """A terminal cell with the glyph to put there."""

    row: int
    col: int
    glyph: str = " "
    style: Style = Style.DEFAULT

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)


Center = Tuple[int, int]


def angle_for(value: float, period: float) -> float:
    """Angle in radians for ``value`` on a dial of ``period`` units, 12 o'clock at -pi/2."""
    return (value / period) * 2.0 * math.pi - math.pi / 2


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def cell_distance(point: CellPoint, center: Center, ratio: float = ASPECT_RATIO) -> float:
    """Distance from center in row units, undoing the horizontal stretch."""
    return math.hypot(point.row - center[0], (point.col - center[1]) / ratio)


def project(center: Center, angle: float, radius: float, ratio: float = ASPECT_RATIO) -> Tuple[int, int]:
    """Cell reached by walking ``radius`` rows from center in direction ``angle``."""
    row = round_half_away(center[0] + math.sin(angle) * radius)
    col = round_half_away(center[1] + math.cos(angle) * radius * ratio)
    return row, col


def text_cells(row: int, col: int, text: str, style: Style) -> List[CellPoint]:
    """One cell per character of ``text`` starting at (row, col)."""
    return [CellPoint(row, col + i, ch, style) for i, ch in enumerate(text)]


def face_border(
    center: Center, radius: int, grid: GridSize, ratio: float = ASPECT_RATIO
) -> List[CellPoint]:
    """
    Cells of the circular face border, clipped to the grid.

    Args:
        center: (row, col) of the face center
        radius: Border radius in rows
        grid: Current grid size
        ratio: Horizontal stretch applied to column offsets

    Returns:
        Border cells in angle order, each cell once
    """
    # At most half a cell between samples on the stretched axis; never
    # coarser than one sample per degree
    samples = max(360, math.ceil(4 * math.pi * radius * max(ratio, 1.0)))
    seen = set()
    points = []
    for step in range(samples):
        row, col = project(center, 2 * math.pi * step / samples, radius, ratio)
        if (row, col) in seen or not grid.contains(row, col):
            continue
        seen.add((row, col))
        points.append(CellPoint(row, col, BORDER_GLYPH, Style.FACE))
    return points


def face_marks(
    center: Center, radius: int, grid: GridSize, ratio: float = ASPECT_RATIO
) -> List[Tuple[CellPoint, str]]:
    """
    Hour labels 12, 1 .. 11 just inside the border.

    Each entry is the cell of the label's first character and the label
    itself. Labels are shifted left by half their width so they sit centred
    on the hour position; a label that does not fit entirely is dropped.

    Args:
        center: (row, col) of the face center
        radius: Border radius in rows; labels sit 1.5 rows inside it
        grid: Current grid size
        ratio: Horizontal stretch applied to column offsets

    Returns:
        (first cell, label) pairs starting at 12 o'clock
    """
    marks = []
    for hour in range(12):
        label = str(hour or 12)
        row, col = project(center, angle_for(hour, 12), radius - 1.5, ratio)
        col -= len(label) // 2
        if not (grid.contains(row, col) and grid.contains(row, col + len(label) - 1)):
            continue
        marks.append((CellPoint(row, col, label[0], Style.MARK), label))
    return marks


def hand_glyph(angle: float) -> str:
    """
    Stroke glyph for a hand at ``angle``.

    Hands within 10 degrees of a quarter position get the vertical stroke;
    the rest get whichever diagonal runs the same way on screen (rows grow
    downward, so the first and third quadrants slope like a backslash).

    Args:
        angle: Hand angle in radians, 0 at 3 o'clock, clockwise

    Returns:
        One of ``|``, ``/`` or ``\\``
    """
    degrees = math.degrees(angle) % 360.0
    offset = degrees % 90.0
    if offset < 10.0 or offset >= 80.0:
        return VERTICAL
    quadrant = int(degrees // 90.0) % 4
    # Screen slope, not y-up slope: 10-80 degrees runs down and to the right
    return BACKWARD_DIAGONAL if quadrant in (0, 2) else FORWARD_DIAGONAL


def hand_path(
    angle: float,
    length: float,
    center: Center,
    grid: GridSize,
    ratio: float = ASPECT_RATIO,
) -> List[CellPoint]:
    """
    Cells of a hand from the center out to ``length`` rows (aspect corrected).

    The path starts at the center cell and is sampled at most one cell apart
    on either axis, so the stroke has no gaps. Repeated cells are collapsed
    and the distance from center never decreases along the path. Cells
    outside the grid are dropped.

    Args:
        angle: Hand angle in radians, 0 at 3 o'clock, clockwise
        length: Hand length in rows
        center: (row, col) the hand pivots on
        grid: Current grid size
        ratio: Horizontal stretch applied to column offsets

    Returns:
        Hand cells ordered from the center outward
    """
    glyph = hand_glyph(angle)
    dy = math.sin(angle)
    dx = math.cos(angle) * ratio
    steps = max(1, math.ceil(length * max(abs(dy), abs(dx), 1.0)))

    points: List[CellPoint] = []
    last_distance = -1.0
    for step in range(steps + 1):
        t = length * step / steps
        row = round_half_away(center[0] + dy * t)
        col = round_half_away(center[1] + dx * t)
        if points and points[-1].position == (row, col):
            continue
        if not grid.contains(row, col):
            continue
        point = CellPoint(row, col, glyph, Style.HAND)
        distance = cell_distance(point, center, ratio)
        if distance < last_distance:
            continue
        last_distance = distance
        points.append(point)
    return points


def clip(points: Sequence[CellPoint], grid: GridSize) -> Iterator[CellPoint]:
    """Yield only the points that fall inside ``grid``."""
    return (p for p in points if grid.contains(p.row, p.col))
