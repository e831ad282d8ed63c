"""Dirty-region tracking for dynamic clock elements."""

from typing import Dict, Hashable, Iterable, Sequence, Tuple

from term_clock.clock.geometry import CellPoint
from term_clock.clock.surface import BLANK, Surface

PaintedSet = Tuple[CellPoint, ...]


class DirtyRegionTracker:
    """
    Remembers the cells each dynamic element painted last frame.

    Per element and frame the order is erase, draw, record. Erasing is
    unconditional: a cell is blanked even if another element wrote over it
    since, so overlapping elements never leave glyphs behind. Within a frame
    the element drawn last wins a shared cell.

    Static cells registered with :meth:`set_underlay` are restored on erase
    instead of being blanked.
    """

    def __init__(self, surface: Surface):
        self.surface = surface
        self._painted: Dict[Hashable, PaintedSet] = {}
        self._underlay: Dict[Tuple[int, int], CellPoint] = {}

    @property
    def elements(self) -> Tuple[Hashable, ...]:
        return tuple(self._painted)

    def previous(self, key: Hashable) -> PaintedSet:
        return self._painted.get(key, ())

    def set_underlay(self, points: Iterable[CellPoint]) -> None:
        for point in points:
            self._underlay[point.position] = point

    def erase(self, points: Iterable[CellPoint]) -> None:
        """Blank every cell in ``points``. Safe to repeat."""
        for point in points:
            static = self._underlay.get(point.position)
            if static is not None:
                self.surface.draw(static)
            else:
                self.surface.set_cell(point.row, point.col, BLANK)

    def erase_element(self, key: Hashable) -> None:
        self.erase(self.previous(key))

    def record(self, key: Hashable, points: Sequence[CellPoint]) -> PaintedSet:
        """Store ``points`` as what ``key`` has on screen now."""
        painted = tuple(points)
        self._painted[key] = painted
        return painted

    def paint(self, key: Hashable, points: Sequence[CellPoint]) -> PaintedSet:
        """Draw ``points`` and record them for ``key``. Erase first."""
        for point in points:
            self.surface.draw(point)
        return self.record(key, points)

    def reset(self) -> None:
        """Forget everything; used when the screen has been cleared."""
        self._painted.clear()
        self._underlay.clear()

    def painted_cells(self) -> Dict[Tuple[int, int], CellPoint]:
        """All currently recorded cells, later elements winning shared cells."""
        cells: Dict[Tuple[int, int], CellPoint] = {}
        for painted in self._painted.values():
            for point in painted:
                cells[point.position] = point
        return cells
