"""Terminal surfaces: the character grid the renderers draw on."""

import curses
from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from term_clock.clock.geometry import CellPoint, GridSize, Style
from term_clock.logging.config import get_logger

logger = get_logger(__name__)

BLANK = " "


class Surface(ABC):
    """
    A logical character grid.

    Writes outside the current grid are dropped silently; hands and marks
    may legitimately run off the edge of a small terminal.
    """

    @abstractmethod
    def size(self) -> GridSize:
        """Current grid size."""

    @abstractmethod
    def set_cell(self, row: int, col: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        """Put ``glyph`` at (row, col), or do nothing when outside the grid."""

    @abstractmethod
    def clear(self) -> None:
        """Blank the whole grid."""

    @abstractmethod
    def read_key(self) -> Optional[int]:
        """Return a pending key code without blocking, or None."""

    def wait_key(self) -> Optional[int]:
        """Block until a key is available."""
        return self.read_key()

    def refresh(self) -> None:
        """Flush pending writes to the terminal."""

    def sync_size(self) -> None:
        """Re-read the terminal size after a resize notification."""

    def draw(self, point: CellPoint) -> None:
        self.set_cell(point.row, point.col, point.glyph, point.style)

    def write_text(self, row: int, col: int, text: str, style: Style = Style.TEXT) -> None:
        for i, ch in enumerate(text):
            self.set_cell(row, col + i, ch, style)

    def write_centered(self, row: int, text: str, style: Style = Style.TEXT) -> None:
        grid = self.size()
        self.write_text(row, max(0, (grid.cols - len(text)) // 2), text, style)


class GridSurface(Surface):
    """In-memory surface, used for snapshots and tests."""

    def __init__(self, rows: int, cols: int, keys: Iterable[int] = ()):
        self._grid = GridSize(rows, cols)
        self._cells: Dict[Tuple[int, int], Tuple[str, Style]] = {}
        self._keys: deque = deque(keys)
        self.refresh_count = 0

    def size(self) -> GridSize:
        return self._grid

    def resize(self, rows: int, cols: int) -> None:
        """Change the grid size; cells outside the new bounds are lost."""
        self._grid = GridSize(rows, cols)
        self._cells = {pos: cell for pos, cell in self._cells.items() if self._grid.contains(*pos)}

    def set_cell(self, row: int, col: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        if not self._grid.contains(row, col):
            return
        if glyph == BLANK:
            self._cells.pop((row, col), None)
        else:
            self._cells[(row, col)] = (glyph, style)

    def clear(self) -> None:
        self._cells.clear()

    def refresh(self) -> None:
        self.refresh_count += 1

    def feed_keys(self, *keys: int) -> None:
        self._keys.extend(keys)

    def read_key(self) -> Optional[int]:
        return self._keys.popleft() if self._keys else None

    def glyph_at(self, row: int, col: int) -> str:
        return self._cells.get((row, col), (BLANK, Style.DEFAULT))[0]

    def style_at(self, row: int, col: int) -> Style:
        return self._cells.get((row, col), (BLANK, Style.DEFAULT))[1]

    def painted_cells(self) -> Dict[Tuple[int, int], str]:
        """Every non-blank cell and its glyph."""
        return {pos: glyph for pos, (glyph, _) in self._cells.items()}

    def lines(self) -> List[str]:
        """Grid contents as text, one string per row."""
        return [
            "".join(self.glyph_at(row, col) for col in range(self._grid.cols))
            for row in range(self._grid.rows)
        ]

    def styled_lines(self) -> List[List[Tuple[str, Style]]]:
        """Grid contents as runs of (text, style), one list per row."""
        rows = []
        for row in range(self._grid.rows):
            runs: List[Tuple[str, Style]] = []
            for col in range(self._grid.cols):
                glyph, style = self._cells.get((row, col), (BLANK, Style.DEFAULT))
                if runs and runs[-1][1] == style:
                    runs[-1] = (runs[-1][0] + glyph, style)
                else:
                    runs.append((glyph, style))
            rows.append(runs)
        return rows


CURSES_COLORS = {
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

DEFAULT_PALETTE = {"face": "cyan", "hand": "yellow", "mark": "white", "digit": "cyan"}

# Pivot shares the mark color, text uses the terminal default
_STYLE_PAIRS = {
    Style.FACE: ("face", 1),
    Style.HAND: ("hand", 2),
    Style.MARK: ("mark", 3),
    Style.PIVOT: ("mark", 3),
    Style.DIGIT: ("digit", 4),
}


class CursesSurface(Surface):
    """Surface backed by a curses window."""

    def __init__(self, screen: "curses.window", palette: Optional[Mapping[str, str]] = None):
        self._screen = screen
        self._attrs: Dict[Style, int] = {}
        curses.curs_set(0)
        curses.noecho()
        screen.keypad(True)
        screen.nodelay(True)
        self._init_colors(dict(DEFAULT_PALETTE, **(palette or {})))

    def _init_colors(self, palette: Mapping[str, str]) -> None:
        if not curses.has_colors():
            logger.debug("Terminal has no color support")
            return
        curses.start_color()
        curses.use_default_colors()
        for style, (role, pair) in _STYLE_PAIRS.items():
            curses.init_pair(pair, CURSES_COLORS[palette[role]], -1)
            self._attrs[style] = curses.color_pair(pair)

    def size(self) -> GridSize:
        rows, cols = self._screen.getmaxyx()
        return GridSize(rows, cols)

    def set_cell(self, row: int, col: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        if not self.size().contains(row, col):
            return
        try:
            self._screen.addstr(row, col, glyph, self._attrs.get(style, curses.A_NORMAL))
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen; the glyph is still drawn
            pass

    def clear(self) -> None:
        self._screen.erase()

    def refresh(self) -> None:
        self._screen.refresh()

    def read_key(self) -> Optional[int]:
        key = self._screen.getch()
        return None if key == -1 else key

    def wait_key(self) -> Optional[int]:
        self._screen.nodelay(False)
        try:
            return self.read_key()
        finally:
            self._screen.nodelay(True)

    def sync_size(self) -> None:
        curses.endwin()
        self._screen.refresh()
        if hasattr(curses, "update_lines_cols"):
            curses.update_lines_cols()
