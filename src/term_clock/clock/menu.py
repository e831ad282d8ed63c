"""Mode selection menu."""

import curses
from typing import Optional

from term_clock.clock.renderer import ClockMode
from term_clock.clock.resize import ResizeCoordinator
from term_clock.clock.surface import Surface
from term_clock.clock.geometry import Style

QUIT_KEYS = (ord("q"), ord("Q"))

MENU_LINES = (
    "term-clock",
    "",
    "Up     analog clock",
    "Down   digital clock",
    "q      quit",
)


def draw_menu(surface: Surface) -> None:
    surface.clear()
    grid = surface.size()
    top = max(0, (grid.rows - len(MENU_LINES)) // 2)
    for offset, line in enumerate(MENU_LINES):
        surface.write_centered(top + offset, line, Style.MARK if offset == 0 else Style.TEXT)
    surface.refresh()


def run_menu(surface: Surface, coordinator: ResizeCoordinator) -> Optional[ClockMode]:
    """
    Wait for the user to pick a mode.

    The help text is redrawn, centred for the new size, whenever a resize
    is signalled or read as a key.

    Args:
        surface: Surface to draw on and read keys from
        coordinator: Resize notifications shared with the clock loop

    Returns:
        The chosen mode, or None when the user quits or input is closed
    """
    coordinator.consume()
    draw_menu(surface)
    while True:
        key = surface.wait_key()
        if coordinator.consume() or key == curses.KEY_RESIZE:
            surface.sync_size()
            draw_menu(surface)
            if key is None or key == curses.KEY_RESIZE:
                continue
        if key is None or key in QUIT_KEYS:
            return None
        if key == curses.KEY_UP:
            return ClockMode.ANALOG
        if key == curses.KEY_DOWN:
            return ClockMode.DIGITAL
