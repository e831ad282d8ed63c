"""Resize notifications and the relayout state machine."""

import signal
from enum import Enum
from typing import Any, Optional

from term_clock.clock.geometry import GridSize
from term_clock.logging.config import get_logger

logger = get_logger(__name__)


class LayoutState(str, Enum):
    STABLE = "stable"
    PENDING_RELAYOUT = "pending_relayout"
    TOO_SMALL = "too_small"


class ResizeCoordinator:
    """
    Turns asynchronous resize notifications into relayouts.

    The signal handler only sets a flag. The render loop calls
    :meth:`consume` once per tick, and when it returns True the loop clears
    every cache, re-reads the grid size and redraws everything.
    """

    def __init__(self) -> None:
        # Plain attribute: assignment is atomic and safe inside a signal handler
        self._pending = True
        self.state = LayoutState.PENDING_RELAYOUT
        self.degraded_grid: Optional[GridSize] = None
        self._previous_handler: Any = None
        self._installed = False

    @property
    def pending(self) -> bool:
        return self._pending

    def notify(self, *_: Any) -> None:
        """Mark the layout stale. Also usable directly as a signal handler."""
        self._pending = True

    def consume(self) -> bool:
        """
        Take a pending notification, if any.

        The flag is cleared before the caller reads the new size, so a resize
        arriving during the relayout is picked up on the next tick.
        """
        if not self._pending:
            return False
        self._pending = False
        self.state = LayoutState.PENDING_RELAYOUT
        return True

    def settle(self) -> None:
        """The full redraw after a relayout is done."""
        if self.state is not LayoutState.STABLE:
            logger.debug("Layout stable")
        self.state = LayoutState.STABLE
        self.degraded_grid = None

    def degrade(self, grid: GridSize) -> None:
        """The grid is too small to render; show the message until it changes."""
        if self.state is not LayoutState.TOO_SMALL or self.degraded_grid != grid:
            logger.info(f"Terminal too small ({grid.rows}x{grid.cols})")
        self.state = LayoutState.TOO_SMALL
        self.degraded_grid = grid

    def install(self) -> None:
        """Route SIGWINCH to :meth:`notify` where the platform has it."""
        if self._installed or not hasattr(signal, "SIGWINCH"):
            return
        self._previous_handler = signal.signal(signal.SIGWINCH, self.notify)
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        signal.signal(signal.SIGWINCH, self._previous_handler or signal.SIG_DFL)
        self._installed = False

    def __enter__(self) -> "ResizeCoordinator":
        self.install()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.uninstall()
