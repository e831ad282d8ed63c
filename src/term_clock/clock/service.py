"""Clock render loop."""

import curses
import time
from enum import Enum
from typing import Callable, Optional

from term_clock.clock.analog import AnalogRenderer
from term_clock.clock.digital import DigitalRenderer
from term_clock.clock.errors import SurfaceTooSmall
from term_clock.clock.geometry import Style
from term_clock.clock.menu import QUIT_KEYS, run_menu
from term_clock.clock.renderer import ClockMode, Renderer
from term_clock.clock.resize import LayoutState, ResizeCoordinator
from term_clock.clock.sampler import TimeSampler
from term_clock.clock.surface import Surface
from term_clock.config.settings import Settings
from term_clock.logging.config import get_logger

logger = get_logger(__name__)

TOO_SMALL_MESSAGE = "Terminal too small"


class TickResult(str, Enum):
    CONTINUE = "continue"
    QUIT = "quit"
    SWITCH_ANALOG = "switch_analog"
    SWITCH_DIGITAL = "switch_digital"


SWITCH_TARGETS = {
    TickResult.SWITCH_ANALOG: ClockMode.ANALOG,
    TickResult.SWITCH_DIGITAL: ClockMode.DIGITAL,
}


class ClockService:
    """
    Drives one display mode.

    Each tick draws one complete frame and then polls a single key without
    blocking. Quitting is only checked between frames, so a frame is never
    left half erased.
    """

    def __init__(
        self,
        surface: Surface,
        renderer: Renderer,
        sampler=None,
        coordinator: Optional[ResizeCoordinator] = None,
        tick_interval: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.surface = surface
        self.renderer = renderer
        self.sampler = sampler or TimeSampler()
        self.coordinator = coordinator or ResizeCoordinator()
        self.tick_interval = tick_interval
        self._sleep = sleep

    def run(self) -> TickResult:
        """Tick until the user quits or switches mode."""
        logger.info(f"{self.renderer.mode.value.capitalize()} clock started")
        try:
            while True:
                result = self.tick()
                if result is not TickResult.CONTINUE:
                    logger.info(f"{self.renderer.mode.value.capitalize()} clock stopped: {result.value}")
                    return result
                self._sleep(self.tick_interval)
        except KeyboardInterrupt:
            logger.info("Clock stopped by user")
            return TickResult.QUIT

    def tick(self) -> TickResult:
        """Render one frame and handle at most one key."""
        self._detect_resize()

        relayout = self.coordinator.consume()
        if relayout:
            self._relayout()

        if self.coordinator.state is not LayoutState.TOO_SMALL:
            self.renderer.draw_frame(self.sampler.sample())
            if relayout:
                self.coordinator.settle()

        self.surface.refresh()
        return self._handle_key(self.surface.read_key())

    def _detect_resize(self) -> None:
        # Backends without resize signals still change size between frames
        grid = self.surface.size()
        state = self.coordinator.state
        if state is LayoutState.STABLE and grid != self.renderer.layout_grid:
            self.coordinator.notify()
        elif state is LayoutState.TOO_SMALL and grid != self.coordinator.degraded_grid:
            self.coordinator.notify()

    def _relayout(self) -> None:
        self.surface.sync_size()
        grid = self.surface.size()
        self.surface.clear()
        self.renderer.invalidate()
        try:
            self.renderer.relayout(grid)
        except SurfaceTooSmall as e:
            logger.debug(str(e))
            self.coordinator.degrade(grid)
            self.surface.write_centered(grid.rows // 2, TOO_SMALL_MESSAGE, Style.TEXT)
            return
        self.renderer.draw_static()
        logger.debug(f"Relayout for {grid.rows}x{grid.cols}")

    def _handle_key(self, key: Optional[int]) -> TickResult:
        if key is None:
            return TickResult.CONTINUE
        if key in QUIT_KEYS:
            return TickResult.QUIT
        if key == curses.KEY_RESIZE:
            self.coordinator.notify()
            return TickResult.CONTINUE
        # Degraded: only quit and resize are handled
        if self.coordinator.state is LayoutState.TOO_SMALL:
            return TickResult.CONTINUE
        if key == curses.KEY_UP and self.renderer.mode is not ClockMode.ANALOG:
            return TickResult.SWITCH_ANALOG
        if key == curses.KEY_DOWN and self.renderer.mode is not ClockMode.DIGITAL:
            return TickResult.SWITCH_DIGITAL
        return TickResult.CONTINUE


def build_renderer(mode: ClockMode, surface: Surface, settings: Optional[Settings] = None) -> Renderer:
    """Fresh renderer for ``mode``; switching modes never reuses state."""
    if mode is ClockMode.ANALOG:
        if settings is None:
            return AnalogRenderer(surface)
        return AnalogRenderer(surface, ratio=settings.aspect_ratio, show_readout=settings.show_readout)
    return DigitalRenderer(surface)


def run_session(
    surface: Surface,
    settings: Settings,
    mode: Optional[ClockMode] = None,
    sampler=None,
    coordinator: Optional[ResizeCoordinator] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Run the menu (when no mode is given) and then clocks until the user quits.

    Raises:
        ClockUnavailable: the system time cannot be read
    """
    sampler = sampler or TimeSampler()
    resize = coordinator or ResizeCoordinator()
    with resize:
        if mode is None:
            mode = run_menu(surface, resize)
        while mode is not None:
            renderer = build_renderer(mode, surface, settings)
            resize.notify()
            service = ClockService(
                surface,
                renderer,
                sampler=sampler,
                coordinator=resize,
                tick_interval=settings.tick_interval,
                sleep=sleep,
            )
            result = service.run()
            mode = SWITCH_TARGETS.get(result)
            if mode is not None:
                logger.info(f"Switching to {mode.value} mode")
