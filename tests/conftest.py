import logging

import pytest

from term_clock.clock import GridSurface
from term_clock.config.settings import Settings


@pytest.fixture
def test_settings(tmp_path):
    """Settings for tests, independent of the environment."""
    return Settings(
        tick_interval=0.2,
        log_file=tmp_path / "logs" / "test.log",
    )


@pytest.fixture
def surface():
    """A standard 24x80 terminal."""
    return GridSurface(24, 80)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams that a test may have closed."""
    yield
    logger = logging.getLogger("term_clock")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
