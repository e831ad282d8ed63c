"""Logging setup for term-clock."""

from term_clock.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
