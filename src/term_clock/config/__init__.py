"""Configuration for term-clock."""

from term_clock.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
