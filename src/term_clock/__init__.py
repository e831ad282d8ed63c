"""Terminal clock with analog and seven-segment displays."""

__version__ = "0.1.0"
