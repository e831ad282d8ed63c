"""Settings and configuration management using Pydantic."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


class Settings(BaseSettings):
    """term-clock configuration settings, read from TERMCLOCK_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="TERMCLOCK_",
        case_sensitive=False,
    )

    # Rendering
    tick_interval: float = Field(
        default=0.2,
        ge=0.05,
        le=5.0,
        description="Seconds to sleep between frames",
    )
    aspect_ratio: float = Field(
        default=2.0,
        ge=1.0,
        le=4.0,
        description="Terminal cell height divided by cell width",
    )
    default_mode: Literal["menu", "analog", "digital"] = Field(
        default="menu",
        description="Display mode used when no subcommand is given",
    )
    show_readout: bool = Field(
        default=True,
        description="Print HH:MM:SS under the analog face",
    )

    # Colors
    face_color: str = Field(default="cyan", description="Clock face border color")
    hand_color: str = Field(default="yellow", description="Clock hand color")
    mark_color: str = Field(default="white", description="Hour label and pivot color")
    digit_color: str = Field(default="cyan", description="Seven-segment digit color")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path; the terminal is busy while the clock runs",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    @field_validator("face_color", "hand_color", "mark_color", "digit_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate that the color is one of the eight curses colors."""
        name = v.strip().lower()
        if name not in COLOR_NAMES:
            raise ValueError(f"Unknown color {v!r}, expected one of {', '.join(COLOR_NAMES)}")
        return name

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Expand environment variables and user paths."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            v = os.path.expandvars(os.path.expanduser(v))
        return Path(v)

    def palette(self) -> dict[str, str]:
        """Color name for each styled element."""
        return {
            "face": self.face_color,
            "hand": self.hand_color,
            "mark": self.mark_color,
            "digit": self.digit_color,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    return settings
