"""Wall-clock sampling."""

import math
import time
from dataclasses import dataclass
from typing import Callable, Tuple

from term_clock.clock.errors import ClockUnavailable
from term_clock.clock.geometry import angle_for


@dataclass(frozen=True)
class TimeSample:
    """
    One reading of the local time, decomposed for the clock hands.

    ``minute`` carries the seconds and ``hour`` carries the minutes, so hands
    driven by these values sweep continuously instead of stepping.
    """

    hour: float
    minute: float
    second: float
    wall_hour: int

    @classmethod
    def from_wall(cls, hour24: int, minute: int, second: int, fraction: float = 0.0) -> "TimeSample":
        """Build a sample from local clock fields plus a sub-second fraction."""
        sec = second + fraction
        mins = minute + sec / 60.0
        hours = (hour24 % 12) + mins / 60.0
        return cls(hour=hours, minute=mins, second=sec, wall_hour=hour24)

    @property
    def hours(self) -> int:
        return self.wall_hour

    @property
    def minutes(self) -> int:
        return int(self.minute)

    @property
    def seconds(self) -> int:
        return int(self.second)

    @property
    def fields(self) -> Tuple[int, int, int]:
        """Whole (hours, minutes, seconds) as shown on the digital display."""
        return (self.hours, self.minutes, self.seconds)

    @property
    def digits(self) -> Tuple[int, ...]:
        """The six displayed digits, HHMMSS."""
        return tuple(d for value in self.fields for d in divmod(value, 10))

    @property
    def hhmmss(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"


def parse_wall_time(text: str) -> TimeSample:
    """Parse ``HH:MM`` or ``HH:MM:SS`` (24-hour) into a sample."""
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Time must be in HH:MM[:SS] format, got {text!r}")
    try:
        values = [int(part) for part in parts]
    except ValueError as e:
        raise ValueError(f"Invalid time format: {text!r}") from e
    if len(values) == 2:
        values.append(0)
    hour, minute, second = values
    if not (0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise ValueError(f"Invalid time values: {text!r}")
    return TimeSample.from_wall(hour, minute, second)


class TimeSampler:
    """Samples the system real-time clock in the local time zone."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def sample(self) -> TimeSample:
        """
        Read the current local time.

        Raises:
            ClockUnavailable: the system clock cannot be read or converted
        """
        try:
            now = self._clock()
            fraction, whole = math.modf(now)
            local = time.localtime(whole)
        except (OSError, OverflowError, ValueError) as e:
            raise ClockUnavailable(f"Cannot read system time: {e}") from e
        # tm_sec can be 60 on a leap second
        second = min(local.tm_sec, 59)
        return TimeSample.from_wall(local.tm_hour, local.tm_min, second, fraction)


class FixedSampler:
    """Always returns the same sample. Used for snapshots."""

    def __init__(self, sample: TimeSample):
        self._sample = sample

    def sample(self) -> TimeSample:
        return self._sample


def hand_angles(sample: TimeSample) -> Tuple[float, float, float]:
    """Return (hour, minute, second) hand angles in radians, 12 o'clock at -pi/2."""
    return (
        angle_for(sample.hour, 12.0),
        angle_for(sample.minute, 60.0),
        angle_for(sample.second, 60.0),
    )
