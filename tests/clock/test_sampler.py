"""Tests for the time sampler."""

import time

import pytest

from term_clock.clock.errors import ClockUnavailable
from term_clock.clock.sampler import FixedSampler, TimeSample, TimeSampler, parse_wall_time


def test_from_wall_carries_fractions():
    sample = TimeSample.from_wall(23, 59, 30)

    assert sample.second == 30.0
    assert sample.minute == 59.5
    assert sample.hour == pytest.approx(11 + 59.5 / 60)
    assert sample.wall_hour == 23


def test_digital_fields():
    sample = TimeSample.from_wall(23, 59, 30, fraction=0.75)

    assert sample.fields == (23, 59, 30)
    assert sample.digits == (2, 3, 5, 9, 3, 0)
    assert sample.hhmmss == "23:59:30"


def test_sampler_reads_local_time():
    stamp = 1_700_000_000.25
    sample = TimeSampler(clock=lambda: stamp).sample()
    local = time.localtime(1_700_000_000)

    assert sample.fields == (local.tm_hour, local.tm_min, local.tm_sec)
    assert sample.second == pytest.approx(local.tm_sec + 0.25)
    assert 0 <= sample.hour < 12


def test_sampler_uses_system_clock_by_default():
    sample = TimeSampler().sample()
    assert 0 <= sample.second < 60
    assert 0 <= sample.minute < 60


def test_unreadable_clock_is_fatal():
    def broken() -> float:
        raise OSError("clock_gettime failed")

    with pytest.raises(ClockUnavailable, match="clock_gettime failed"):
        TimeSampler(clock=broken).sample()


def test_out_of_range_time_is_fatal():
    with pytest.raises(ClockUnavailable):
        TimeSampler(clock=lambda: 1e20).sample()


def test_fixed_sampler():
    sample = TimeSample.from_wall(3, 0, 0)
    assert FixedSampler(sample).sample() is sample


@pytest.mark.parametrize(
    "text,fields",
    [("03:00:00", (3, 0, 0)), ("7:05", (7, 5, 0)), (" 23:59:59 ", (23, 59, 59))],
)
def test_parse_wall_time(text, fields):
    assert parse_wall_time(text).fields == fields


@pytest.mark.parametrize("text", ["", "12", "25:00", "12:60", "ab:cd", "1:2:3:4"])
def test_parse_wall_time_rejects(text):
    with pytest.raises(ValueError):
        parse_wall_time(text)
