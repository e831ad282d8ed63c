"""Tests for the seven-segment renderer."""

import pytest

from term_clock.clock.digital import (
    SEGMENTS,
    DigitalRenderer,
    changed_positions,
    colon_cells,
    compute_layout,
    segment_cells,
)
from term_clock.clock.errors import SurfaceTooSmall
from term_clock.clock.geometry import GridSize, Style
from term_clock.clock.sampler import TimeSample
from term_clock.clock.surface import GridSurface


def _ready(surface):
    renderer = DigitalRenderer(surface)
    renderer.relayout(surface.size())
    renderer.draw_static()
    return renderer


def test_segment_table_covers_digits():
    assert sorted(SEGMENTS) == list(range(10))
    assert all(len(segments) == 7 for segments in SEGMENTS.values())
    assert sum(SEGMENTS[8]) == 7
    assert sum(SEGMENTS[1]) == 2


def test_layout_for_standard_terminal():
    metrics = compute_layout(GridSize(24, 80))

    assert metrics.scale == 8
    assert metrics.digit_width == 10
    assert metrics.digit_height == 19
    assert metrics.colon_spacing == 3
    assert metrics.total_width == 66
    assert (metrics.start_row, metrics.start_col) == (2, 7)
    assert [metrics.digit_col(i) for i in range(6)] == [7, 17, 30, 40, 53, 63]
    assert metrics.colon_cols() == (28, 51)


def test_layout_is_idempotent():
    grid = GridSize(31, 97)
    assert compute_layout(grid) == compute_layout(grid)


def test_smallest_layout():
    metrics = compute_layout(GridSize(5, 22))

    assert metrics.scale == 1
    assert metrics.colon_spacing == 2
    assert metrics.total_width == 22


@pytest.mark.parametrize("rows,cols", [(4, 80), (24, 21)])
def test_too_small(rows, cols):
    with pytest.raises(SurfaceTooSmall):
        compute_layout(GridSize(rows, cols))


def test_segment_cells_for_eight():
    cells = segment_cells(0, 0, 8, 1)

    assert len(cells) == 7
    assert {c.position for c in cells} == {(0, 1), (2, 1), (4, 1), (1, 0), (1, 2), (3, 0), (3, 2)}
    assert all(c.style is Style.DIGIT for c in cells)


def test_segment_cells_for_one():
    cells = segment_cells(0, 0, 1, 2)
    assert {c.position for c in cells} == {(1, 3), (2, 3), (4, 3), (5, 3)}


def test_colon_cells():
    metrics = compute_layout(GridSize(24, 80))
    positions = {c.position for c in colon_cells(metrics)}
    assert positions == {(6, 28), (16, 28), (6, 51), (16, 51)}


def test_first_frame_redraws_everything():
    assert changed_positions(None, (12, 0, 0)) == [0, 1, 2, 3, 4, 5]


def test_rollover_redraws_all_six_digits():
    assert changed_positions((11, 59, 59), (12, 0, 0)) == [0, 1, 2, 3, 4, 5]


def test_only_changed_field_is_redrawn():
    assert changed_positions((12, 0, 0), (12, 0, 1)) == [4, 5]
    assert changed_positions((12, 0, 59), (12, 1, 0)) == [2, 3, 4, 5]
    assert changed_positions((12, 0, 0), (12, 0, 0)) == []


def test_unchanged_digits_are_not_repainted(surface):
    renderer = _ready(surface)
    renderer.draw_frame(TimeSample.from_wall(12, 0, 0))
    hours = renderer.tracker.previous(0)
    minutes = renderer.tracker.previous(2)
    seconds = renderer.tracker.previous(5)

    renderer.draw_frame(TimeSample.from_wall(12, 0, 1))

    assert renderer.tracker.previous(0) is hours
    assert renderer.tracker.previous(2) is minutes
    assert renderer.tracker.previous(5) is not seconds


def test_rollover_frame_matches_fresh_render(surface):
    renderer = _ready(surface)
    renderer.draw_frame(TimeSample.from_wall(11, 59, 59))
    renderer.draw_frame(TimeSample.from_wall(12, 0, 0))

    fresh = GridSurface(24, 80)
    _ready(fresh).draw_frame(TimeSample.from_wall(12, 0, 0))

    assert surface.lines() == fresh.lines()


def test_screen_matches_tracker(surface):
    renderer = _ready(surface)
    metrics = renderer.metrics
    for second in range(0, 60, 7):
        renderer.draw_frame(TimeSample.from_wall(9, 41, second))
        expected = {c.position for c in colon_cells(metrics)}
        expected.update(renderer.tracker.painted_cells())
        assert set(surface.painted_cells()) == expected


def test_relayout_forgets_previous_sample(surface):
    renderer = _ready(surface)
    renderer.draw_frame(TimeSample.from_wall(12, 0, 0))

    renderer.relayout(surface.size())

    assert renderer.previous is None
