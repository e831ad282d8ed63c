"""Tests for the geometry engine."""

import math

import pytest

from term_clock.clock.geometry import (
    BACKWARD_DIAGONAL,
    FORWARD_DIAGONAL,
    VERTICAL,
    CellPoint,
    GridSize,
    Style,
    angle_for,
    cell_distance,
    face_border,
    face_marks,
    hand_glyph,
    hand_path,
    round_half_away,
)
from term_clock.clock.sampler import TimeSample, hand_angles

BIG = GridSize(101, 201)
CENTER = (50, 100)


@pytest.mark.parametrize(
    "value,expected",
    [(2.5, 3), (-2.5, -3), (2.4, 2), (-2.4, -2), (0.5, 1), (-0.4, 0), (3.0, 3)],
)
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


def test_hour_hand_at_three_points_east():
    """At 3:00:00 the hour hand angle is exactly zero."""
    hour, _, _ = hand_angles(TimeSample.from_wall(3, 0, 0))
    assert hour == pytest.approx(0.0, abs=1e-12)


def test_all_hands_point_up_at_midnight():
    assert hand_angles(TimeSample.from_wall(0, 0, 0)) == (-math.pi / 2, -math.pi / 2, -math.pi / 2)


def test_noon_matches_midnight():
    assert hand_angles(TimeSample.from_wall(12, 0, 0)) == hand_angles(TimeSample.from_wall(0, 0, 0))


def test_angle_for_half_period_points_down():
    assert angle_for(30, 60) == pytest.approx(math.pi / 2)


@pytest.mark.parametrize(
    "degrees,glyph",
    [
        (0, VERTICAL),
        (9.5, VERTICAL),
        (10.5, BACKWARD_DIAGONAL),
        (45, BACKWARD_DIAGONAL),
        (85, VERTICAL),
        (135, FORWARD_DIAGONAL),
        (180, VERTICAL),
        (225, BACKWARD_DIAGONAL),
        (275, VERTICAL),
        (315, FORWARD_DIAGONAL),
        (-90, VERTICAL),
        (-45, FORWARD_DIAGONAL),
    ],
)
def test_hand_glyph_bands(degrees, glyph):
    assert hand_glyph(math.radians(degrees)) == glyph


def test_hand_path_straight_up():
    grid = GridSize(24, 80)
    points = hand_path(-math.pi / 2, 5, (10, 20), grid)

    assert [p.position for p in points] == [(10, 20), (9, 20), (8, 20), (7, 20), (6, 20), (5, 20)]
    assert all(p.glyph == VERTICAL and p.style is Style.HAND for p in points)


def test_hand_path_east_has_no_gaps():
    """Horizontal strokes are stretched by the aspect ratio but stay contiguous."""
    grid = GridSize(24, 80)
    points = hand_path(0.0, 3, (10, 20), grid)

    assert [p.position for p in points] == [(10, col) for col in range(20, 27)]


@pytest.mark.parametrize("radius", [3, 4, 7, 12, 30])
def test_hand_path_properties(radius):
    """Starts at the center, ends near length, never moves back toward the center."""
    for step in range(72):
        angle = step * 2 * math.pi / 72
        points = hand_path(angle, radius, CENTER, BIG)

        first, last = points[0], points[-1]
        assert abs(first.row - CENTER[0]) <= 1 and abs(first.col - CENTER[1]) <= 1
        assert cell_distance(last, CENTER) <= radius + 1
        assert cell_distance(last, CENTER) >= radius - 1

        distances = [cell_distance(p, CENTER) for p in points]
        assert distances == sorted(distances)
        assert len({p.position for p in points}) == len(points)


def test_hand_path_is_clipped_at_edge():
    grid = GridSize(10, 10)
    points = hand_path(0.0, 20, (5, 5), grid)

    assert points
    assert all(grid.contains(p.row, p.col) for p in points)
    assert points[-1].col == 9


def test_hand_path_outside_grid_is_empty():
    assert hand_path(0.0, 5, (50, 50), GridSize(10, 10)) == []


def test_face_border_is_round_and_deduplicated():
    radius = 10
    center = (12, 40)
    points = face_border(center, radius, GridSize(24, 80))

    assert len({p.position for p in points}) == len(points)
    assert max(abs(p.row - center[0]) for p in points) == radius
    # Twice as many columns as rows from the center
    assert max(abs(p.col - center[1]) for p in points) == radius * 2
    assert all(p.glyph == "o" and p.style is Style.FACE for p in points)


def test_large_face_border_has_no_gaps():
    """Stretched rows near 12 and 6 o'clock stay contiguous on big faces."""
    center = (40, 100)
    points = face_border(center, 38, GridSize(80, 200))
    cells = {p.position for p in points}

    for edge_row in (2, 78):
        cols = sorted(col for row, col in cells if row == edge_row)
        assert cols == list(range(cols[0], cols[-1] + 1))

    for row, col in cells:
        neighbours = [
            (row + dr, col + dc)
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if (dr, dc) != (0, 0) and (row + dr, col + dc) in cells
        ]
        assert len(neighbours) >= 2


def test_face_border_clipped():
    grid = GridSize(12, 30)
    points = face_border((6, 15), 10, grid)
    assert all(grid.contains(p.row, p.col) for p in points)


def test_face_marks_positions():
    marks = dict((label, point) for point, label in face_marks((12, 40), 10, GridSize(24, 80)))

    assert list(marks) == ["12", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11"]
    # 12 - 8.5 = 3.5 rounds away from zero to row 4
    assert marks["12"].position == (4, 39)
    assert marks["3"].position == (12, 57)
    assert marks["6"].position == (21, 40)
    assert marks["12"].glyph == "1"
    assert marks["12"].style is Style.MARK


def test_face_marks_drop_labels_that_do_not_fit():
    grid = GridSize(24, 20)
    marks = face_marks((12, 10), 10, grid)
    labels = [label for _, label in marks]

    assert "12" in labels
    assert "6" in labels
    assert "3" not in labels
    assert "9" not in labels
    for point, label in marks:
        assert grid.contains(point.row, point.col + len(label) - 1)


def test_cell_distance_undoes_stretch():
    assert cell_distance(CellPoint(0, 4), (0, 0)) == 2.0
    assert cell_distance(CellPoint(3, 0), (0, 0)) == 3.0
