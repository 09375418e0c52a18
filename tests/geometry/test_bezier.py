"""Tests for Bezier interpolation, arc length and direction helpers."""

from __future__ import annotations

import math

import pytest

from playbook_viewer.geometry.bezier import (
    calculate_progress,
    cubic_length,
    curve_length,
    direction_at,
    direction_to_angle,
    end_direction,
    interpolate_cubic,
    interpolate_line,
    interpolate_quadratic,
    line_length,
    point_on_segment,
    quadratic_length,
    time_from_progress,
)
from playbook_viewer.geometry.models import Coordinate


def _c(x: float, y: float) -> Coordinate:
    return Coordinate(x, y)


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


def test_line_midpoint():
    p = interpolate_line(_c(0, 0), _c(10, 20), 0.5)
    assert p == _c(5, 10)


def test_line_clamps_parameter():
    assert interpolate_line(_c(0, 0), _c(10, 0), -1.0) == _c(0, 0)
    assert interpolate_line(_c(0, 0), _c(10, 0), 2.0) == _c(10, 0)


def test_quadratic_endpoints_and_midpoint():
    p0, p1, p2 = _c(0, 0), _c(5, 10), _c(10, 0)
    assert interpolate_quadratic(p0, p1, p2, 0.0) == p0
    assert interpolate_quadratic(p0, p1, p2, 1.0) == p2
    mid = interpolate_quadratic(p0, p1, p2, 0.5)
    assert mid.x == pytest.approx(5.0)
    assert mid.y == pytest.approx(5.0)


def test_cubic_endpoints_exact():
    p0, p1, p2, p3 = _c(0, 0), _c(0, 10), _c(10, 10), _c(10, 0)
    assert interpolate_cubic(p0, p1, p2, p3, 0.0) == p0
    assert interpolate_cubic(p0, p1, p2, p3, 1.0) == p3


def test_cubic_midpoint():
    mid = interpolate_cubic(_c(0, 0), _c(0, 10), _c(10, 10), _c(10, 0), 0.5)
    assert mid.x == pytest.approx(5.0)
    assert mid.y == pytest.approx(7.5)


def test_point_on_segment_dispatches_by_type():
    pts = [_c(0, 0), _c(5, 10), _c(10, 0)]
    assert point_on_segment("quadratic", pts, 0.5) == interpolate_quadratic(*pts, 0.5)
    assert point_on_segment("line", pts, 0.5) == _c(2.5, 5)


def test_point_on_segment_repeats_missing_points():
    # P2 and P3 repeat P1: (0,0) (10,0) (10,0) (10,0)
    p = point_on_segment("cubic", [_c(0, 0), _c(10, 0)], 0.5)
    assert p.x == pytest.approx(8.75)
    assert p.y == pytest.approx(0.0)


def test_point_on_segment_unknown_type_stays_on_first_point():
    assert point_on_segment("spline", [_c(3, 4), _c(10, 0)], 0.7) == _c(3, 4)


def test_point_on_segment_empty_is_origin():
    assert point_on_segment("line", [], 0.5) == _c(0, 0)


# ---------------------------------------------------------------------------
# Arc length
# ---------------------------------------------------------------------------


def test_line_length_is_exact():
    assert line_length(_c(0, 0), _c(3, 4)) == pytest.approx(5.0)


def test_quadratic_length_of_collinear_control_is_chord():
    assert quadratic_length(_c(0, 0), _c(5, 0), _c(10, 0)) == pytest.approx(10.0)


def test_cubic_length_bounded_by_chord_and_polygon():
    p0, p1, p2, p3 = _c(0, 0), _c(0, 10), _c(10, 10), _c(10, 0)
    length = cubic_length(p0, p1, p2, p3)
    assert 10.0 < length < 30.0


def test_cubic_length_converges_with_more_samples():
    pts = (_c(0, 0), _c(0, 10), _c(10, 10), _c(10, 0))
    coarse = cubic_length(*pts, samples=50)
    fine = cubic_length(*pts, samples=400)
    assert coarse <= fine
    assert fine - coarse < 0.05


@pytest.mark.parametrize(
    "segment_type, points",
    [
        ("line", [_c(0, 0)]),
        ("quadratic", [_c(0, 0), _c(1, 1)]),
        ("cubic", [_c(0, 0), _c(1, 1), _c(2, 2)]),
        ("arc", [_c(0, 0), _c(1, 1), _c(2, 2), _c(3, 3)]),
    ],
)
def test_curve_length_zero_for_insufficient_points_or_unknown_type(segment_type, points):
    assert curve_length(segment_type, points) == 0.0


def test_curve_length_line_uses_first_two_points():
    assert curve_length("line", [_c(0, 0), _c(0, 30), _c(100, 100)]) == pytest.approx(30.0)


# ---------------------------------------------------------------------------
# Progress and direction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (0.0, 1000.0, 0.0),
        (500.0, 1000.0, 0.5),
        (1500.0, 1000.0, 1.0),
        (-10.0, 1000.0, 0.0),
        (100.0, 0.0, 0.0),
        (100.0, -5.0, 0.0),
    ],
)
def test_calculate_progress(current, total, expected):
    assert calculate_progress(current, total) == pytest.approx(expected)


def test_time_from_progress_clamps():
    assert time_from_progress(0.25, 2000.0) == pytest.approx(500.0)
    assert time_from_progress(1.5, 2000.0) == pytest.approx(2000.0)
    assert time_from_progress(-0.5, 2000.0) == 0.0


def test_direction_of_horizontal_line():
    d = direction_at("line", [_c(0, 0), _c(10, 0)], 0.5)
    assert d.x == pytest.approx(1.0)
    assert d.y == pytest.approx(0.0)


def test_direction_is_unit_length():
    d = direction_at("quadratic", [_c(0, 0), _c(5, 10), _c(10, 0)], 0.3)
    assert math.hypot(d.x, d.y) == pytest.approx(1.0)


def test_direction_degenerate_segment_faces_up():
    assert direction_at("line", [_c(4, 4), _c(4, 4)], 0.5) == _c(0.0, 1.0)


def test_direction_to_angle():
    assert direction_to_angle(_c(1, 0)) == pytest.approx(0.0)
    assert direction_to_angle(_c(0, 1)) == pytest.approx(math.pi / 2)


def test_end_direction_of_line():
    direction = end_direction("line", [_c(0, 0), _c(3, 4)])
    assert (direction.x, direction.y) == pytest.approx((0.6, 0.8))


def test_end_direction_degenerate():
    assert end_direction("cubic", [_c(2, 2)] * 4) is None
    assert end_direction("spiral", [_c(0, 0), _c(5, 5)]) is None
