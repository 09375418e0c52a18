"""Line and Bezier interpolation, arc length and direction helpers.

Every function here is pure.  Curve parameters outside ``[0, 1]`` are clamped
before use so a caller can never extrapolate past the ends of a curve.
"""

from __future__ import annotations

import math

from playbook_viewer.geometry.models import Coordinate

DEFAULT_CURVE_SAMPLES = 50
"""Chord samples used for arc-length approximation in timing."""

LINE_END_SAMPLES = 20
"""Chord samples used when placing arrows / T-shapes at a path end."""

DIRECTION_EPSILON = 0.001
"""Parameter step either side of ``t`` when estimating a tangent."""

SEGMENT_TYPES = frozenset({"line", "quadratic", "cubic"})

_ORIGIN = Coordinate(0.0, 0.0)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------


def interpolate_line(p0: Coordinate, p1: Coordinate, t: float) -> Coordinate:
    """Point at *t* on the segment ``P0 → P1``: ``(1-t) P0 + t P1``.

    Exact at both ends: ``t=0`` gives *p0* and ``t=1`` gives *p1*.
    """
    t = _clamp01(t)
    u = 1.0 - t
    return Coordinate(
        x=u * p0.x + t * p1.x,
        y=u * p0.y + t * p1.y,
    )


def interpolate_quadratic(
    p0: Coordinate, p1: Coordinate, p2: Coordinate, t: float
) -> Coordinate:
    """Point at *t* on a quadratic Bezier.

    ``Q(t) = (1-t)² P0 + 2(1-t)t P1 + t² P2`` where *p1* is the control point.
    """
    t = _clamp01(t)
    u = 1.0 - t
    a = u * u
    b = 2.0 * u * t
    c = t * t
    return Coordinate(
        x=a * p0.x + b * p1.x + c * p2.x,
        y=a * p0.y + b * p1.y + c * p2.y,
    )


def interpolate_cubic(
    p0: Coordinate, p1: Coordinate, p2: Coordinate, p3: Coordinate, t: float
) -> Coordinate:
    """Point at *t* on a cubic Bezier.

    ``C(t) = (1-t)³ P0 + 3(1-t)²t P1 + 3(1-t)t² P2 + t³ P3``.
    """
    t = _clamp01(t)
    u = 1.0 - t
    a = u * u * u
    b = 3.0 * u * u * t
    c = 3.0 * u * t * t
    d = t * t * t
    return Coordinate(
        x=a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        y=a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def point_on_segment(segment_type: str, points: list[Coordinate], t: float) -> Coordinate:
    """Evaluate a segment of *segment_type* through *points* at *t*.

    Missing trailing points repeat the last available one, so a short point
    list degrades to a lower-order curve instead of failing.  An unknown type
    stays on its first point; an empty point list yields the origin.
    """
    if not points:
        return _ORIGIN
    p0 = points[0]
    p1 = points[1] if len(points) > 1 else p0
    p2 = points[2] if len(points) > 2 else p1
    p3 = points[3] if len(points) > 3 else p2

    if segment_type == "line":
        return interpolate_line(p0, p1, t)
    if segment_type == "quadratic":
        return interpolate_quadratic(p0, p1, p2, t)
    if segment_type == "cubic":
        return interpolate_cubic(p0, p1, p2, p3, t)
    return p0


# ---------------------------------------------------------------------------
# Arc length
# ---------------------------------------------------------------------------


def line_length(p0: Coordinate, p1: Coordinate) -> float:
    """Exact Euclidean distance between two points."""
    return math.hypot(p1.x - p0.x, p1.y - p0.y)


def quadratic_length(
    p0: Coordinate,
    p1: Coordinate,
    p2: Coordinate,
    samples: int = DEFAULT_CURVE_SAMPLES,
) -> float:
    """Approximate quadratic Bezier length by summing *samples* chords."""
    length = 0.0
    prev = p0
    for i in range(1, samples + 1):
        current = interpolate_quadratic(p0, p1, p2, i / samples)
        length += line_length(prev, current)
        prev = current
    return length


def cubic_length(
    p0: Coordinate,
    p1: Coordinate,
    p2: Coordinate,
    p3: Coordinate,
    samples: int = DEFAULT_CURVE_SAMPLES,
) -> float:
    """Approximate cubic Bezier length by summing *samples* chords."""
    length = 0.0
    prev = p0
    for i in range(1, samples + 1):
        current = interpolate_cubic(p0, p1, p2, p3, i / samples)
        length += line_length(prev, current)
        prev = current
    return length


def curve_length(
    segment_type: str,
    points: list[Coordinate],
    samples: int = DEFAULT_CURVE_SAMPLES,
) -> float:
    """Length of one segment given its resolved points.

    Returns 0 when the type is unknown or *points* is too short for it.
    """
    if segment_type == "line" and len(points) >= 2:
        return line_length(points[0], points[1])
    if segment_type == "quadratic" and len(points) >= 3:
        return quadratic_length(points[0], points[1], points[2], samples)
    if segment_type == "cubic" and len(points) >= 4:
        return cubic_length(points[0], points[1], points[2], points[3], samples)
    return 0.0


# ---------------------------------------------------------------------------
# Progress and direction
# ---------------------------------------------------------------------------


def calculate_progress(current_time: float, total_duration: float) -> float:
    """Fraction of *total_duration* elapsed, clamped to ``[0, 1]``.

    A non-positive duration yields 0 rather than dividing by zero.
    """
    if total_duration <= 0:
        return 0.0
    return _clamp01(current_time / total_duration)


def time_from_progress(progress: float, total_duration: float) -> float:
    """Inverse of :func:`calculate_progress` with *progress* clamped."""
    return _clamp01(progress) * total_duration


def direction_at(segment_type: str, points: list[Coordinate], progress: float) -> Coordinate:
    """Unit tangent of a segment near *progress*.

    Sampled as a central difference over ``DIRECTION_EPSILON``; a degenerate
    segment faces "up" (``(0, 1)``).
    """
    t1 = max(0.0, progress - DIRECTION_EPSILON)
    t2 = min(1.0, progress + DIRECTION_EPSILON)
    a = point_on_segment(segment_type, points, t1)
    b = point_on_segment(segment_type, points, t2)
    dx = b.x - a.x
    dy = b.y - a.y
    magnitude = math.hypot(dx, dy)
    if magnitude == 0:
        return Coordinate(0.0, 1.0)
    return Coordinate(dx / magnitude, dy / magnitude)


def end_direction(
    segment_type: str,
    points: list[Coordinate],
    samples: int = LINE_END_SAMPLES,
) -> Coordinate | None:
    """Unit direction of travel into the end of a segment.

    Curves use the last of *samples* chord steps; lines use their endpoints.
    Returns None for a degenerate segment.
    """
    if segment_type == "line":
        a = points[0] if points else _ORIGIN
    else:
        a = point_on_segment(segment_type, points, 1.0 - 1.0 / samples)
    b = point_on_segment(segment_type, points, 1.0)
    magnitude = math.hypot(b.x - a.x, b.y - a.y)
    if magnitude == 0:
        return None
    return Coordinate((b.x - a.x) / magnitude, (b.y - a.y) / magnitude)


def direction_to_angle(direction: Coordinate) -> float:
    """Heading in radians: 0 faces +x, ``pi/2`` faces +y."""
    return math.atan2(direction.y, direction.x)
