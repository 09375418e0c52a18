"""Route timing: turn a drawn path into a time-stamped segment list.

Algorithm (per drawing):

1. If the drawing is a ``curve``-mode path made only of ``line`` segments,
   collect its points, smooth them once with endpoint-preserving Chaikin, and
   time one ``line`` segment per consecutive pair of smoothed points.
2. Otherwise walk the literal segments in order.  A segment whose first
   point is more than ``CONTINUITY_EPSILON`` feet (on either axis) away from
   the previous segment's end gets that end prepended, so an authoring gap
   never produces a time jump.  Segments resolving to fewer than two points
   are skipped.
3. Every segment lasts ``length / speed_fps`` seconds and starts where the
   previous one ended.

Malformed input never raises: unresolvable IDs are dropped and segments that
lack points for their type time as zero length.
"""

from __future__ import annotations

from playbook_viewer.geometry.bezier import (
    curve_length,
    direction_at,
    line_length,
    point_on_segment,
)
from playbook_viewer.geometry.models import Coordinate
from playbook_viewer.geometry.smoothing import apply_chaikin
from playbook_viewer.playbook.models import Drawing
from playbook_viewer.timing.models import PLAYER_SPEED_FPS, RouteTiming, SegmentTiming

CONTINUITY_EPSILON = 0.01
"""Per-axis tolerance (feet) for treating two segment endpoints as joined."""

_ORIGIN = Coordinate(0.0, 0.0)

# ---------------------------------------------------------------------------
# Drawing helpers
# ---------------------------------------------------------------------------


def resolve_point_ids(drawing: Drawing, point_ids: list[str]) -> list[Coordinate]:
    """Map control-point IDs to coordinates, dropping IDs not in the pool."""
    return [
        Coordinate(drawing.points[pid].x, drawing.points[pid].y)
        for pid in point_ids
        if pid in drawing.points
    ]


def drawing_start_point(drawing: Drawing) -> Coordinate | None:
    """First point of the first segment, or None if it does not resolve."""
    if not drawing.segments or not drawing.segments[0].point_ids:
        return None
    point = drawing.points.get(drawing.segments[0].point_ids[0])
    return Coordinate(point.x, point.y) if point else None


def drawing_end_point(drawing: Drawing) -> Coordinate | None:
    """Last point of the last segment, or None if it does not resolve."""
    if not drawing.segments or not drawing.segments[-1].point_ids:
        return None
    point = drawing.points.get(drawing.segments[-1].point_ids[-1])
    return Coordinate(point.x, point.y) if point else None


def is_continuous(a: Coordinate, b: Coordinate) -> bool:
    return abs(a.x - b.x) < CONTINUITY_EPSILON and abs(a.y - b.y) < CONTINUITY_EPSILON


def should_smooth(drawing: Drawing) -> bool:
    """True for ``curve``-mode drawings whose segments are all lines.

    A single quadratic or cubic segment keeps the whole drawing literal.
    """
    return (
        drawing.style.path_mode == "curve"
        and bool(drawing.segments)
        and all(seg.type == "line" for seg in drawing.segments)
    )


def path_points(drawing: Drawing) -> list[Coordinate]:
    """Chain the resolved points of all segments into a single polyline.

    A segment's first point is dropped when it coincides with the previous
    segment's last point, so shared control points appear once.
    """
    chained: list[Coordinate] = []
    for segment in drawing.segments:
        points = resolve_point_ids(drawing, segment.point_ids)
        if chained and points and is_continuous(chained[-1], points[0]):
            points = points[1:]
        chained.extend(points)
    return chained


def smoothed_points(drawing: Drawing) -> list[Coordinate] | None:
    """Smoothed polyline for drawings that qualify, else None."""
    if not should_smooth(drawing):
        return None
    points = path_points(drawing)
    if len(points) < 2:
        return None
    return apply_chaikin(points)


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


class RouteTimingCalculator:
    """Compute :class:`RouteTiming` for drawings at a constant player speed.

    Args:
        speed_fps: Player speed in feet per second.

    Raises:
        ValueError: If *speed_fps* is not positive.
    """

    def __init__(self, speed_fps: float = PLAYER_SPEED_FPS) -> None:
        if speed_fps <= 0:
            raise ValueError("speed_fps must be > 0")
        self.speed_fps = speed_fps

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(self, drawing: Drawing) -> RouteTiming:
        """Return the timing of *drawing*.

        ``player_id`` is copied through unchanged; callers decide which
        drawings animate.
        """
        smoothed = smoothed_points(drawing)
        if smoothed is not None:
            segments = self._time_polyline(smoothed)
        else:
            segments = self._time_literal(drawing)

        return RouteTiming(
            drawing_id=drawing.id,
            player_id=drawing.player_id,
            total_length=sum(s.length for s in segments),
            duration=segments[-1].end_time if segments else 0.0,
            segments=segments,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _duration_ms(self, length: float) -> float:
        return length / self.speed_fps * 1000.0 if length > 0 else 0.0

    def _time_polyline(self, points: list[Coordinate]) -> list[SegmentTiming]:
        segments: list[SegmentTiming] = []
        current = 0.0
        for p0, p1 in zip(points, points[1:]):
            length = line_length(p0, p1)
            end = current + self._duration_ms(length)
            segments.append(SegmentTiming("line", length, current, end, [p0, p1]))
            current = end
        return segments

    def _time_literal(self, drawing: Drawing) -> list[SegmentTiming]:
        segments: list[SegmentTiming] = []
        current = 0.0
        prev_end: Coordinate | None = None

        for segment in drawing.segments:
            points = resolve_point_ids(drawing, segment.point_ids)
            if points and prev_end is not None and not is_continuous(points[0], prev_end):
                points = [prev_end, *points]
            if len(points) < 2:
                continue

            length = curve_length(segment.type, points)
            end = current + self._duration_ms(length)
            segments.append(SegmentTiming(segment.type, length, current, end, points))
            current = end
            prev_end = points[-1]

        return segments


# ---------------------------------------------------------------------------
# Position lookup
# ---------------------------------------------------------------------------


def position_along_segment(segment: SegmentTiming, progress: float) -> Coordinate:
    """Point on *segment* at local *progress* (clamped to ``[0, 1]``)."""
    return point_on_segment(segment.type, segment.points, progress)


def _locate(route: RouteTiming, current_time: float) -> tuple[SegmentTiming, float] | None:
    """Find the segment active at *current_time* and the local progress in it."""
    clamped = max(0.0, min(route.duration, current_time))
    for segment in route.segments:
        if segment.start_time <= clamped <= segment.end_time:
            span = segment.end_time - segment.start_time
            local = (clamped - segment.start_time) / span if span > 0 else 0.0
            return segment, local
    return None


def position_along_route(route: RouteTiming, current_time: float) -> Coordinate:
    """Interpolated position on *route* at *current_time* (ms).

    Time is clamped to ``[0, duration]``.  If no segment window contains it,
    the final point of the last segment is returned; a route without segments
    yields the origin.
    """
    if not route.segments:
        return _ORIGIN
    found = _locate(route, current_time)
    if found is not None:
        segment, local = found
        return position_along_segment(segment, local)
    last = route.segments[-1]
    return last.points[-1] if last.points else _ORIGIN


def direction_along_route(route: RouteTiming, current_time: float) -> Coordinate:
    """Unit heading of a player on *route* at *current_time*.

    Past the final window the heading of the last segment's end is used.
    """
    if not route.segments:
        return Coordinate(0.0, 1.0)
    found = _locate(route, current_time)
    if found is None:
        last = route.segments[-1]
        return direction_at(last.type, last.points, 1.0)
    segment, local = found
    return direction_at(segment.type, segment.points, local)
