"""Frame rendering: turns an :class:`AnimationState` into display data."""

from __future__ import annotations

import math

from playbook_viewer.geometry.bezier import direction_to_angle, end_direction, point_on_segment
from playbook_viewer.geometry.models import Coordinate
from playbook_viewer.playback.state import AnimationState
from playbook_viewer.playbook.models import Drawing, PlayContent
from playbook_viewer.timing.models import GHOST_MOVEMENT_THRESHOLD
from playbook_viewer.timing.route import direction_along_route, path_points

_DEFAULT_COLOR = "#3b82f6"

ARROW_LENGTH_MULTIPLIER = 3.5
TSHAPE_LENGTH_MULTIPLIER = 2.5
ARROW_HALF_ANGLE = math.pi / 6
"""Angle between each arrow barb and the path, radians."""

LINE_END_KINDS = ("arrow", "tShape")


def format_time(ms: float) -> str:
    """Format milliseconds as seconds with one decimal.

    Examples
    --------
    >>> format_time(1500)
    '1.5s'
    >>> format_time(0)
    '0.0s'
    """
    return f"{ms / 1000:.1f}s"


def has_moved(start_x: float, start_y: float, x: float, y: float) -> bool:
    """True once a player has left its alignment by more than the ghost threshold."""
    return (
        abs(x - start_x) > GHOST_MOVEMENT_THRESHOLD
        or abs(y - start_y) > GHOST_MOVEMENT_THRESHOLD
    )


def line_end_strokes(
    kind: str, x: float, y: float, angle: float, stroke_width: float
) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Strokes of an arrow or T line ending at ``(x, y)`` facing *angle*.

    Sizes scale with *stroke_width*, so call this in the coordinate space the
    strokes are drawn in.  Unknown kinds produce no strokes.
    """
    if kind == "arrow":
        length = stroke_width * ARROW_LENGTH_MULTIPLIER
        return [
            ((x, y), (x - length * math.cos(angle + side), y - length * math.sin(angle + side)))
            for side in (-ARROW_HALF_ANGLE, ARROW_HALF_ANGLE)
        ]
    if kind == "tShape":
        length = stroke_width * TSHAPE_LENGTH_MULTIPLIER
        perp = angle + math.pi / 2
        dx, dy = length * math.cos(perp), length * math.sin(perp)
        return [((x - dx, y - dy), (x + dx, y + dy))]
    return []


def line_end(kind: str, segments: list[tuple[str, list[Coordinate]]]) -> dict | None:
    """Placement of a line ending after the last drawable segment.

    Returns ``{"kind", "x", "y", "angle"}`` in field coordinates, or None
    when *kind* is not an ending or the path has no direction at its end.
    """
    if kind not in LINE_END_KINDS:
        return None
    for segment_type, points in reversed(segments):
        if len(points) < 2:
            continue
        direction = end_direction(segment_type, points)
        if direction is None:
            return None
        end = point_on_segment(segment_type, points, 1.0)
        return {"kind": kind, "x": end.x, "y": end.y, "angle": direction_to_angle(direction)}
    return None


class FrameRenderer:
    """Formats playback state for a viewer.

    Holds the static parts of a play (player labels and colours, drawing
    styles); everything time-dependent comes from the state passed to
    :meth:`render`.  Pure, so it is safe to call from any thread.

    Parameters
    ----------
    play:
        The play being shown, or ``None`` for an empty field.
    """

    def __init__(self, play: PlayContent | None = None) -> None:
        self.set_play(play)

    def set_play(self, play: PlayContent | None) -> None:
        self._play = play
        self._players = {p.id: p for p in play.players} if play else {}
        self._drawings: dict[str, Drawing] = {d.id: d for d in play.drawings} if play else {}

    def render(self, state: AnimationState) -> dict:
        """Return a display-ready dict for *state*.

        Returns
        -------
        dict with keys:
            ``time``              formatted current time (e.g. ``'1.5s'``)
            ``duration``          formatted total duration
            ``progress_percent``  float 0 to 100
            ``phase``             playback phase
            ``is_playing``        bool
            ``speed``             playback speed multiplier
            ``players``           one marker dict per player
            ``ghosts``            start-position markers of players that moved
            ``routes``            per-route reveal data
            ``decorations``       drawings with no linked player
        """
        return {
            "time": format_time(state.current_time),
            "duration": format_time(state.total_duration),
            "progress_percent": state.progress * 100.0,
            "phase": state.phase,
            "is_playing": state.is_playing,
            "speed": state.playback_speed,
            "players": self._players_frame(state),
            "ghosts": self._ghosts_frame(state) if state.show_ghost_trail else [],
            "routes": self._routes_frame(state),
            "decorations": self._decorations(),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _players_frame(self, state: AnimationState) -> list[dict]:
        frame = []
        for ps in state.player_states:
            info = self._players.get(ps.player_id)
            route = state.route_timings.get(ps.route_id) if ps.route_id else None
            heading = (
                direction_to_angle(direction_along_route(route, state.current_time))
                if route is not None and route.segments
                else math.pi / 2
            )
            frame.append(
                {
                    "player_id": ps.player_id,
                    "x": ps.current_position.x,
                    "y": ps.current_position.y,
                    "label": info.label if info else "",
                    "color": info.color if info else _DEFAULT_COLOR,
                    "progress": ps.progress,
                    "heading": heading,
                }
            )
        return frame

    def _ghosts_frame(self, state: AnimationState) -> list[dict]:
        ghosts = []
        for ps in state.player_states:
            start, now = ps.start_position, ps.current_position
            if not has_moved(start.x, start.y, now.x, now.y):
                continue
            info = self._players.get(ps.player_id)
            ghosts.append(
                {
                    "player_id": ps.player_id,
                    "x": start.x,
                    "y": start.y,
                    "label": info.label if info else "",
                    "color": info.color if info else _DEFAULT_COLOR,
                }
            )
        return ghosts

    def _routes_frame(self, state: AnimationState) -> list[dict]:
        routes = []
        by_route = {ps.route_id: ps for ps in state.player_states if ps.route_id}
        for drawing_id, timing in state.route_timings.items():
            ps = by_route.get(drawing_id)
            progress = ps.progress if ps else 0.0
            drawing = self._drawings.get(drawing_id)
            routes.append(
                {
                    "drawing_id": drawing_id,
                    "player_id": timing.player_id,
                    "path_length": timing.total_length,
                    "dash_offset": timing.total_length * (1.0 - progress),
                    "progress": progress,
                    "points": [
                        (p.x, p.y) for seg in timing.segments for p in seg.points
                    ],
                    "color": drawing.style.color if drawing else _DEFAULT_COLOR,
                    "stroke_width": drawing.style.stroke_width if drawing else 2.0,
                    "line_end": (
                        line_end(
                            drawing.style.line_end,
                            [(seg.type, seg.points) for seg in timing.segments],
                        )
                        if drawing
                        else None
                    ),
                }
            )
        return routes

    def _decorations(self) -> list[dict]:
        decorations = []
        for d in self._drawings.values():
            if d.player_id is not None:
                continue
            points = path_points(d)
            edges = [("line", [a, b]) for a, b in zip(points, points[1:])]
            decorations.append(
                {
                    "drawing_id": d.id,
                    "points": [(p.x, p.y) for p in points],
                    "color": d.style.color,
                    "stroke_width": d.style.stroke_width,
                    "line_end": line_end(d.style.line_end, edges),
                }
            )
        return decorations
