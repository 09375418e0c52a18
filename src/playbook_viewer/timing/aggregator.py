"""Assemble the playback payload for a whole play."""

from __future__ import annotations

import logging

from playbook_viewer.geometry.models import Coordinate
from playbook_viewer.playbook.models import Drawing, PlayContent
from playbook_viewer.timing.models import (
    ENDPOINT_HOLD_DURATION,
    PLAYER_SPEED_FPS,
    SNAP_COUNT_DURATION,
    LoadPlayPayload,
    PlayerAnimationState,
    RouteTiming,
)
from playbook_viewer.timing.route import RouteTimingCalculator, drawing_start_point

_logger = logging.getLogger(__name__)

SHIFT = "shift"
MOTION = "motion"


def max_route_duration(route_timings: dict[str, RouteTiming]) -> float:
    """Longest route duration in ms (0 for an empty map)."""
    return max((t.duration for t in route_timings.values()), default=0.0)


def pre_snap_duration(route_timings: dict[str, RouteTiming]) -> float:
    """Time before the snap taken by shifts and motion, ms (0 without them)."""
    return max((-t.start_offset for t in route_timings.values() if t.start_offset < 0), default=0.0)


def total_duration(route_timings: dict[str, RouteTiming]) -> float:
    """Full animation length in ms.

    Pre-snap span plus the latest route end after the snap, plus snap count
    and endpoint hold.  Without pre-snap drawings this is the longest route
    plus 1000 ms.
    """
    post_snap = max((t.end_offset for t in route_timings.values()), default=0.0)
    return (
        pre_snap_duration(route_timings)
        + max(post_snap, 0.0)
        + SNAP_COUNT_DURATION
        + ENDPOINT_HOLD_DURATION
    )


def has_animatable_routes(drawings: list[Drawing]) -> bool:
    """True if any drawing is linked to a player and has at least one segment."""
    return any(d.player_id and d.segments for d in drawings)


class AnimationTimingAggregator:
    """Combine per-route timings and player alignment into a :class:`LoadPlayPayload`.

    Args:
        speed_fps: Player speed in feet per second used for every route.
    """

    def __init__(self, speed_fps: float = PLAYER_SPEED_FPS) -> None:
        self._calculator = RouteTimingCalculator(speed_fps)

    @property
    def speed_fps(self) -> float:
        return self._calculator.speed_fps

    def route_timings(self, drawings: list[Drawing]) -> dict[str, RouteTiming]:
        """Timings for every player-linked drawing, keyed by drawing ID.

        Unlinked drawings are left out entirely; they never animate.  Keys
        are ordered shifts, then motions, then regular routes.  Each shift
        ends where the previous shift starts (the first one at the snap), so
        its ``start_offset`` is negative; a motion ends where the earliest
        shift starts.  Regular routes start at the snap.
        """
        shifts: list[Drawing] = []
        motions: list[Drawing] = []
        regular: list[Drawing] = []
        for drawing in drawings:
            if not drawing.player_id:
                continue
            kind = drawing.pre_snap_motion.type if drawing.pre_snap_motion else None
            if kind == SHIFT:
                shifts.append(drawing)
            elif kind == MOTION:
                motions.append(drawing)
            else:
                regular.append(drawing)

        timings = {d.id: self._calculator.calculate(d) for d in [*shifts, *motions, *regular]}

        offset = 0.0
        for drawing in shifts:
            timing = timings[drawing.id]
            timing.start_offset = offset - timing.duration
            offset = timing.start_offset
        for drawing in motions:
            timing = timings[drawing.id]
            timing.start_offset = offset - timing.duration
        return timings

    def estimate_duration(self, drawings: list[Drawing]) -> float:
        """Total animation duration in ms for *drawings*."""
        return total_duration(self.route_timings(drawings))

    def aggregate(self, play: PlayContent) -> LoadPlayPayload:
        """Build the payload for *play*.

        Each player follows the first drawing (in array order) linked to it.
        Additional drawings claiming the same player are ignored with a
        warning.
        """
        timings = self.route_timings(play.drawings)

        linked: dict[str, Drawing] = {}
        for drawing in play.drawings:
            if not drawing.player_id:
                continue
            if drawing.player_id in linked:
                _logger.warning(
                    "Play %s: player %s is linked to drawing %s; ignoring drawing %s",
                    play.id,
                    drawing.player_id,
                    linked[drawing.player_id].id,
                    drawing.id,
                )
                continue
            linked[drawing.player_id] = drawing

        player_states: list[PlayerAnimationState] = []
        for player in play.players:
            start = Coordinate(player.x, player.y)
            route_id: str | None = None
            drawing = linked.get(player.id)
            if drawing is not None:
                route_id = drawing.id
                start = drawing_start_point(drawing) or start
            player_states.append(
                PlayerAnimationState(
                    player_id=player.id,
                    current_position=start,
                    start_position=start,
                    progress=0.0,
                    route_id=route_id,
                )
            )

        payload = LoadPlayPayload(
            play_id=play.id,
            player_states=player_states,
            route_timings=timings,
            total_duration=total_duration(timings),
        )
        _logger.info(
            "Play %s: %d player(s), %d route(s), %.0f ms",
            play.id,
            len(player_states),
            len(timings),
            payload.total_duration,
        )
        return payload
