"""Animation timing data models and engine-wide constants."""

from __future__ import annotations

from dataclasses import dataclass, field

from playbook_viewer.geometry.models import Coordinate

PLAYER_SPEED_FPS = 15.0
"""Default player speed in feet per second."""

SNAP_COUNT_DURATION = 500.0
"""Dead time before motion starts, ms."""

ENDPOINT_HOLD_DURATION = 500.0
"""Hold at the route endpoints after the longest route finishes, ms."""

DEFAULT_SPEED = 1.0
SPEED_OPTIONS = (0.25, 0.5, 1.0, 1.5, 2.0)

GHOST_MOVEMENT_THRESHOLD = 0.5
"""Feet a player must move (on either axis) before a ghost marker is shown."""

SCRUB_STEP_PERCENT = 0.05
"""Fraction of the timeline moved by one arrow-key scrub."""


@dataclass
class SegmentTiming:
    """One timed piece of a route.

    ``end_time - start_time == length / speed_fps * 1000``.  Zero-length
    segments keep their place in the sequence with zero duration.
    """

    type: str
    """``'line'``, ``'quadratic'`` or ``'cubic'`` (unknown types pass through)."""

    length: float
    """Arc length in feet."""

    start_time: float
    """Offset from the start of the route, ms."""

    end_time: float
    """Offset from the start of the route, ms."""

    points: list[Coordinate] = field(default_factory=list)
    """Resolved coordinates used for interpolation."""

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "length": self.length,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "points": [p.to_dict() for p in self.points],
        }


@dataclass
class RouteTiming:
    """Time-stamped decomposition of one player-linked drawing."""

    drawing_id: str
    player_id: str | None
    total_length: float
    """Sum of segment lengths, feet."""

    duration: float
    """End time of the last segment, ms (0 when there are no segments)."""

    segments: list[SegmentTiming] = field(default_factory=list)

    start_offset: float = 0.0
    """Start relative to the snap, ms.  Negative for pre-snap shifts and motion."""

    @property
    def end_offset(self) -> float:
        return self.start_offset + self.duration

    def to_dict(self) -> dict:
        return {
            "drawing_id": self.drawing_id,
            "player_id": self.player_id,
            "total_length": self.total_length,
            "duration": self.duration,
            "start_offset": self.start_offset,
            "segments": [s.to_dict() for s in self.segments],
        }


@dataclass
class PlayerAnimationState:
    """Where one player is during playback."""

    player_id: str
    current_position: Coordinate
    start_position: Coordinate
    progress: float = 0.0
    """Fraction of the player's own route completed [0.0, 1.0]."""

    route_id: str | None = None
    """ID of the linked drawing; ``None`` for stationary players."""

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "current_position": self.current_position.to_dict(),
            "start_position": self.start_position.to_dict(),
            "progress": self.progress,
            "route_id": self.route_id,
        }


@dataclass
class LoadPlayPayload:
    """Everything :class:`~playbook_viewer.playback.actions.LoadPlay` installs."""

    play_id: str
    player_states: list[PlayerAnimationState]
    route_timings: dict[str, RouteTiming]
    total_duration: float

    def to_dict(self) -> dict:
        return {
            "play_id": self.play_id,
            "player_states": [p.to_dict() for p in self.player_states],
            "route_timings": {k: v.to_dict() for k, v in self.route_timings.items()},
            "total_duration": self.total_duration,
        }
