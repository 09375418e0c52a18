"""Animation state value owned by one playback session."""

from __future__ import annotations

from dataclasses import dataclass, field

from playbook_viewer.timing.models import DEFAULT_SPEED, PlayerAnimationState, RouteTiming

READY = "ready"
SNAP_COUNT = "snapCount"
EXECUTION = "execution"
COMPLETE = "complete"

PHASES = frozenset({READY, SNAP_COUNT, EXECUTION, COMPLETE})


@dataclass
class AnimationState:
    """Complete playback state of one viewer.

    Treated as immutable: the reducer always returns a new instance.  After
    every transition ``0 <= current_time <= total_duration`` holds for
    in-range seeks, and only the ``execution`` phase advances automatically.
    """

    phase: str = READY
    """``'ready'``, ``'snapCount'``, ``'execution'`` or ``'complete'``."""

    is_playing: bool = False
    current_time: float = 0.0
    """ms since the start of the animation."""

    total_duration: float = 0.0
    """ms for the full animation, including snap count and endpoint hold."""

    playback_speed: float = DEFAULT_SPEED

    play_id: str | None = None
    player_states: list[PlayerAnimationState] = field(default_factory=list)

    show_ghost_trail: bool = False
    loop_mode: bool = False

    route_timings: dict[str, RouteTiming] = field(default_factory=dict)
    """Keyed by drawing ID."""

    @property
    def progress(self) -> float:
        """Fraction of the timeline elapsed, capped at 1 (0 with no duration)."""
        if self.total_duration <= 0:
            return 0.0
        return min(1.0, self.current_time / self.total_duration)
