"""Actions understood by :func:`playbook_viewer.playback.reducer.reduce`."""

from __future__ import annotations

from dataclasses import dataclass

from playbook_viewer.timing.models import LoadPlayPayload, PlayerAnimationState


@dataclass(frozen=True)
class LoadPlay:
    """Install a new play; resets the clock but keeps viewer preferences."""

    payload: LoadPlayPayload


@dataclass(frozen=True)
class SetPhase:
    phase: str


@dataclass(frozen=True)
class Play:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Seek:
    """Jump to ``progress * total_duration``; *progress* is not clamped here."""

    progress: float


@dataclass(frozen=True)
class SetSpeed:
    speed: float


@dataclass(frozen=True)
class Tick:
    """Advance the clock by *delta_time* ms (already scaled by playback speed)."""

    delta_time: float


@dataclass(frozen=True)
class Reset:
    """Rewind in place; unlike :class:`Stop` it leaves ``is_playing`` alone."""


@dataclass(frozen=True)
class ToggleGhostTrail:
    pass


@dataclass(frozen=True)
class ToggleLoop:
    pass


@dataclass(frozen=True)
class UpdatePlayerStates:
    states: tuple[PlayerAnimationState, ...]
