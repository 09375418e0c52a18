"""PlaybackSession: owns the animation state of one viewer.

A session is created per open viewer and handed explicitly to the pieces
that need it (driver, controls, renderer, window).  Nothing about playback
is global.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from playbook_viewer.playback.actions import (
    LoadPlay,
    Pause,
    Play,
    Reset,
    Seek,
    SetSpeed,
    Stop,
    ToggleGhostTrail,
    ToggleLoop,
)
from playbook_viewer.playback.reducer import reduce
from playbook_viewer.playback.state import EXECUTION, AnimationState
from playbook_viewer.timing.models import SPEED_OPTIONS, LoadPlayPayload

Listener = Callable[[AnimationState], None]


class PlaybackSession:
    """State holder around :func:`~playbook_viewer.playback.reducer.reduce`.

    :meth:`dispatch` is serialised with a re-entrant lock so a background
    frame scheduler and a UI thread can share one session; listeners run
    under the same lock, after the new state is installed, and may dispatch
    further actions.

    Parameters
    ----------
    initial:
        Starting state; defaults to an empty :class:`AnimationState`.
    """

    def __init__(self, initial: AnimationState | None = None) -> None:
        self._state = initial or AnimationState()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def lock(self) -> threading.RLock:
        """Hold to read the state and dispatch against it atomically."""
        return self._lock

    def dispatch(self, action: object) -> AnimationState:
        """Apply *action*, notify listeners, and return the new state."""
        with self._lock:
            self._state = reduce(self._state, action)
            state = self._state
            for listener in list(self._listeners):
                listener(state)
        return state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def load_play(self, payload: LoadPlayPayload) -> AnimationState:
        return self.dispatch(LoadPlay(payload))

    def play(self) -> AnimationState:
        return self.dispatch(Play())

    def pause(self) -> AnimationState:
        return self.dispatch(Pause())

    def toggle_play(self) -> AnimationState:
        return self.pause() if self._state.is_playing else self.play()

    def stop(self) -> AnimationState:
        return self.dispatch(Stop())

    def seek(self, progress: float) -> AnimationState:
        return self.dispatch(Seek(progress))

    def set_speed(self, speed: float) -> AnimationState:
        """Change playback speed.

        Raises:
            ValueError: If *speed* is not one of ``SPEED_OPTIONS``.
        """
        if speed not in SPEED_OPTIONS:
            raise ValueError(
                f"Unsupported playback speed {speed!r}; expected one of {SPEED_OPTIONS}"
            )
        return self.dispatch(SetSpeed(float(speed)))

    def reset(self) -> AnimationState:
        return self.dispatch(Reset())

    def toggle_ghost_trail(self) -> AnimationState:
        return self.dispatch(ToggleGhostTrail())

    def toggle_loop(self) -> AnimationState:
        return self.dispatch(ToggleLoop())

    # ------------------------------------------------------------------
    # Read-outs
    # ------------------------------------------------------------------

    @property
    def is_animating(self) -> bool:
        return self._state.is_playing and self._state.phase == EXECUTION

    @property
    def progress_percent(self) -> float:
        """Elapsed share of the timeline, 0–100."""
        return self._state.progress * 100.0

    @property
    def formatted_time(self) -> str:
        """Current time in seconds, e.g. ``'1.5s'``."""
        return f"{self._state.current_time / 1000:.1f}s"

    @property
    def formatted_duration(self) -> str:
        return f"{self._state.total_duration / 1000:.1f}s"
