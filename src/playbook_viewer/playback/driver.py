"""PlaybackDriver: turns wall-clock frames into ``Tick`` actions."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable

from playbook_viewer.playback.actions import Pause, Play, Reset, Tick
from playbook_viewer.playback.scheduler import FrameScheduler
from playbook_viewer.playback.session import PlaybackSession
from playbook_viewer.playback.state import EXECUTION, AnimationState

_logger = logging.getLogger(__name__)


class PlaybackDriver:
    """Runs the frame loop for one :class:`PlaybackSession`.

    The loop runs only while the session is playing in the ``execution``
    phase.  Each frame dispatches ``Tick((now - last) * playback_speed)``;
    the first frame after any (re)start uses a fresh baseline so a pause
    never turns into one large catch-up tick.  When a tick reaches the end
    the loop either restarts (loop mode: ``Reset`` then ``Play``) or stops and
    calls *on_complete* once.

    Parameters
    ----------
    session:
        The session to drive.
    scheduler:
        A :class:`~playbook_viewer.playback.scheduler.FrameScheduler`.
    on_complete:
        Called (outside the session lock) when playback finishes without
        looping.
    """

    def __init__(
        self,
        session: PlaybackSession,
        scheduler: FrameScheduler,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._session = session
        self._scheduler = scheduler
        self._on_complete = on_complete
        self._handle: object | None = None
        self._generation = 0
        self._last_timestamp: float | None = None
        self._loop_key: tuple | None = None
        self._in_frame = False
        with session.lock:
            self._unsubscribe = session.subscribe(self._on_state_change)
            self._sync(session.state)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        """True while a frame is scheduled."""
        return self._handle is not None

    def handle_visibility_change(self, hidden: bool) -> None:
        """Pause when the viewer is hidden so it does not catch up on return."""
        with self._session.lock:
            if hidden and self._session.state.is_playing:
                self._session.dispatch(Pause())

    def close(self) -> None:
        """Cancel any pending frame and detach from the session."""
        with self._session.lock:
            self._cancel()
            self._unsubscribe()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _should_run(state: AnimationState) -> bool:
        return state.is_playing and state.phase == EXECUTION

    @staticmethod
    def _key(state: AnimationState) -> tuple:
        # A change to any of these restarts the loop from a fresh baseline.
        return (state.playback_speed, state.loop_mode, state.total_duration, state.play_id)

    def _on_state_change(self, state: AnimationState) -> None:
        if self._in_frame:
            return
        self._sync(state)

    def _sync(self, state: AnimationState) -> None:
        if not self._should_run(state):
            if self._handle is not None:
                _logger.debug("Playback loop stopped at %.0f ms", state.current_time)
            self._cancel()
            return
        key = self._key(state)
        if self._handle is not None and key != self._loop_key:
            self._cancel()
        if self._handle is None:
            self._loop_key = key
            _logger.debug("Playback loop started at %.0f ms", state.current_time)
            self._request()

    def _request(self) -> None:
        self._generation += 1
        callback = functools.partial(self._on_frame, self._generation)
        self._handle = self._scheduler.request_frame(callback)

    def _cancel(self) -> None:
        # Invalidates a frame the scheduler has already dequeued.
        self._generation += 1
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None
        self._last_timestamp = None

    def _on_frame(self, generation: int, timestamp: float) -> None:
        completed = False
        with self._session.lock:
            if generation != self._generation:
                return
            self._handle = None
            state = self._session.state
            if not self._should_run(state):
                self._last_timestamp = None
                return

            if self._last_timestamp is None:
                self._last_timestamp = timestamp
            delta = (timestamp - self._last_timestamp) * state.playback_speed
            self._last_timestamp = timestamp
            projected = state.current_time + delta

            self._in_frame = True
            try:
                self._session.dispatch(Tick(delta))
                if projected < state.total_duration:
                    self._request()
                elif state.loop_mode:
                    self._session.dispatch(Reset())
                    self._session.dispatch(Play())
                    self._request()
                else:
                    self._last_timestamp = None
                    completed = True
            finally:
                self._in_frame = False

        if completed:
            _logger.debug("Playback complete")
            if self._on_complete is not None:
                self._on_complete()
