"""Frame schedulers: the "next frame" primitive behind the playback driver.

A scheduler calls back once per requested frame with a timestamp in
milliseconds.  Callbacks are one-shot; the driver re-requests a frame from
inside its callback to keep the loop going.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol

_logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Anything that can run a callback on the next frame."""

    def request_frame(self, callback: FrameCallback) -> object: ...

    def cancel_frame(self, handle: object) -> None: ...


class ManualFrameScheduler:
    """Deterministic scheduler driven by explicit :meth:`advance` calls.

    Used for headless playback and tests: nothing happens until the caller
    advances the clock.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now = start_ms
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: object) -> None:
        self._pending.pop(handle, None)  # type: ignore[arg-type]

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, timestamp: float) -> int:
        """Fire every callback pending *now* with *timestamp*.

        Callbacks requested while firing wait for the next call.  Returns the
        number of callbacks fired.
        """
        self.now = timestamp
        due = list(self._pending.values())
        self._pending.clear()
        for callback in due:
            callback(timestamp)
        return len(due)

    def step(self, interval_ms: float = 1000.0 / 60.0) -> int:
        """Advance the internal clock by *interval_ms* and fire due callbacks."""
        return self.advance(self.now + interval_ms)


class ThreadedFrameScheduler:
    """Fires requested frames from a daemon thread at *target_hz*.

    Parameters
    ----------
    target_hz:
        Frame rate in Hz.
    clock:
        Monotonic clock in seconds; frames receive ``clock() * 1000``.
    """

    def __init__(
        self,
        target_hz: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if target_hz <= 0:
            raise ValueError("target_hz must be > 0")
        self._interval = 1.0 / target_hz
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the frame thread."""
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="FrameScheduler")
        self._thread.start()

    def stop(self) -> None:
        """Stop the frame thread and drop pending frames."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        with self._lock:
            self._pending.clear()

    def request_frame(self, callback: FrameCallback) -> int:
        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: object) -> None:
        with self._lock:
            self._pending.pop(handle, None)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while not self._stop_event.is_set():
            t0 = self._clock()
            with self._lock:
                due = list(self._pending.values())
                self._pending.clear()
            for callback in due:
                try:
                    callback(t0 * 1000.0)
                except Exception:
                    _logger.exception("Frame callback failed")
            elapsed = self._clock() - t0
            wait = self._interval - elapsed
            if wait > 0:
                self._stop_event.wait(wait)
