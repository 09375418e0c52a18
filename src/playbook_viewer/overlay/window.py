"""Tkinter play viewer window."""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from playbook_viewer.overlay.renderer import line_end_strokes
from playbook_viewer.playback.controls import KeyboardController
from playbook_viewer.playback.driver import PlaybackDriver
from playbook_viewer.playback.scheduler import FrameCallback

if TYPE_CHECKING:
    from playbook_viewer.overlay.renderer import FrameRenderer
    from playbook_viewer.playback.session import PlaybackSession

_logger = logging.getLogger(__name__)

# Colour constants
_BG = "#14532d"  # turf
_LOS_CLR = "#facc15"
_ROUTE_TRACE_CLR = "#4b7a5a"
_GHOST_CLR = "#9ca3af"
_FG = "#ffffff"
_MARKER_R = 9  # player marker radius, px
_SHIFT_MASK = 0x0001


class TkFrameScheduler:
    """Frame scheduler backed by ``Tk.after``; callbacks run on the Tk thread."""

    def __init__(self, root, interval_ms: int = 16) -> None:
        self._root = root
        self._interval_ms = interval_ms

    def request_frame(self, callback: FrameCallback) -> str:
        return self._root.after(
            self._interval_ms, lambda: callback(time.monotonic() * 1000.0)
        )

    def cancel_frame(self, handle: object) -> None:
        with contextlib.suppress(Exception):
            self._root.after_cancel(handle)


class ViewerWindow:
    """Animated top-down view of one play.

    Draws every route as a faint trace, reveals the animated part of each
    route as players run it, and shows player markers (plus ghost markers at
    their alignment when the ghost trail is on).  Keyboard shortcuts go
    through :class:`~playbook_viewer.playback.controls.KeyboardController`;
    minimising the window pauses playback.

    Field coordinates are feet with +y pointing downfield; the origin is
    drawn at the horizontal centre, three quarters of the way down.

    Parameters
    ----------
    session:
        Session holding the play to show.
    renderer:
        Renderer for the same play.
    pixels_per_foot:
        Drawing scale.
    width, height:
        Canvas size in pixels.
    refresh_ms:
        Frame interval; 16 gives ~60 fps.
    on_prev_play, on_next_play:
        Shift+Left / Shift+Right handlers (e.g. a ``PlayQueue``).
    headless:
        When True, skip Tk initialisation (for unit testing).
    """

    def __init__(
        self,
        session: PlaybackSession,
        renderer: FrameRenderer,
        pixels_per_foot: float = 8.0,
        width: int = 640,
        height: int = 480,
        refresh_ms: int = 16,
        on_prev_play: Callable[[], object] | None = None,
        on_next_play: Callable[[], object] | None = None,
        headless: bool = False,
    ) -> None:
        if pixels_per_foot <= 0:
            raise ValueError("pixels_per_foot must be > 0")
        self._session = session
        self._renderer = renderer
        self._ppf = pixels_per_foot
        self._width = width
        self._height = height
        self._refresh_ms = refresh_ms
        self._headless = headless

        self._controller = KeyboardController(
            session,
            on_prev_play=on_prev_play,
            on_next_play=on_next_play,
            on_close=self.stop,
        )
        self._driver: PlaybackDriver | None = None
        self._root = None  # tkinter.Tk, set by run()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def pixels_per_foot(self) -> float:
        return self._ppf

    def to_canvas(self, x: float, y: float) -> tuple[float, float]:
        """Convert field feet to canvas pixels."""
        return (
            self._width / 2 + x * self._ppf,
            self._height * 0.75 - y * self._ppf,
        )

    def snapshot(self) -> dict:
        """Render the session's current state."""
        return self._renderer.render(self._session.state)

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """Forward a key press to the keyboard controller."""
        return self._controller.handle_key(key, shift=shift)

    def run(self) -> None:
        """Open the window and block in the Tk main loop."""
        if self._headless:
            return
        try:
            import tkinter as tk
        except ImportError:
            _logger.error("tkinter is not available; cannot open the viewer")
            return

        root = tk.Tk()
        self._root = root
        root.title("Playbook Viewer")
        root.configure(bg=_BG)

        status_var = tk.StringVar(value="")
        tk.Label(
            root, textvariable=status_var, font=("Consolas", 12), bg=_BG, fg=_FG
        ).pack(side="top", fill="x", padx=8, pady=(6, 0))
        canvas = tk.Canvas(
            root, width=self._width, height=self._height, bg=_BG, highlightthickness=0
        )
        canvas.pack(padx=8, pady=8)

        def _on_key(event) -> None:
            self.handle_key(event.keysym, shift=bool(event.state & _SHIFT_MASK))

        root.bind("<Key>", _on_key)
        root.bind("<Unmap>", lambda _e: self._visibility(hidden=True))
        root.bind("<Map>", lambda _e: self._visibility(hidden=False))
        root.protocol("WM_DELETE_WINDOW", self.stop)

        self._driver = PlaybackDriver(
            self._session, TkFrameScheduler(root, self._refresh_ms)
        )

        def _refresh() -> None:
            frame = self.snapshot()
            self._draw(canvas, frame)
            status_var.set(
                f"{frame['time']} / {frame['duration']}   {frame['phase']}   "
                f"{frame['speed']}x"
            )
            root.after(self._refresh_ms, _refresh)

        root.after(self._refresh_ms, _refresh)
        root.mainloop()

        self._driver.close()
        self._driver = None

    def stop(self) -> None:
        """Close the viewer window."""
        root = self._root
        if root is not None:
            with contextlib.suppress(Exception):
                root.quit()

    # ------------------------------------------------------------------
    # Internal: runs on the Tk thread
    # ------------------------------------------------------------------

    def _visibility(self, hidden: bool) -> None:
        if self._driver is not None:
            self._driver.handle_visibility_change(hidden)

    def _polyline(self, points: list[tuple[float, float]]) -> list[float]:
        flat: list[float] = []
        for x, y in points:
            flat.extend(self.to_canvas(x, y))
        return flat

    def _draw_line_end(self, canvas, end: dict | None, color: str, width: float) -> None:
        if end is None:
            return
        cx, cy = self.to_canvas(end["x"], end["y"])
        # Canvas y grows downwards.
        for (x0, y0), (x1, y1) in line_end_strokes(end["kind"], cx, cy, -end["angle"], width):
            canvas.create_line(x0, y0, x1, y1, fill=color, width=width)

    def _draw(self, canvas, frame: dict) -> None:
        canvas.delete("all")
        _, los_y = self.to_canvas(0.0, 0.0)
        canvas.create_line(0, los_y, self._width, los_y, fill=_LOS_CLR, dash=(6, 4))

        for deco in frame["decorations"]:
            coords = self._polyline(deco["points"])
            if len(coords) >= 4:
                canvas.create_line(*coords, fill=deco["color"], width=deco["stroke_width"])
            self._draw_line_end(canvas, deco["line_end"], deco["color"], deco["stroke_width"])

        for route in frame["routes"]:
            coords = self._polyline(route["points"])
            if len(coords) < 4:
                continue
            canvas.create_line(*coords, fill=_ROUTE_TRACE_CLR, width=route["stroke_width"])
            revealed = _revealed_prefix(route["points"], route["progress"])
            coords = self._polyline(revealed)
            if len(coords) >= 4:
                canvas.create_line(*coords, fill=route["color"], width=route["stroke_width"])
            end_color = route["color"] if route["progress"] >= 1.0 else _ROUTE_TRACE_CLR
            self._draw_line_end(canvas, route["line_end"], end_color, route["stroke_width"])

        for ghost in frame["ghosts"]:
            cx, cy = self.to_canvas(ghost["x"], ghost["y"])
            canvas.create_oval(
                cx - _MARKER_R, cy - _MARKER_R, cx + _MARKER_R, cy + _MARKER_R,
                outline=_GHOST_CLR, dash=(2, 2),
            )

        for player in frame["players"]:
            cx, cy = self.to_canvas(player["x"], player["y"])
            canvas.create_oval(
                cx - _MARKER_R, cy - _MARKER_R, cx + _MARKER_R, cy + _MARKER_R,
                fill=player["color"], outline=_FG,
            )
            canvas.create_text(cx, cy, text=player["label"], fill=_FG, font=("Consolas", 8))


def _revealed_prefix(
    points: list[tuple[float, float]], progress: float
) -> list[tuple[float, float]]:
    """Leading share *progress* of a polyline's length (dash-offset reveal)."""
    if progress <= 0 or len(points) < 2:
        return []
    lengths = [
        ((x1 - x0) ** 2 + (y1 - y0) ** 2) ** 0.5
        for (x0, y0), (x1, y1) in zip(points, points[1:])
    ]
    remaining = sum(lengths) * min(1.0, progress)
    out = [points[0]]
    for (x0, y0), (x1, y1), length in zip(points, points[1:], lengths):
        if remaining >= length:
            out.append((x1, y1))
            remaining -= length
            continue
        if length > 0:
            f = remaining / length
            out.append((x0 + (x1 - x0) * f, y0 + (y1 - y0) * f))
        break
    return out
