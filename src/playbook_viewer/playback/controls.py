"""Viewer controls: keyboard shortcuts and prev/next play navigation."""

from __future__ import annotations

import logging
from collections.abc import Callable

from playbook_viewer.playback.session import PlaybackSession
from playbook_viewer.playbook.models import PlayContent
from playbook_viewer.timing.aggregator import AnimationTimingAggregator
from playbook_viewer.timing.models import PLAYER_SPEED_FPS, SCRUB_STEP_PERCENT

_logger = logging.getLogger(__name__)

SPEED_PRESETS = {"1": 0.25, "2": 0.5, "3": 1.0, "4": 1.5, "5": 2.0}


class KeyboardController:
    """Maps viewer key presses onto session actions.

    ============  ==========================================
    Key           Effect
    ============  ==========================================
    Space         play / pause
    Left / Right  scrub 5 % back / forward (Shift: prev / next play)
    1 – 5         speed 0.25× / 0.5× / 1× / 1.5× / 2×
    R             reset
    L             toggle loop
    G             toggle ghost trail
    Escape        close the viewer
    ============  ==========================================

    Key names follow browser ``KeyboardEvent.key`` values (``" "``,
    ``"ArrowLeft"``, ``"Escape"``); Tk keysyms (``"space"``, ``"Left"``)
    are accepted too.
    """

    _ALIASES = {
        "space": " ",
        "left": "ArrowLeft",
        "right": "ArrowRight",
        "escape": "Escape",
        "esc": "Escape",
        "arrowleft": "ArrowLeft",
        "arrowright": "ArrowRight",
    }

    def __init__(
        self,
        session: PlaybackSession,
        on_prev_play: Callable[[], object] | None = None,
        on_next_play: Callable[[], object] | None = None,
        on_close: Callable[[], object] | None = None,
    ) -> None:
        self._session = session
        self._on_prev_play = on_prev_play
        self._on_next_play = on_next_play
        self._on_close = on_close

    def _normalize(self, key: str) -> str:
        return self._ALIASES.get(key.lower(), key) if len(key) > 1 else key

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """Apply the action bound to *key*.  Returns False for unbound keys."""
        key = self._normalize(key)
        session = self._session

        if key == " ":
            session.toggle_play()
        elif key == "ArrowLeft":
            if shift and self._on_prev_play is not None:
                self._on_prev_play()
            else:
                session.seek(max(0.0, session.state.progress - SCRUB_STEP_PERCENT))
        elif key == "ArrowRight":
            if shift and self._on_next_play is not None:
                self._on_next_play()
            else:
                session.seek(min(1.0, session.state.progress + SCRUB_STEP_PERCENT))
        elif key in ("r", "R"):
            session.reset()
        elif key in ("l", "L"):
            session.toggle_loop()
        elif key in ("g", "G"):
            session.toggle_ghost_trail()
        elif key in SPEED_PRESETS:
            session.set_speed(SPEED_PRESETS[key])
        elif key == "Escape":
            if self._on_close is None:
                return False
            self._on_close()
        else:
            return False
        return True


class PlayQueue:
    """Ordered plays a viewer can step through with prev / next.

    Moving to a play aggregates its timing and loads it into the session;
    speed, loop and ghost-trail preferences carry over.

    Args:
        session: Session to load plays into.
        plays: Plays in presentation order.
        speed_fps: Player speed used for timing.
    """

    def __init__(
        self,
        session: PlaybackSession,
        plays: list[PlayContent],
        speed_fps: float = PLAYER_SPEED_FPS,
    ) -> None:
        self._session = session
        self._plays = list(plays)
        self._aggregator = AnimationTimingAggregator(speed_fps)
        self._index = -1

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> PlayContent | None:
        if 0 <= self._index < len(self._plays):
            return self._plays[self._index]
        return None

    def __len__(self) -> int:
        return len(self._plays)

    def go_to(self, index: int) -> PlayContent:
        """Load the play at *index*.

        Raises:
            IndexError: If *index* is out of range.
        """
        if not 0 <= index < len(self._plays):
            raise IndexError(f"play index {index} out of range (0..{len(self._plays) - 1})")
        play = self._plays[index]
        self._index = index
        self._session.load_play(self._aggregator.aggregate(play))
        _logger.info("Loaded play %d/%d: %s", index + 1, len(self._plays), play.name or play.id)
        return play

    def next(self) -> bool:
        """Advance to the next play; False if already on the last one."""
        if self._index + 1 >= len(self._plays):
            return False
        self.go_to(self._index + 1)
        return True

    def previous(self) -> bool:
        """Go back one play; False if already on the first one."""
        if self._index <= 0:
            return False
        self.go_to(self._index - 1)
        return True
