"""AnimationService: builds animation payloads for stored plays."""

from __future__ import annotations

from playbook_viewer.playbook.models import PlayContent
from playbook_viewer.playbook.storage import PlayStorage
from playbook_viewer.timing.aggregator import (
    AnimationTimingAggregator,
    max_route_duration,
    pre_snap_duration,
)
from playbook_viewer.timing.models import PLAYER_SPEED_FPS, LoadPlayPayload


class AnimationService:
    """Timing pipeline over a :class:`PlayStorage`.

    Parameters
    ----------
    storage:
        Open play store.  The caller owns and closes it.
    speed_fps:
        Player speed in feet per second.

    Raises
    ------
    ValueError
        If *speed_fps* is not positive.
    """

    def __init__(self, storage: PlayStorage, speed_fps: float = PLAYER_SPEED_FPS) -> None:
        self._storage = storage
        self._aggregator = AnimationTimingAggregator(speed_fps)

    def load(self, play_id: str) -> tuple[PlayContent, LoadPlayPayload] | None:
        """Return the play and its payload, or None if the play is unknown."""
        play = self._storage.get_play(play_id)
        if play is None:
            return None
        return play, self._aggregator.aggregate(play)

    def timing_summary(self, play: PlayContent, payload: LoadPlayPayload) -> dict:
        """Per-route figures for the play page.

        Returns
        -------
        dict with keys ``total_duration_s``, ``longest_route_s``,
        ``pre_snap_s``, ``speed_fps`` and ``routes`` (one dict per timed
        route: shifts, then motions, then regular routes).
        """
        labels = {p.id: p.label or p.id for p in play.players}
        routes = [
            {
                "drawing_id": timing.drawing_id,
                "player": labels.get(timing.player_id or "", timing.player_id or ""),
                "length_ft": round(timing.total_length, 1),
                "duration_s": round(timing.duration / 1000, 2),
                "segment_count": len(timing.segments),
                "start_s": round(timing.start_offset / 1000, 2),
            }
            for timing in payload.route_timings.values()
        ]
        return {
            "total_duration_s": round(payload.total_duration / 1000, 2),
            "longest_route_s": round(max_route_duration(payload.route_timings) / 1000, 2),
            "pre_snap_s": round(pre_snap_duration(payload.route_timings) / 1000, 2),
            "speed_fps": self._aggregator.speed_fps,
            "routes": routes,
        }
