"""Shared play-content factories for tests."""

from __future__ import annotations

from playbook_viewer.playbook.models import (
    ControlPoint,
    Drawing,
    DrawingStyle,
    PathSegment,
    PlayContent,
    Player,
)


def make_drawing(
    drawing_id: str = "d1",
    coords: dict[str, tuple[float, float]] | None = None,
    segments: list[tuple[str, list[str]]] | None = None,
    player_id: str | None = "p1",
    path_mode: str = "sharp",
) -> Drawing:
    """Build a drawing from ``{id: (x, y)}`` and ``[(type, [ids])]``.

    Defaults to a single 10 ft line from ``(0, 0)`` to ``(10, 0)``.
    """
    if coords is None:
        coords = {"a": (0.0, 0.0), "b": (10.0, 0.0)}
    if segments is None:
        segments = [("line", ["a", "b"])]
    return Drawing(
        id=drawing_id,
        points={pid: ControlPoint(pid, x, y) for pid, (x, y) in coords.items()},
        segments=[PathSegment(kind, list(ids)) for kind, ids in segments],
        style=DrawingStyle(path_mode=path_mode),
        player_id=player_id,
    )


def make_play(
    play_id: str = "play-1",
    players: list[Player] | None = None,
    drawings: list[Drawing] | None = None,
    name: str = "Test Play",
) -> PlayContent:
    """A play with one player (``p1`` at the origin) running the default drawing."""
    if players is None:
        players = [Player("p1", 0.0, 0.0, label="X", color="#ff0000")]
    if drawings is None:
        drawings = [make_drawing()]
    return PlayContent(id=play_id, name=name, players=players, drawings=drawings)


def play_dict(play_id: str = "play-1", name: str = "Test Play") -> dict:
    """Wire-format (camelCase) JSON for a one-route play."""
    return {
        "id": play_id,
        "name": name,
        "players": [{"id": "p1", "x": 0, "y": 0, "label": "X", "color": "#ff0000"}],
        "drawings": [
            {
                "id": "d1",
                "playerId": "p1",
                "points": {
                    "a": {"x": 0, "y": 0, "type": "start"},
                    "b": {"x": 10, "y": 0, "type": "end"},
                },
                "segments": [{"type": "line", "pointIds": ["a", "b"]}],
                "style": {"pathMode": "sharp", "color": "#111111", "strokeWidth": 3},
            }
        ],
    }
