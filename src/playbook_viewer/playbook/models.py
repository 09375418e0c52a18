"""Play content data models as served by the plays API.

Wire JSON uses the editor's camelCase keys (``playerId``, ``pointIds``,
``pathMode`` ...).  :meth:`from_dict` accepts that shape and the snake_case
shape produced by :meth:`to_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def _pick(d: dict, *keys: str, default=None):
    """Return the value of the first key of *keys* present in *d*."""
    for key in keys:
        if key in d:
            return d[key]
    return default


@dataclass
class ControlPoint:
    """A named point in a drawing's point pool.

    Segments address points by :attr:`id`; the same point is never duplicated
    inline, so two segments sharing an endpoint share the same ID.
    """

    id: str
    x: float
    y: float
    role: str = "intermediate"
    """``'start'``, ``'intermediate'``, ``'control'`` or ``'end'``."""

    @classmethod
    def from_dict(cls, d: dict) -> ControlPoint:
        return cls(
            id=str(d["id"]),
            x=float(d["x"]),
            y=float(d["y"]),
            role=str(_pick(d, "role", "type", default="intermediate")),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "role": self.role}


@dataclass
class PathSegment:
    """One line / quadratic / cubic piece of a drawing.

    ``point_ids`` holds 2 (line), 3 (quadratic) or 4 (cubic) control-point IDs
    in curve order.  Segments whose IDs do not resolve are tolerated and time
    as zero length.
    """

    type: str
    point_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> PathSegment:
        return cls(
            type=str(d["type"]),
            point_ids=[str(pid) for pid in _pick(d, "point_ids", "pointIds", default=[])],
        )

    def to_dict(self) -> dict:
        return {"type": self.type, "pointIds": list(self.point_ids)}


@dataclass
class DrawingStyle:
    """Presentation settings of a drawing.

    Only :attr:`path_mode` affects timing: ``'curve'`` line paths are smoothed
    before they are timed.
    """

    path_mode: str = "sharp"
    color: str = "#000000"
    stroke_width: float = 2.0
    line_style: str = "solid"
    line_end: str = "none"

    @classmethod
    def from_dict(cls, d: dict) -> DrawingStyle:
        return cls(
            path_mode=str(_pick(d, "path_mode", "pathMode", default="sharp")),
            color=str(d.get("color", "#000000")),
            stroke_width=float(_pick(d, "stroke_width", "strokeWidth", default=2.0)),
            line_style=str(_pick(d, "line_style", "lineStyle", default="solid")),
            line_end=str(_pick(d, "line_end", "lineEnd", default="none")),
        )

    def to_dict(self) -> dict:
        return {
            "pathMode": self.path_mode,
            "color": self.color,
            "strokeWidth": self.stroke_width,
            "lineStyle": self.line_style,
            "lineEnd": self.line_end,
        }


@dataclass
class PreSnapMotion:
    """Movement before the snap.

    Pre-snap drawings are timed ahead of the snap and get a negative start
    offset; regular routes start at the snap.
    """

    type: str
    """``'shift'`` or ``'motion'``."""

    snap_point_id: str | None = None
    """Point the motion player occupies at the snap (motion only)."""

    @classmethod
    def from_dict(cls, d: dict) -> PreSnapMotion:
        snap_point_id = _pick(d, "snap_point_id", "snapPointId")
        return cls(
            type=str(d["type"]),
            snap_point_id=str(snap_point_id) if snap_point_id else None,
        )

    def to_dict(self) -> dict:
        d = {"type": self.type}
        if self.snap_point_id:
            d["snapPointId"] = self.snap_point_id
        return d


@dataclass
class Drawing:
    """A single authored path, optionally linked to a player.

    Drawings without a :attr:`player_id` are decorative: they render
    statically and never animate.
    """

    id: str
    points: dict[str, ControlPoint] = field(default_factory=dict)
    segments: list[PathSegment] = field(default_factory=list)
    style: DrawingStyle = field(default_factory=DrawingStyle)
    player_id: str | None = None
    pre_snap_motion: PreSnapMotion | None = None

    @classmethod
    def from_dict(cls, d: dict) -> Drawing:
        raw_points = d.get("points") or {}
        if isinstance(raw_points, dict):
            points = {
                str(key): ControlPoint.from_dict({"id": key, **value})
                for key, value in raw_points.items()
            }
        else:
            points = {}
            for value in raw_points:
                cp = ControlPoint.from_dict(value)
                points[cp.id] = cp
        player_id = _pick(d, "player_id", "playerId")
        pre_snap = _pick(d, "pre_snap_motion", "preSnapMotion")
        return cls(
            id=str(d["id"]),
            points=points,
            segments=[PathSegment.from_dict(s) for s in d.get("segments") or []],
            style=DrawingStyle.from_dict(d.get("style") or {}),
            player_id=str(player_id) if player_id else None,
            pre_snap_motion=PreSnapMotion.from_dict(pre_snap) if pre_snap else None,
        )

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "playerId": self.player_id,
            "points": {pid: p.to_dict() for pid, p in self.points.items()},
            "segments": [s.to_dict() for s in self.segments],
            "style": self.style.to_dict(),
        }
        if self.pre_snap_motion is not None:
            d["preSnapMotion"] = self.pre_snap_motion.to_dict()
        return d


@dataclass
class Player:
    """A player marker at its pre-snap alignment (feet)."""

    id: str
    x: float
    y: float
    label: str = ""
    color: str = "#3b82f6"

    @classmethod
    def from_dict(cls, d: dict) -> Player:
        return cls(
            id=str(d["id"]),
            x=float(d["x"]),
            y=float(d["y"]),
            label=str(d.get("label", "")),
            color=str(d.get("color", "#3b82f6")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "label": self.label,
            "color": self.color,
        }


@dataclass
class PlayContent:
    """Everything the animation engine needs from one play."""

    id: str
    name: str = ""
    players: list[Player] = field(default_factory=list)
    drawings: list[Drawing] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> PlayContent:
        """Build a :class:`PlayContent` from API JSON.

        Raises
        ------
        ValueError
            If a required key is missing or a value has the wrong type.
        """
        try:
            return cls(
                id=str(d["id"]),
                name=str(d.get("name", "")),
                players=[Player.from_dict(p) for p in d.get("players") or []],
                drawings=[Drawing.from_dict(dr) for dr in d.get("drawings") or []],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ValueError(f"Malformed play content: {exc!r}") from exc

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
            "drawings": [dr.to_dict() for dr in self.drawings],
        }
