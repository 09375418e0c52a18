"""Geometry primitives."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Coordinate:
    """A point on the field.

    Coordinates are in field feet, not pixels; conversion to screen space
    happens in the rendering layer.
    """

    x: float
    """Horizontal position in feet."""

    y: float
    """Vertical position in feet."""

    @classmethod
    def from_dict(cls, d: dict) -> Coordinate:
        """Create a :class:`Coordinate` from an ``{"x": .., "y": ..}`` mapping."""
        return cls(x=float(d["x"]), y=float(d["y"]))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}
