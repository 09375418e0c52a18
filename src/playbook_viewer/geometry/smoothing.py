"""Chaikin corner-cutting for ``curve``-mode routes.

Each pass replaces every edge ``Pi → Pi+1`` with the two points at 1/4 and
3/4 along it.  With endpoint preservation the first edge only contributes
its 3/4 point and the last edge only its 1/4 point, and the exact first and
last input points are kept, so an animated player starts and stops precisely
where the route was drawn.
"""

from __future__ import annotations

from playbook_viewer.geometry.models import Coordinate

CHAIKIN_ITERATIONS = 3

_NEAR = 0.75
_FAR = 0.25


def _mix(a: Coordinate, b: Coordinate, wa: float) -> Coordinate:
    wb = 1.0 - wa
    return Coordinate(x=wa * a.x + wb * b.x, y=wa * a.y + wb * b.y)


def chaikin_subdivide(
    points: list[Coordinate], preserve_endpoints: bool = False
) -> list[Coordinate]:
    """Apply one Chaikin pass to *points*.

    Lists with fewer than two points are returned unchanged.
    """
    if len(points) < 2:
        return points

    last_edge = len(points) - 2
    result: list[Coordinate] = []
    if preserve_endpoints:
        result.append(points[0])

    for i in range(len(points) - 1):
        p0 = points[i]
        p1 = points[i + 1]
        if preserve_endpoints and i == 0:
            result.append(_mix(p0, p1, _FAR))
        elif preserve_endpoints and i == last_edge:
            result.append(_mix(p0, p1, _NEAR))
        else:
            result.append(_mix(p0, p1, _NEAR))
            result.append(_mix(p0, p1, _FAR))

    if preserve_endpoints:
        result.append(points[-1])
    return result


def apply_chaikin(
    points: list[Coordinate], iterations: int = CHAIKIN_ITERATIONS
) -> list[Coordinate]:
    """Run *iterations* endpoint-preserving Chaikin passes over *points*."""
    result = points
    for _ in range(iterations):
        result = chaikin_subdivide(result, preserve_endpoints=True)
    return result
