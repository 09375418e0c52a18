"""Field geometry: Bezier interpolation, arc length and path smoothing."""

from playbook_viewer.geometry.bezier import (
    calculate_progress,
    cubic_length,
    curve_length,
    direction_at,
    direction_to_angle,
    end_direction,
    interpolate_cubic,
    interpolate_line,
    interpolate_quadratic,
    line_length,
    point_on_segment,
    quadratic_length,
    time_from_progress,
)
from playbook_viewer.geometry.models import Coordinate
from playbook_viewer.geometry.smoothing import apply_chaikin, chaikin_subdivide

__all__ = [
    "Coordinate",
    "apply_chaikin",
    "calculate_progress",
    "chaikin_subdivide",
    "cubic_length",
    "curve_length",
    "direction_at",
    "direction_to_angle",
    "end_direction",
    "interpolate_cubic",
    "interpolate_line",
    "interpolate_quadratic",
    "line_length",
    "point_on_segment",
    "quadratic_length",
    "time_from_progress",
]
