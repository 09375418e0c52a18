"""Route timing and per-play animation payloads.

Public API
----------
RouteTimingCalculator     - Drawing → RouteTiming at a constant player speed
AnimationTimingAggregator - PlayContent → LoadPlayPayload
RouteTiming / SegmentTiming / PlayerAnimationState / LoadPlayPayload
position_along_route      - interpolated position on a route at a time (ms)
"""

from playbook_viewer.timing.aggregator import (
    AnimationTimingAggregator,
    has_animatable_routes,
    total_duration,
)
from playbook_viewer.timing.models import (
    LoadPlayPayload,
    PlayerAnimationState,
    RouteTiming,
    SegmentTiming,
)
from playbook_viewer.timing.route import (
    RouteTimingCalculator,
    direction_along_route,
    position_along_route,
)

__all__ = [
    "AnimationTimingAggregator",
    "LoadPlayPayload",
    "PlayerAnimationState",
    "RouteTiming",
    "RouteTimingCalculator",
    "SegmentTiming",
    "direction_along_route",
    "has_animatable_routes",
    "position_along_route",
    "total_duration",
]
