"""Playback state machine.

``reduce(state, action)`` is pure and total: it never performs I/O, never
mutates *state*, and returns *state* itself for actions it does not know.

Phase flow::

    ready ──PLAY──▶ execution ──TICK reaches end──▶ complete
      ▲                                                │
      └──────────── STOP / RESET / LOAD_PLAY ◀─────────┘

``STOP``, ``RESET``, ``SEEK`` and ``LOAD_PLAY`` are accepted in every phase.
"""

from __future__ import annotations

import dataclasses

from playbook_viewer.geometry.bezier import calculate_progress
from playbook_viewer.playback.actions import (
    LoadPlay,
    Pause,
    Play,
    Reset,
    Seek,
    SetPhase,
    SetSpeed,
    Stop,
    Tick,
    ToggleGhostTrail,
    ToggleLoop,
    UpdatePlayerStates,
)
from playbook_viewer.playback.state import COMPLETE, EXECUTION, READY, AnimationState
from playbook_viewer.timing.models import PlayerAnimationState
from playbook_viewer.timing.route import position_along_route


def update_player_positions(
    state: AnimationState, current_time: float
) -> list[PlayerAnimationState]:
    """Recompute every player's position and route progress at *current_time*.

    Players without a route, or whose route has no timing, stay at their
    start position with progress 0.
    """
    updated: list[PlayerAnimationState] = []
    for ps in state.player_states:
        route = state.route_timings.get(ps.route_id) if ps.route_id else None
        if route is None:
            updated.append(
                dataclasses.replace(ps, current_position=ps.start_position, progress=0.0)
            )
            continue
        updated.append(
            dataclasses.replace(
                ps,
                current_position=position_along_route(route, current_time),
                progress=calculate_progress(current_time, route.duration),
            )
        )
    return updated


def _at_time(state: AnimationState, current_time: float, **changes) -> AnimationState:
    return dataclasses.replace(
        state,
        current_time=current_time,
        player_states=update_player_positions(state, current_time),
        **changes,
    )


def reduce(state: AnimationState, action: object) -> AnimationState:
    """Return the state that follows *state* under *action*."""
    if isinstance(action, LoadPlay):
        payload = action.payload
        return dataclasses.replace(
            state,
            phase=READY,
            is_playing=False,
            current_time=0.0,
            play_id=payload.play_id,
            player_states=list(payload.player_states),
            route_timings=dict(payload.route_timings),
            total_duration=payload.total_duration,
        )

    if isinstance(action, SetPhase):
        return dataclasses.replace(state, phase=action.phase)

    if isinstance(action, Play):
        if state.current_time >= state.total_duration:
            # At or past the end: restart from the top.
            return _at_time(state, 0.0, is_playing=True, phase=EXECUTION)
        return dataclasses.replace(
            state,
            is_playing=True,
            phase=EXECUTION if state.phase == READY else state.phase,
        )

    if isinstance(action, Pause):
        return dataclasses.replace(state, is_playing=False)

    if isinstance(action, Stop):
        return _at_time(state, 0.0, is_playing=False, phase=READY)

    if isinstance(action, Seek):
        return _at_time(state, action.progress * state.total_duration)

    if isinstance(action, SetSpeed):
        return dataclasses.replace(state, playback_speed=action.speed)

    if isinstance(action, Tick):
        new_time = min(state.current_time + action.delta_time, state.total_duration)
        if new_time >= state.total_duration:
            return _at_time(
                state,
                new_time,
                phase=COMPLETE,
                is_playing=state.is_playing if state.loop_mode else False,
            )
        return _at_time(state, new_time)

    if isinstance(action, Reset):
        return _at_time(state, 0.0, phase=READY)

    if isinstance(action, ToggleGhostTrail):
        return dataclasses.replace(state, show_ghost_trail=not state.show_ghost_trail)

    if isinstance(action, ToggleLoop):
        return dataclasses.replace(state, loop_mode=not state.loop_mode)

    if isinstance(action, UpdatePlayerStates):
        return dataclasses.replace(state, player_states=list(action.states))

    return state
