"""Playback state machine, session, frame driver and controls.

Public API
----------
AnimationState      - the single state value of one viewer
reduce              - pure (state, action) -> state reducer
PlaybackSession     - state holder; dispatch + convenience controls
PlaybackDriver      - frame loop feeding Tick actions into a session
ManualFrameScheduler / ThreadedFrameScheduler - frame primitives
KeyboardController  - viewer keyboard shortcuts
PlayQueue           - prev / next play navigation
"""

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
from playbook_viewer.playback.controls import KeyboardController, PlayQueue
from playbook_viewer.playback.driver import PlaybackDriver
from playbook_viewer.playback.reducer import reduce, update_player_positions
from playbook_viewer.playback.scheduler import ManualFrameScheduler, ThreadedFrameScheduler
from playbook_viewer.playback.session import PlaybackSession
from playbook_viewer.playback.state import AnimationState

__all__ = [
    "AnimationState",
    "KeyboardController",
    "LoadPlay",
    "ManualFrameScheduler",
    "Pause",
    "Play",
    "PlayQueue",
    "PlaybackDriver",
    "PlaybackSession",
    "Reset",
    "Seek",
    "SetPhase",
    "SetSpeed",
    "Stop",
    "ThreadedFrameScheduler",
    "Tick",
    "ToggleGhostTrail",
    "ToggleLoop",
    "UpdatePlayerStates",
    "reduce",
    "update_player_positions",
]
