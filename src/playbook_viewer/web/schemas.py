"""Pydantic request/response schemas for the plays API."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str


class PlaySummary(BaseModel):
    id: str
    name: str
    player_count: int = 0
    drawing_count: int = 0


class StorePlayRequest(BaseModel):
    """Play content as authored; an empty ``id`` gets a generated one."""

    id: str = ""
    name: str = ""
    players: list[dict] = []
    drawings: list[dict] = []


class StorePlayResponse(BaseModel):
    id: str


class PlayResponse(BaseModel):
    play: dict


class AnimationResponse(BaseModel):
    play_id: str
    total_duration: float
    player_states: list[dict]
    route_timings: dict[str, dict]
