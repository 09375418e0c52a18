"""FastAPI web application: play content and animation timing."""

from __future__ import annotations

import json
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from playbook_viewer import __version__
from playbook_viewer.playbook.models import PlayContent
from playbook_viewer.playbook.storage import PlayStorage
from playbook_viewer.timing.models import PLAYER_SPEED_FPS
from playbook_viewer.web.schemas import (
    AnimationResponse,
    HealthResponse,
    PlayResponse,
    PlaySummary,
    StorePlayRequest,
    StorePlayResponse,
)
from playbook_viewer.web.service import AnimationService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

_HERE = Path(__file__).parent

app = FastAPI(title="Playbook Viewer", version=__version__)

templates = Jinja2Templates(directory=str(_HERE / "templates"))

_DEFAULT_DB = os.environ.get("PLAYBOOK_VIEWER_DB", "playbook.db")
_DEFAULT_SPEED_FPS = float(os.environ.get("PLAYBOOK_VIEWER_SPEED_FPS", PLAYER_SPEED_FPS))


def _storage() -> PlayStorage:
    return PlayStorage(_DEFAULT_DB)


def _load(storage: PlayStorage, play_id: str, speed_fps: float):
    try:
        found = AnimationService(storage, speed_fps).load(play_id)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if found is None:
        raise HTTPException(status_code=404, detail="Play not found")
    return found


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.get("/api/plays", response_model=list[PlaySummary])
def list_plays() -> list[PlaySummary]:
    """Return every stored play, ordered by name."""
    storage = _storage()
    try:
        rows = storage.list_plays()
    finally:
        storage.close()

    return [
        PlaySummary(
            id=r["id"],
            name=r["name"],
            player_count=int(r["player_count"] or 0),
            drawing_count=int(r["drawing_count"] or 0),
        )
        for r in rows
    ]


@app.post("/api/plays", response_model=StorePlayResponse)
def store_play(req: StorePlayRequest) -> StorePlayResponse:
    """Validate and persist play content."""
    try:
        play = PlayContent.from_dict(req.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    storage = _storage()
    try:
        play_id = storage.save_play(play)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    finally:
        storage.close()
    return StorePlayResponse(id=play_id)


@app.get("/api/plays/{play_id}", response_model=PlayResponse)
def get_play(play_id: str) -> PlayResponse:
    storage = _storage()
    try:
        play = storage.get_play(play_id)
    finally:
        storage.close()
    if play is None:
        raise HTTPException(status_code=404, detail="Play not found")
    return PlayResponse(play=play.to_dict())


@app.delete("/api/plays/{play_id}", status_code=204)
def delete_play(play_id: str) -> Response:
    storage = _storage()
    try:
        removed = storage.delete_play(play_id)
    finally:
        storage.close()
    if not removed:
        raise HTTPException(status_code=404, detail="Play not found")
    return Response(status_code=204)


@app.get("/api/plays/{play_id}/animation", response_model=AnimationResponse)
def play_animation(play_id: str, speed_fps: float | None = None) -> AnimationResponse:
    """Return the timing payload a viewer loads for *play_id*."""
    speed = _DEFAULT_SPEED_FPS if speed_fps is None else speed_fps
    storage = _storage()
    try:
        _, payload = _load(storage, play_id, speed)
    finally:
        storage.close()
    return AnimationResponse(**payload.to_dict())


@app.get("/plays/{play_id}", response_class=HTMLResponse)
def play_page(request: Request, play_id: str, speed_fps: float | None = None) -> HTMLResponse:
    """Render the timing summary page of one play."""
    speed = _DEFAULT_SPEED_FPS if speed_fps is None else speed_fps
    storage = _storage()
    try:
        play, payload = _load(storage, play_id, speed)
        summary = AnimationService(storage, speed).timing_summary(play, payload)
    finally:
        storage.close()

    return templates.TemplateResponse(
        request,
        "play.html",
        {
            "play": play,
            "summary": summary,
            "payload_json": json.dumps(payload.to_dict()),
        },
    )
