"""Plays API: list, store, fetch, delete and animation payloads."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from tests.conftest import play_dict


def _patch_storage(**methods):
    mock_store = MagicMock()
    for name, value in methods.items():
        getattr(mock_store, name).return_value = value
    return patch("playbook_viewer.web.app.PlayStorage", return_value=mock_store), mock_store


# ---------------------------------------------------------------------------
# GET /api/plays
# ---------------------------------------------------------------------------


def test_list_plays_empty(client):
    patcher, store = _patch_storage(list_plays=[])
    with patcher:
        resp = client.get("/api/plays")
    assert resp.status_code == 200
    assert resp.json() == []
    store.close.assert_called_once()


def test_list_plays_rows(client):
    rows = [
        {"id": "a", "name": "Alpha", "player_count": 2, "drawing_count": 1},
        {"id": "b", "name": "Bravo", "player_count": None, "drawing_count": None},
    ]
    patcher, _ = _patch_storage(list_plays=rows)
    with patcher:
        data = client.get("/api/plays").json()
    assert [p["id"] for p in data] == ["a", "b"]
    assert data[0]["player_count"] == 2
    assert data[1]["drawing_count"] == 0


# ---------------------------------------------------------------------------
# POST / GET / DELETE /api/plays/{id}
# ---------------------------------------------------------------------------


def test_store_then_fetch(client, db_path):
    resp = client.post("/api/plays", json=play_dict("new-play", name="Slant"))
    assert resp.status_code == 200
    assert resp.json() == {"id": "new-play"}

    body = client.get("/api/plays/new-play").json()
    assert body["play"]["name"] == "Slant"
    assert body["play"]["drawings"][0]["playerId"] == "p1"


def test_store_without_id_generates_one(client, db_path):
    payload = play_dict()
    payload["id"] = ""
    play_id = client.post("/api/plays", json=payload).json()["id"]
    assert play_id
    assert client.get(f"/api/plays/{play_id}").status_code == 200


def test_store_malformed_play_422(client, db_path):
    payload = play_dict()
    payload["players"] = [{"id": "p1"}]  # no coordinates
    resp = client.post("/api/plays", json=payload)
    assert resp.status_code == 422
    assert "Malformed play content" in resp.json()["detail"]


def test_get_missing_play_404(client, db_path):
    resp = client.get("/api/plays/nope")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Play not found"


def test_delete_play(client, db_path):
    assert client.delete("/api/plays/play-1").status_code == 204
    assert client.get("/api/plays/play-1").status_code == 404
    assert client.delete("/api/plays/play-1").status_code == 404


def test_list_after_store(client, db_path):
    client.post("/api/plays", json=play_dict("zz", name="Zulu"))
    data = client.get("/api/plays").json()
    assert [p["name"] for p in data] == ["Test Play", "Zulu"]
    assert data[0]["player_count"] == 1
    assert data[0]["drawing_count"] == 1


# ---------------------------------------------------------------------------
# GET /api/plays/{id}/animation
# ---------------------------------------------------------------------------


def test_animation_payload(client, db_path):
    resp = client.get("/api/plays/play-1/animation", params={"speed_fps": 10})
    assert resp.status_code == 200
    data = resp.json()
    assert data["play_id"] == "play-1"
    assert data["total_duration"] == pytest.approx(2000.0)
    route = data["route_timings"]["d1"]
    assert route["duration"] == pytest.approx(1000.0)
    assert route["segments"][0]["type"] == "line"
    state = data["player_states"][0]
    assert state["route_id"] == "d1"
    assert state["start_position"] == {"x": 0.0, "y": 0.0}


def test_animation_default_speed(client, db_path):
    data = client.get("/api/plays/play-1/animation").json()
    # 10 ft at 15 ft/s
    assert data["route_timings"]["d1"]["duration"] == pytest.approx(10 / 15 * 1000)


@pytest.mark.parametrize("speed", [0, -3])
def test_animation_bad_speed_422(client, db_path, speed):
    resp = client.get("/api/plays/play-1/animation", params={"speed_fps": speed})
    assert resp.status_code == 422


def test_animation_missing_play_404(client, db_path):
    assert client.get("/api/plays/nope/animation").status_code == 404
