"""GET /plays/{id} timing summary page."""

from __future__ import annotations


def test_play_page_renders(client, db_path):
    resp = client.get("/plays/play-1", params={"speed_fps": 10})
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    html = resp.text
    assert "Test Play" in html
    assert "2.0s" in html
    assert "animation-payload" in html


def test_play_page_lists_routes(client, db_path):
    html = client.get("/plays/play-1", params={"speed_fps": 10}).text
    assert "<td>d1</td>" in html
    assert "<td>X</td>" in html


def test_play_page_missing_404(client, db_path):
    assert client.get("/plays/nope").status_code == 404


def test_play_page_bad_speed_422(client, db_path):
    assert client.get("/plays/play-1", params={"speed_fps": 0}).status_code == 422
