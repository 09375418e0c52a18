"""Tests for FrameRenderer."""

from __future__ import annotations

import math

import pytest

from playbook_viewer.geometry.models import Coordinate
from playbook_viewer.overlay.renderer import (
    FrameRenderer,
    format_time,
    has_moved,
    line_end,
    line_end_strokes,
)
from playbook_viewer.playback.session import PlaybackSession
from playbook_viewer.playbook.models import Player
from playbook_viewer.timing.aggregator import AnimationTimingAggregator
from tests.conftest import make_drawing, make_play

# ---------------------------------------------------------------------------
# format_time / has_moved
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "ms, expected",
    [(0, "0.0s"), (1500, "1.5s"), (2000, "2.0s"), (1234, "1.2s")],
)
def test_format_time(ms, expected):
    assert format_time(ms) == expected


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (0.0, 0.0, False),
        (0.5, 0.5, False),
        (0.6, 0.0, True),
        (0.0, -0.6, True),
    ],
)
def test_has_moved_threshold(x, y, expected):
    assert has_moved(0.0, 0.0, x, y) is expected


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def _setup():
    play = make_play(
        players=[Player("p1", 0, 0, label="X", color="#ff0000"), Player("p2", 5, 5, label="Y")],
        drawings=[
            make_drawing(),
            make_drawing("deco", coords={"a": (0, 20), "b": (20, 20)}, player_id=None),
        ],
    )
    session = PlaybackSession()
    session.load_play(AnimationTimingAggregator(10.0).aggregate(play))
    return session, FrameRenderer(play)


def test_render_header_fields():
    session, renderer = _setup()
    session.seek(0.25)
    frame = renderer.render(session.state)
    assert frame["time"] == "0.5s"
    assert frame["duration"] == "2.0s"
    assert frame["progress_percent"] == pytest.approx(25.0)
    assert frame["phase"] == "ready"
    assert frame["is_playing"] is False
    assert frame["speed"] == 1.0


def test_render_players():
    session, renderer = _setup()
    session.seek(0.25)
    players = {p["player_id"]: p for p in renderer.render(session.state)["players"]}
    assert players["p1"]["x"] == pytest.approx(5.0)
    assert players["p1"]["label"] == "X"
    assert players["p1"]["color"] == "#ff0000"
    assert players["p1"]["progress"] == pytest.approx(0.5)
    assert players["p1"]["heading"] == pytest.approx(0.0)
    # stationary players face downfield
    assert players["p2"]["heading"] == pytest.approx(math.pi / 2)


def test_route_reveal_offsets():
    session, renderer = _setup()
    session.seek(0.25)
    (route,) = renderer.render(session.state)["routes"]
    assert route["drawing_id"] == "d1"
    assert route["path_length"] == pytest.approx(10.0)
    assert route["dash_offset"] == pytest.approx(5.0)
    assert route["points"] == [(0.0, 0.0), (10.0, 0.0)]


def test_route_fully_hidden_at_start_and_shown_at_end():
    session, renderer = _setup()
    (route,) = renderer.render(session.state)["routes"]
    assert route["dash_offset"] == pytest.approx(route["path_length"])
    session.seek(1.0)
    (route,) = renderer.render(session.state)["routes"]
    assert route["dash_offset"] == pytest.approx(0.0)


def test_ghosts_hidden_when_disabled():
    session, renderer = _setup()
    session.seek(0.5)
    assert renderer.render(session.state)["ghosts"] == []


def test_ghosts_only_for_players_that_moved():
    session, renderer = _setup()
    session.toggle_ghost_trail()
    assert renderer.render(session.state)["ghosts"] == []
    session.seek(0.5)
    ghosts = renderer.render(session.state)["ghosts"]
    assert [g["player_id"] for g in ghosts] == ["p1"]
    assert (ghosts[0]["x"], ghosts[0]["y"]) == (0.0, 0.0)


def test_decorations_are_unlinked_drawings():
    _, renderer = _setup()
    frame = renderer.render(PlaybackSession().state)
    (deco,) = frame["decorations"]
    assert deco["drawing_id"] == "deco"
    assert deco["points"] == [(0.0, 20.0), (20.0, 20.0)]


def test_render_without_play():
    frame = FrameRenderer().render(PlaybackSession().state)
    assert frame["players"] == []
    assert frame["routes"] == []
    assert frame["duration"] == "0.0s"


# ---------------------------------------------------------------------------
# Line endings
# ---------------------------------------------------------------------------


def test_route_without_line_end():
    session, renderer = _setup()
    (route,) = renderer.render(session.state)["routes"]
    assert route["line_end"] is None


def test_route_arrow_at_path_end():
    drawing = make_drawing()
    drawing.style.line_end = "arrow"
    play = make_play(drawings=[drawing])
    session = PlaybackSession()
    session.load_play(AnimationTimingAggregator(10.0).aggregate(play))

    (route,) = FrameRenderer(play).render(session.state)["routes"]
    end = route["line_end"]
    assert end["kind"] == "arrow"
    assert (end["x"], end["y"]) == pytest.approx((10.0, 0.0))
    assert end["angle"] == pytest.approx(0.0)


def test_decoration_t_end():
    deco = make_drawing("deco", coords={"a": (0, 20), "b": (20, 20)}, player_id=None)
    deco.style.line_end = "tShape"
    frame = FrameRenderer(make_play(drawings=[deco])).render(PlaybackSession().state)
    end = frame["decorations"][0]["line_end"]
    assert end["kind"] == "tShape"
    assert (end["x"], end["y"]) == pytest.approx((20.0, 20.0))


def test_line_end_follows_curve_tangent():
    points = [Coordinate(0, 0), Coordinate(10, 0), Coordinate(10, 10)]
    end = line_end("arrow", [("quadratic", points)])
    assert (end["x"], end["y"]) == pytest.approx((10.0, 10.0))
    assert end["angle"] == pytest.approx(math.pi / 2, abs=0.05)


def test_line_end_skips_unknown_kind_and_empty_path():
    points = [Coordinate(0, 0), Coordinate(1, 0)]
    assert line_end("none", [("line", points)]) is None
    assert line_end("arrow", []) is None


def test_arrow_strokes():
    strokes = line_end_strokes("arrow", 0.0, 0.0, 0.0, 2.0)
    assert len(strokes) == 2
    barb_len = 7.0
    for start, tip in strokes:
        assert start == (0.0, 0.0)
        assert tip[0] == pytest.approx(-barb_len * math.cos(math.pi / 6))
        assert abs(tip[1]) == pytest.approx(barb_len * math.sin(math.pi / 6))


def test_t_strokes_perpendicular():
    (stroke,) = line_end_strokes("tShape", 0.0, 0.0, 0.0, 2.0)
    left, right = stroke
    assert left == pytest.approx((0.0, -5.0))
    assert right == pytest.approx((0.0, 5.0))
    assert line_end_strokes("none", 0.0, 0.0, 0.0, 2.0) == []
