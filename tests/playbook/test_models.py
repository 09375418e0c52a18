"""Tests for play content models."""

from __future__ import annotations

import pytest

from playbook_viewer.playbook.models import Drawing, PlayContent
from tests.conftest import play_dict


def test_from_wire_json():
    play = PlayContent.from_dict(play_dict())
    assert play.id == "play-1"
    assert play.players[0].label == "X"
    drawing = play.drawings[0]
    assert drawing.player_id == "p1"
    assert drawing.segments[0].point_ids == ["a", "b"]
    assert drawing.points["b"].x == 10.0
    assert drawing.points["a"].role == "start"
    assert drawing.style.stroke_width == 3.0
    assert drawing.style.path_mode == "sharp"


def test_to_dict_round_trips():
    play = PlayContent.from_dict(play_dict())
    assert PlayContent.from_dict(play.to_dict()) == play


def test_points_as_list():
    drawing = Drawing.from_dict(
        {
            "id": "d",
            "points": [{"id": "a", "x": 1, "y": 2}, {"id": "b", "x": 3, "y": 4}],
            "segments": [{"type": "line", "pointIds": ["a", "b"]}],
        }
    )
    assert set(drawing.points) == {"a", "b"}
    assert drawing.player_id is None
    assert drawing.style.path_mode == "sharp"


def test_snake_case_keys_accepted():
    drawing = Drawing.from_dict(
        {
            "id": "d",
            "player_id": "p7",
            "points": {},
            "segments": [{"type": "cubic", "point_ids": ["a", "b", "c", "d"]}],
            "style": {"path_mode": "curve"},
        }
    )
    assert drawing.player_id == "p7"
    assert drawing.segments[0].point_ids == ["a", "b", "c", "d"]
    assert drawing.style.path_mode == "curve"


def test_missing_collections_default_empty():
    play = PlayContent.from_dict({"id": "x"})
    assert play.players == []
    assert play.drawings == []


@pytest.mark.parametrize(
    "bad",
    [
        {},
        {"id": "x", "players": [{"id": "p"}]},
        {"id": "x", "players": [{"id": "p", "x": "left", "y": 0}]},
        {"id": "x", "drawings": [{"id": "d", "segments": [{"pointIds": []}]}]},
    ],
)
def test_malformed_content_raises_value_error(bad):
    with pytest.raises(ValueError, match="Malformed play content"):
        PlayContent.from_dict(bad)


def test_pre_snap_motion_parsed():
    raw = play_dict()
    raw["drawings"][0]["preSnapMotion"] = {"type": "motion", "snapPointId": "b"}
    drawing = PlayContent.from_dict(raw).drawings[0]
    assert drawing.pre_snap_motion.type == "motion"
    assert drawing.pre_snap_motion.snap_point_id == "b"
    assert drawing.to_dict()["preSnapMotion"] == {"type": "motion", "snapPointId": "b"}


def test_no_pre_snap_motion_by_default():
    drawing = PlayContent.from_dict(play_dict()).drawings[0]
    assert drawing.pre_snap_motion is None
    assert "preSnapMotion" not in drawing.to_dict()
