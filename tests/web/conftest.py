"""Shared fixtures for web tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from playbook_viewer.playbook.models import PlayContent
from playbook_viewer.playbook.storage import PlayStorage
from playbook_viewer.web.app import app
from tests.conftest import play_dict


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_path(tmp_path):
    """Point the app at a fresh SQLite file holding one play (``play-1``)."""
    path = str(tmp_path / "plays.db")
    storage = PlayStorage(path)
    try:
        storage.save_play(PlayContent.from_dict(play_dict()))
    finally:
        storage.close()
    with patch("playbook_viewer.web.app._DEFAULT_DB", path):
        yield path
