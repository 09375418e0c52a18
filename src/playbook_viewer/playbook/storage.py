"""PlayStorage: persists play content to SQLite.

Each play is one row holding its content as JSON.  The animation engine only
ever reads whole plays, so players and drawings are not normalised into
their own tables.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid

from playbook_viewer.playbook.models import PlayContent

_logger = logging.getLogger(__name__)

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;

CREATE TABLE IF NOT EXISTS plays (
    id           TEXT PRIMARY KEY,
    name         TEXT NOT NULL DEFAULT '',
    content_json TEXT NOT NULL,
    created_at   TEXT NOT NULL
                 DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    updated_at   TEXT NOT NULL
                 DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_plays_name ON plays (name);
"""

_UPSERT_PLAY = """
INSERT INTO plays (id, name, content_json)
VALUES (?, ?, ?)
ON CONFLICT (id) DO UPDATE SET
    name         = excluded.name,
    content_json = excluded.content_json,
    updated_at   = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
"""

_LIST_PLAYS = """
SELECT id,
       name,
       json_array_length(content_json, '$.players')  AS player_count,
       json_array_length(content_json, '$.drawings') AS drawing_count,
       created_at,
       updated_at
FROM   plays
ORDER  BY name, id
"""


class PlayStorage:
    """Stores and retrieves :class:`PlayContent` in a SQLite database.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "playbook.db") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save_play(self, play: PlayContent) -> str:
        """Insert or replace *play* and return its ID.

        A play with an empty ID is assigned a new UUID.
        """
        if not play.id:
            play.id = uuid.uuid4().hex
        self._conn.execute(
            _UPSERT_PLAY,
            (play.id, play.name, json.dumps(play.to_dict())),
        )
        self._conn.commit()
        _logger.info("Stored play %s (%r)", play.id, play.name)
        return play.id

    def get_play(self, play_id: str) -> PlayContent | None:
        """Return the play with *play_id*, or None if absent."""
        row = self._conn.execute(
            "SELECT content_json FROM plays WHERE id = ?", (play_id,)
        ).fetchone()
        if row is None:
            return None
        return PlayContent.from_dict(json.loads(row["content_json"]))

    def list_plays(self) -> list[dict]:
        """Return summary rows (id, name, counts, timestamps) ordered by name."""
        return [dict(r) for r in self._conn.execute(_LIST_PLAYS).fetchall()]

    def delete_play(self, play_id: str) -> bool:
        """Delete a play; return True if a row was removed."""
        cursor = self._conn.execute("DELETE FROM plays WHERE id = ?", (play_id,))
        self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        self._conn.close()
