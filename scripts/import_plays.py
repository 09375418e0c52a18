"""Import play JSON files into the local SQLite store.

Each file may hold one play object, a list of plays, or an API response of
the form ``{"play": {...}}``.

Usage:
    uv run python scripts/import_plays.py plays/*.json
    uv run python scripts/import_plays.py --db playbook.db trips_right.json
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from playbook_viewer.playbook.models import PlayContent  # noqa: E402
from playbook_viewer.playbook.storage import PlayStorage  # noqa: E402
from playbook_viewer.timing.aggregator import AnimationTimingAggregator  # noqa: E402


def _plays_in(path: str) -> list[dict]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict) and "play" in data:
        data = data["play"]
    return data if isinstance(data, list) else [data]


def main() -> None:
    ap = argparse.ArgumentParser(description="Import plays into the SQLite store")
    ap.add_argument("files", nargs="+", help="Play JSON files")
    ap.add_argument(
        "--db",
        default=os.environ.get("PLAYBOOK_VIEWER_DB", "playbook.db"),
        help="SQLite database path",
    )
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    aggregator = AnimationTimingAggregator()
    storage = PlayStorage(args.db)
    failed = 0
    try:
        for path in args.files:
            try:
                items = _plays_in(path)
            except (OSError, json.JSONDecodeError) as exc:
                print(f"ERROR: {path}: {exc}", file=sys.stderr)
                failed += 1
                continue
            for item in items:
                try:
                    play = PlayContent.from_dict(item)
                except ValueError as exc:
                    print(f"ERROR: {path}: {exc}", file=sys.stderr)
                    failed += 1
                    continue
                play_id = storage.save_play(play)
                seconds = aggregator.estimate_duration(play.drawings) / 1000
                print(f"  {play_id}  {play.name or '(unnamed)'}  {seconds:.1f}s")
    finally:
        storage.close()

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
