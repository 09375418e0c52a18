"""Open one or more plays in the animated viewer.

Plays come from a JSON file, the local SQLite store, or the plays API.
Shift+Left / Shift+Right step between plays when several are given.

Usage:
    uv run python scripts/view_play.py --file play.json
    uv run python scripts/view_play.py --db playbook.db --play <id> --play <id>
    uv run python scripts/view_play.py --api https://example.test --play <id>
    uv run python scripts/view_play.py --file play.json --headless   # print frames
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from playbook_viewer.overlay.renderer import FrameRenderer  # noqa: E402
from playbook_viewer.overlay.window import ViewerWindow  # noqa: E402
from playbook_viewer.playback.controls import PlayQueue  # noqa: E402
from playbook_viewer.playback.driver import PlaybackDriver  # noqa: E402
from playbook_viewer.playback.scheduler import ManualFrameScheduler  # noqa: E402
from playbook_viewer.playback.session import PlaybackSession  # noqa: E402
from playbook_viewer.playbook.client import PlayContentClient, PlayFetchError  # noqa: E402
from playbook_viewer.playbook.models import PlayContent  # noqa: E402
from playbook_viewer.playbook.storage import PlayStorage  # noqa: E402
from playbook_viewer.timing.models import PLAYER_SPEED_FPS  # noqa: E402


def _load_file(path: str) -> list[PlayContent]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict) and "play" in data:
        data = data["play"]
    items = data if isinstance(data, list) else [data]
    return [PlayContent.from_dict(d) for d in items]


def _load_db(db_path: str, play_ids: list[str]) -> list[PlayContent]:
    storage = PlayStorage(db_path)
    try:
        ids = play_ids or [r["id"] for r in storage.list_plays()]
        plays = []
        for play_id in ids:
            play = storage.get_play(play_id)
            if play is None:
                print(f"WARNING: play {play_id} not found in {db_path}", file=sys.stderr)
                continue
            plays.append(play)
        return plays
    finally:
        storage.close()


def _load_api(base_url: str, session_token: str | None, play_ids: list[str]) -> list[PlayContent]:
    client = PlayContentClient(base_url, session_token=session_token)
    plays = []
    for play_id in play_ids:
        try:
            plays.append(client.fetch_play(play_id))
        except PlayFetchError as exc:
            print(f"WARNING: {play_id}: {exc}", file=sys.stderr)
    return plays


def _run_headless(session: PlaybackSession, renderer: FrameRenderer, every_ms: float) -> None:
    """Play to completion on a manual clock and print a frame every *every_ms*."""
    scheduler = ManualFrameScheduler()
    done = []
    driver = PlaybackDriver(session, scheduler, on_complete=lambda: done.append(True))
    session.play()

    next_print = 0.0
    while not done and scheduler.pending_count:
        scheduler.step()
        state = session.state
        if state.current_time >= next_print or done:
            frame = renderer.render(state)
            players = "  ".join(
                f"{p['label'] or p['player_id']}=({p['x']:.1f},{p['y']:.1f})"
                for p in frame["players"]
            )
            print(f"{frame['time']:>6} {frame['progress_percent']:5.1f}%  {players}")
            next_print += every_ms
    driver.close()


def main() -> None:
    ap = argparse.ArgumentParser(description="Playbook Viewer: animate plays")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--file", help="Play JSON file (object, list, or {'play': ...})")
    src.add_argument("--api", default=None, help="Plays API base URL")
    ap.add_argument(
        "--db",
        default=os.environ.get("PLAYBOOK_VIEWER_DB", "playbook.db"),
        help="SQLite database path",
    )
    ap.add_argument("--play", action="append", default=[], help="Play ID (repeatable)")
    ap.add_argument(
        "--speed-fps",
        type=float,
        default=float(os.environ.get("PLAYBOOK_VIEWER_SPEED_FPS", PLAYER_SPEED_FPS)),
        help="Player speed in feet per second",
    )
    ap.add_argument("--loop", action="store_true", help="Start with loop mode on")
    ap.add_argument("--ghost", action="store_true", help="Start with the ghost trail on")
    ap.add_argument("--headless", action="store_true", help="Print frames instead of a window")
    ap.add_argument("--print-every", type=float, default=250.0, help="Headless print interval, ms")
    ap.add_argument("--scale", type=float, default=8.0, help="Pixels per foot")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    api_url = args.api or os.environ.get("PLAYBOOK_VIEWER_API_URL")
    if args.file:
        plays = _load_file(args.file)
    elif api_url and args.play:
        plays = _load_api(api_url, os.environ.get("PLAYBOOK_VIEWER_SESSION"), args.play)
    else:
        plays = _load_db(args.db, args.play)

    if not plays:
        print("ERROR: no plays to show.", file=sys.stderr)
        sys.exit(1)

    session = PlaybackSession()
    if args.loop and not args.headless:
        session.toggle_loop()
    if args.ghost:
        session.toggle_ghost_trail()

    queue = PlayQueue(session, plays, speed_fps=args.speed_fps)
    renderer = FrameRenderer(queue.go_to(0))

    def _step(move) -> None:
        if move():
            renderer.set_play(queue.current)

    if args.headless:
        for index in range(len(queue)):
            renderer.set_play(queue.go_to(index))
            play = queue.current
            print(f"\n{play.name or play.id}  ({session.formatted_duration})")
            _run_headless(session, renderer, args.print_every)
        return

    window = ViewerWindow(
        session,
        renderer,
        pixels_per_foot=args.scale,
        on_prev_play=lambda: _step(queue.previous),
        on_next_play=lambda: _step(queue.next),
    )
    print("Space play/pause · ←/→ scrub · Shift+←/→ prev/next · 1-5 speed · "
          "R reset · L loop · G ghost · Esc quit", flush=True)
    window.run()


if __name__ == "__main__":
    main()
