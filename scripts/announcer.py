"""Announcer entry point — game state endpoint plus audio notifications.

Point the game's state integration config at ``http://<host>:<port>/``.
Press Ctrl+C to quit.

Usage:
    uv run python scripts/announcer.py
    uv run python scripts/announcer.py --settings my_settings.json --port 3000
    uv run python scripts/announcer.py --no-audio          # log only, no sound
"""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

load_dotenv()

import uvicorn  # noqa: E402

from match_announcer.hotpath.audio import AudioDispatcher, LoggingSink, SoundDeviceSink  # noqa: E402
from match_announcer.hotpath.engine import AnnouncerEngine  # noqa: E402
from match_announcer.hotpath.router import NotificationRouter, SoundLibrary  # noqa: E402
from match_announcer.settings.store import DEFAULT_SETTINGS_FILE, SettingsStore  # noqa: E402
from match_announcer.web.app import create_app  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Match event audio announcer")
    ap.add_argument(
        "--settings",
        default=os.environ.get("ANNOUNCER_SETTINGS", DEFAULT_SETTINGS_FILE),
        help="Settings JSON file",
    )
    ap.add_argument("--host", default=os.environ.get("ANNOUNCER_HOST", "127.0.0.1"))
    ap.add_argument("--port", type=int, default=int(os.environ.get("ANNOUNCER_PORT", "3000")))
    ap.add_argument(
        "--sound-dir",
        default=os.environ.get("ANNOUNCER_SOUND_DIR"),
        help="Override the bundled asset root (expects a sound/ subdirectory)",
    )
    ap.add_argument("--no-audio", action="store_true", help="Disable audio output")
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = SettingsStore.load(args.settings)
    dispatcher = AudioDispatcher(LoggingSink if args.no_audio else SoundDeviceSink)
    router = NotificationRouter(dispatcher, SoundLibrary(args.sound_dir))
    engine = AnnouncerEngine(store, router)
    engine.set_volume(store.current.global_.volume)

    app = create_app(engine, store)
    print(f"Running at http://{args.host}:{args.port}", flush=True)
    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")


if __name__ == "__main__":
    main()
