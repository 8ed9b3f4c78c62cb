#!/usr/bin/env python3
"""List ding history from the Ring cloud API and optionally download recordings.

Reads the username from .ring-session (created by ring-login.py) when
--username is not given. Ring has no token restore, so this authenticates
again.

    GET https://api.ring.com/clients_api/doorbots/history
    GET https://api.ring.com/clients_api/dings/{id}/recording
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from getpass import getpass
from pathlib import Path

import aiohttp

REPO_ROOT = Path(__file__).resolve().parents[1]
SESSION_FILE = REPO_ROOT / ".ring-session"
sys.path.insert(0, str(REPO_ROOT / "packages" / "aioring"))

from aioring import RingClient, RingError  # noqa: E402


async def async_main() -> int:
    parser = argparse.ArgumentParser(description="List Ring dings and fetch recordings.")
    parser.add_argument("--username", help="Ring account email")
    parser.add_argument("--limit", type=int, default=10, help="Number of events (default: 10)")
    parser.add_argument("--download", metavar="DIR", help="Save each recording as DIR/<ding id>.mp4")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    username = args.username
    if username is None and SESSION_FILE.exists():
        username = json.loads(SESSION_FILE.read_text()).get("username")
    if not username:
        print("No username given and no session found. Run: tools/ring-login.py", file=sys.stderr)
        return 1
    password = getpass(f"Password for {username}: ")

    download_dir = Path(args.download) if args.download else None
    if download_dir is not None and not download_dir.is_dir():
        print(f"Error: {download_dir} is not a directory", file=sys.stderr)
        return 1

    async with aiohttp.ClientSession() as session:
        client = RingClient(username, password, session=session)
        try:
            await client.async_authenticate()
            events = (await client.async_get_doorbots_history())[: args.limit]

            for event in events:
                status = event.recording.status if event.recording else "none"
                doorbot = event.doorbot.description if event.doorbot else "?"
                print(
                    f"{event.created_at.isoformat()}  {event.kind:<10} "
                    f"{doorbot:<20} id={event.id} recording={status}"
                )
                if download_dir is not None and status == "ready":
                    path = await client.async_get_doorbot_history_recording_and_create_file(
                        event, download_dir / f"{event.id}.mp4"
                    )
                    print(f"  saved {path}")
        except RingError as err:
            print(f"Error: {err}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(async_main()))
