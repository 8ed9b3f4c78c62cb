#!/usr/bin/env python3
"""Authenticate with Ring cloud and save session for local testing.

Saves the username and account id to .ring-session (JSON) for use by other
tools. The authentication token is never written to disk.
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

from aioring import (  # noqa: E402
    DeviceRegistration,
    RingClient,
    RingError,
)


async def async_main() -> int:
    parser = argparse.ArgumentParser(description="Login to Ring cloud.")
    parser.add_argument("--username", help="Ring account email")
    parser.add_argument("--password", help="Ring account password")
    parser.add_argument("--hardware-id", default="unspecified", help="Client hardware id")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    username = args.username or input("Email: ")
    password = args.password or getpass("Password: ")

    async with aiohttp.ClientSession() as session:
        client = RingClient(username, password, session=session)
        try:
            ring_session = await client.async_authenticate(
                DeviceRegistration(hardware_id=args.hardware_id)
            )
            devices = await client.async_get_ring_devices()
        except RingError as err:
            print(f"Error: {err}", file=sys.stderr)
            return 1

    if not client.is_authenticated:
        print("Error: Ring returned no authentication token", file=sys.stderr)
        return 1

    session_data = {
        "username": username,
        "account_id": ring_session.profile.id,
    }
    SESSION_FILE.write_text(json.dumps(session_data, indent=2) + "\n")

    print(f"Logged in as {ring_session.profile.email} (id={ring_session.profile.id})")
    for doorbot in devices.doorbots + devices.stickup_cams:
        print(f"  doorbot {doorbot.id}: {doorbot.description} [{doorbot.kind}]")
    for chime in devices.chimes:
        print(f"  chime   {chime.id}: {chime.description} [{chime.kind}]")
    print(f"Session saved to {SESSION_FILE.name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(async_main()))
