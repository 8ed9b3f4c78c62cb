"""JSON payload decoding for the Ring API schema."""

from __future__ import annotations

import json
from dataclasses import fields
from datetime import datetime
from typing import Any, TypeVar

from .exceptions import RingDecodeError
from .models import (
    Chime,
    ChimeFeatures,
    ChimeSettings,
    DeviceAlerts,
    DeviceOwner,
    Devices,
    Doorbot,
    DoorbotFeatures,
    DoorbotHistoryEvent,
    DoorbotHistoryEventRecording,
    DoorbotReference,
    Profile,
    Session,
    SessionFeatures,
)

_T = TypeVar("_T")


def decode_json(text: str | None) -> Any:
    """Parse a response body, treating an absent body as a decode failure."""
    if not text:
        raise RingDecodeError("Empty response body")
    try:
        return json.loads(text)
    except ValueError as err:
        raise RingDecodeError(f"Invalid JSON in response: {err}") from err


def _flat(cls: type[_T], data: dict[str, Any] | None) -> _T:
    """Build a flat record from the keys of *data* that match its fields."""
    data = data or {}
    return cls(**{f.name: data[f.name] for f in fields(cls) if f.name in data})


def _owner(data: dict[str, Any] | None) -> DeviceOwner | None:
    if not data:
        return None
    return _flat(DeviceOwner, data)


def parse_session(body: Any) -> Session:
    try:
        profile = body["profile"]
        return Session(
            profile=Profile(
                id=profile["id"],
                email=profile["email"],
                first_name=profile.get("first_name"),
                last_name=profile.get("last_name"),
                phone_number=profile.get("phone_number"),
                authentication_token=profile.get("authentication_token") or "",
                hardware_id=profile.get("hardware_id"),
                app_brand=profile.get("app_brand"),
                user_flow=profile.get("user_flow"),
                explorer_program_terms=profile.get("explorer_program_terms"),
                features=_flat(SessionFeatures, profile.get("features")),
            )
        )
    except (KeyError, TypeError) as err:
        raise RingDecodeError(f"Unexpected session payload: {err!r}") from err


def _parse_chime(data: dict[str, Any]) -> Chime:
    return Chime(
        id=data["id"],
        description=data["description"],
        device_id=data["device_id"],
        time_zone=data.get("time_zone"),
        firmware_version=data.get("firmware_version"),
        kind=data.get("kind"),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        address=data.get("address"),
        owned=data.get("owned", False),
        owner=_owner(data.get("owner")),
        alerts=_flat(DeviceAlerts, data.get("alerts")),
        features=_flat(ChimeFeatures, data.get("features")),
        settings=_flat(ChimeSettings, data.get("settings")),
        do_not_disturb_seconds_left=(data.get("do_not_disturb") or {}).get(
            "seconds_left", 0
        ),
    )


def _parse_doorbot(data: dict[str, Any]) -> Doorbot:
    battery_life = data.get("battery_life")
    return Doorbot(
        id=data["id"],
        description=data["description"],
        device_id=data["device_id"],
        time_zone=data.get("time_zone"),
        firmware_version=data.get("firmware_version"),
        kind=data.get("kind"),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        address=data.get("address"),
        # Ring reports battery_life as a string for some models
        battery_life=int(battery_life) if battery_life is not None else None,
        external_connection=data.get("external_connection", False),
        subscribed=data.get("subscribed", False),
        subscribed_motions=data.get("subscribed_motions", False),
        owned=data.get("owned", False),
        owner=_owner(data.get("owner")),
        alerts=_flat(DeviceAlerts, data.get("alerts")),
        features=_flat(DoorbotFeatures, data.get("features")),
    )


def parse_devices(body: Any) -> Devices:
    try:
        return Devices(
            chimes=[_parse_chime(c) for c in body.get("chimes", [])],
            doorbots=[_parse_doorbot(d) for d in body.get("doorbots", [])],
            authorized_doorbots=[
                _parse_doorbot(d) for d in body.get("authorized_doorbots", [])
            ],
            stickup_cams=[
                _parse_doorbot(d) for d in body.get("stickup_cams", [])
            ],
        )
    except (AttributeError, KeyError, TypeError, ValueError) as err:
        raise RingDecodeError(f"Unexpected devices payload: {err!r}") from err


def _parse_history_event(data: dict[str, Any]) -> DoorbotHistoryEvent:
    doorbot = data.get("doorbot")
    recording = data.get("recording")
    return DoorbotHistoryEvent(
        id=data["id"],
        kind=data["kind"],
        created_at=datetime.fromisoformat(data["created_at"]),
        answered=data.get("answered", False),
        favorite=data.get("favorite", False),
        snapshot_url=data.get("snapshot_url"),
        doorbot=(
            DoorbotReference(id=doorbot["id"], description=doorbot.get("description"))
            if doorbot
            else None
        ),
        recording=(
            DoorbotHistoryEventRecording(status=recording.get("status"))
            if recording is not None
            else None
        ),
    )


def parse_history(body: Any) -> list[DoorbotHistoryEvent]:
    if not isinstance(body, list):
        raise RingDecodeError(
            f"Expected a list of history events, got {type(body).__name__}"
        )
    try:
        return [_parse_history_event(event) for event in body]
    except (AttributeError, KeyError, TypeError, ValueError) as err:
        raise RingDecodeError(f"Unexpected history payload: {err!r}") from err
