"""Data models for aioring: frozen dataclasses mirroring the Ring API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


# ----------------------------------------------------------------------
# Authentication
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class DeviceRegistration:
    """Client device description sent along with ``POST session``.

    ``operating_system`` and ``hardware_id`` are mandatory; every other
    field is omitted from the request when empty or None.
    """

    operating_system: str = "windows"
    hardware_id: str = "unspecified"
    app_brand: str | None = "ring"
    device_model: str | None = "unspecified"
    device_name: str | None = "unspecified"
    resolution: str | None = "800x600"
    app_version: str | None = "1.3.810"
    app_installation_date: datetime | None = None
    manufacturer: str | None = "unspecified"
    device_type: str | None = "tablet"
    architecture: str | None = "x64"
    language: str | None = "en"


@dataclass(frozen=True)
class SessionFeatures:
    remote_logging_format_storing: bool = False
    remote_logging_level: int = 0
    subscriptions_enabled: bool = False
    stickupcam_setup_enabled: bool = False
    vod_enabled: bool = False
    ringplus_enabled: bool = False
    lpd_enabled: bool = False
    reactive_snoozing_enabled: bool = False
    proactive_snoozing_enabled: bool = False
    owner_proactive_snoozing_enabled: bool = False
    live_view_settings_enabled: bool = False
    delete_all_settings_enabled: bool = False
    power_cable_enabled: bool = False
    device_health_alerts_enabled: bool = False
    chime_pro_enabled: bool = False
    multiple_calls_enabled: bool = False
    ujet_enabled: bool = False
    multiple_delete_enabled: bool = False
    delete_all_enabled: bool = False
    lpd_motion_announcement_enabled: bool = False
    starred_events_enabled: bool = False
    chime_dnd_enabled: bool = False
    video_search_enabled: bool = False
    floodlight_cam_enabled: bool = False
    nw_enabled: bool = False


@dataclass(frozen=True)
class Profile:
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    authentication_token: str = ""
    hardware_id: str | None = None
    app_brand: str | None = None
    user_flow: str | None = None
    explorer_program_terms: str | None = None
    features: SessionFeatures = field(default_factory=SessionFeatures)


@dataclass(frozen=True)
class Session:
    """Result of ``POST session``."""

    profile: Profile


# ----------------------------------------------------------------------
# Devices
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class DeviceOwner:
    id: int
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class DeviceAlerts:
    connection: str | None = None   # "online", "offline"


@dataclass(frozen=True)
class ChimeFeatures:
    ringtones_enabled: bool = False


@dataclass(frozen=True)
class ChimeSettings:
    volume: int | None = None       # 0-10
    ding_audio_user_id: str | None = None
    ding_audio_id: str | None = None
    motion_audio_user_id: str | None = None
    motion_audio_id: str | None = None


@dataclass(frozen=True)
class Chime:
    id: int
    description: str
    device_id: str
    time_zone: str | None = None
    firmware_version: str | None = None
    kind: str | None = None         # "chime", "chime_pro"
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    owned: bool = False
    owner: DeviceOwner | None = None
    alerts: DeviceAlerts = field(default_factory=DeviceAlerts)
    features: ChimeFeatures = field(default_factory=ChimeFeatures)
    settings: ChimeSettings = field(default_factory=ChimeSettings)
    do_not_disturb_seconds_left: int = 0


@dataclass(frozen=True)
class DoorbotFeatures:
    motions_enabled: bool = False
    show_recordings: bool = False
    advanced_motion_enabled: bool = False
    people_only_enabled: bool = False
    shadow_correction_enabled: bool = False
    motion_message_enabled: bool = False
    night_vision_enabled: bool = False


@dataclass(frozen=True)
class Doorbot:
    id: int
    description: str
    device_id: str
    time_zone: str | None = None
    firmware_version: str | None = None
    kind: str | None = None         # "doorbell", "lpd_v1", "stickup_cam", ...
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    battery_life: int | None = None  # Percentage, None for wired units
    external_connection: bool = False
    subscribed: bool = False
    subscribed_motions: bool = False
    owned: bool = False
    owner: DeviceOwner | None = None
    alerts: DeviceAlerts = field(default_factory=DeviceAlerts)
    features: DoorbotFeatures = field(default_factory=DoorbotFeatures)


@dataclass(frozen=True)
class Devices:
    """Result of ``GET ring_devices``."""

    chimes: list[Chime] = field(default_factory=list)
    doorbots: list[Doorbot] = field(default_factory=list)
    authorized_doorbots: list[Doorbot] = field(default_factory=list)
    stickup_cams: list[Doorbot] = field(default_factory=list)


# ----------------------------------------------------------------------
# History
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class DoorbotHistoryEventRecording:
    status: str | None = None       # "ready", "processing", ...


@dataclass(frozen=True)
class DoorbotReference:
    id: int
    description: str | None = None


@dataclass(frozen=True)
class DoorbotHistoryEvent:
    """One ding from ``GET doorbots/history``."""

    id: int
    kind: str                       # "ding", "motion", "on_demand"
    created_at: datetime
    answered: bool = False
    favorite: bool = False
    snapshot_url: str | None = None
    doorbot: DoorbotReference | None = None
    recording: DoorbotHistoryEventRecording | None = None
