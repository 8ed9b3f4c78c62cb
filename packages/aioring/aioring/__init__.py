"""aioring — async Python client for the Ring doorbell cloud API."""

from .auth import Credentials
from .client import API_VERSION, RING_API_BASE_URL, RingClient
from .exceptions import (
    RingAuthError,
    RingConnectionError,
    RingDecodeError,
    RingError,
    RingInvalidArgumentError,
    RingNotAuthenticatedError,
    RingRequestTimeout,
    RingTransportError,
)
from .models import (
    Chime,
    ChimeFeatures,
    ChimeSettings,
    DeviceAlerts,
    DeviceOwner,
    DeviceRegistration,
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
from .transport import (
    DEFAULT_TIMEOUT,
    AiohttpTransport,
    ByteStream,
    ResponseStream,
    RingTransport,
)

__all__ = [
    # auth
    "Credentials",
    # client
    "API_VERSION",
    "RING_API_BASE_URL",
    "RingClient",
    # transport
    "DEFAULT_TIMEOUT",
    "AiohttpTransport",
    "ByteStream",
    "ResponseStream",
    "RingTransport",
    # models
    "Chime",
    "ChimeFeatures",
    "ChimeSettings",
    "DeviceAlerts",
    "DeviceOwner",
    "DeviceRegistration",
    "Devices",
    "Doorbot",
    "DoorbotFeatures",
    "DoorbotHistoryEvent",
    "DoorbotHistoryEventRecording",
    "DoorbotReference",
    "Profile",
    "Session",
    "SessionFeatures",
    # exceptions
    "RingAuthError",
    "RingConnectionError",
    "RingDecodeError",
    "RingError",
    "RingInvalidArgumentError",
    "RingNotAuthenticatedError",
    "RingRequestTimeout",
    "RingTransportError",
]
