"""Top-level entrypoint for the aioring library."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import aiofiles
import aiohttp

from .auth import Credentials
from .exceptions import (
    RingInvalidArgumentError,
    RingNotAuthenticatedError,
)
from .models import (
    DeviceRegistration,
    Devices,
    DoorbotHistoryEvent,
    Session,
)
from .schema import decode_json, parse_devices, parse_history, parse_session
from .transport import AiohttpTransport, ByteStream, RingTransport

_LOGGER = logging.getLogger(__name__)

RING_API_BASE_URL = "https://api.ring.com/clients_api/"
API_VERSION = "9"

# Headers sent with POST session alongside the Basic authorization.
RING_API_HEADERS: dict[str, str] = {
    "Accept-Encoding": "gzip, deflate",
    "X-API-LANG": "en",
}

DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _format_installation_date(value: datetime) -> str:
    # Colons go out pre-escaped; form values are not encoded again.
    return value.strftime("%Y-%m-%d+%H%%3A%M%%3A%SZ")


def _registration_form(registration: DeviceRegistration) -> dict[str, str]:
    form: dict[str, str] = {
        "device[os]": registration.operating_system,
        "device[hardware_id]": registration.hardware_id,
    }

    optional: list[tuple[str, str | None]] = [
        ("device[app_brand]", registration.app_brand),
        ("device[metadata][device_model]", registration.device_model),
        ("device[metadata][device_name]", registration.device_name),
        ("device[metadata][resolution]", registration.resolution),
        ("device[metadata][app_version]", registration.app_version),
        (
            # Vendor spelling
            "device[metadata][app_instalation_date]",
            _format_installation_date(registration.app_installation_date)
            if registration.app_installation_date is not None
            else None,
        ),
        ("device[metadata][manufacturer]", registration.manufacturer),
        ("device[metadata][device_type]", registration.device_type),
        ("device[metadata][architecture]", registration.architecture),
        ("device[metadata][language]", registration.language),
    ]
    for key, value in optional:
        if value:
            form[key] = value
    return form


def _ding_id(event_or_id: DoorbotHistoryEvent | int | str) -> str:
    if isinstance(event_or_id, DoorbotHistoryEvent):
        return str(event_or_id.id)
    return str(event_or_id)


class RingClient:
    """One logical account session against the Ring API.

    Holds the credentials and the authentication token derived from
    ``POST session``. Every HTTP exchange goes through a RingTransport;
    pass *transport* to substitute one, otherwise an AiohttpTransport is
    built on *session*. The caller owns the aiohttp.ClientSession.

    The token is a plain attribute without locking: an authenticate
    running concurrently with fetches has no defined winner.
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: RingTransport | None = None,
    ) -> None:
        if transport is None:
            if session is None:
                raise RingInvalidArgumentError(
                    "session", "Either session or transport is required"
                )
            transport = AiohttpTransport(session)
        self._credentials: Credentials = Credentials(username, password)
        self._transport: RingTransport = transport
        self._authentication_token: str = ""
        self._session: Session | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def username(self) -> str:
        return self._credentials.username

    @property
    def password(self) -> str:
        return self._credentials.password

    @property
    def credentials_encoded(self) -> str:
        """Base64 ``username:password`` used in the Basic auth header."""
        return self._credentials.encoded

    @property
    def base_url(self) -> str:
        return RING_API_BASE_URL

    @property
    def authentication_token(self) -> str:
        return self._authentication_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._authentication_token)

    @property
    def session(self) -> Session | None:
        """Session returned by the last successful authenticate, if any."""
        return self._session

    @property
    def transport(self) -> RingTransport:
        return self._transport

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def async_authenticate(
        self,
        registration: DeviceRegistration | None = None,
        *,
        transport: RingTransport | None = None,
    ) -> Session:
        """Open a session and store its authentication token.

        Replaces any previously stored token.

        Raises:
            RingInvalidArgumentError: If operating_system or hardware_id is empty.
            RingAuthError: If the credentials are rejected.
            RingDecodeError: If the response is not a session payload.
        """
        registration = registration or DeviceRegistration()
        if not registration.operating_system:
            raise RingInvalidArgumentError(
                "operating_system", "Operating system is mandatory"
            )
        if not registration.hardware_id:
            raise RingInvalidArgumentError(
                "hardware_id", "Hardware id is mandatory"
            )

        response = await (transport or self._transport).async_form_post(
            f"{RING_API_BASE_URL}session",
            _registration_form(registration),
            {
                **RING_API_HEADERS,
                "Authorization": self._credentials.authorization_header,
            },
        )

        session = parse_session(decode_json(response))
        self._session = session
        self._authentication_token = session.profile.authentication_token
        _LOGGER.debug("Authenticated Ring account %s", session.profile.id)
        return session

    def _require_token(self) -> str:
        if not self._authentication_token:
            raise RingNotAuthenticatedError()
        return self._authentication_token

    def _url(self, path: str, token: str) -> str:
        return (
            f"{RING_API_BASE_URL}{path}"
            f"?auth_token={token}&api_version={API_VERSION}"
        )

    # ------------------------------------------------------------------
    # Devices and history
    # ------------------------------------------------------------------

    async def async_get_ring_devices(
        self, *, transport: RingTransport | None = None
    ) -> Devices:
        """Return all chimes and doorbots registered to the account.

        Raises:
            RingNotAuthenticatedError: If async_authenticate has not succeeded.
        """
        token = self._require_token()
        response = await (transport or self._transport).async_get(
            self._url("ring_devices", token)
        )
        return parse_devices(decode_json(response))

    async def async_get_doorbots_history(
        self, *, transport: RingTransport | None = None
    ) -> list[DoorbotHistoryEvent]:
        """Return ding history in the order the server sent it.

        Raises:
            RingNotAuthenticatedError: If async_authenticate has not succeeded.
        """
        token = self._require_token()
        response = await (transport or self._transport).async_get(
            self._url("doorbots/history", token)
        )
        return parse_history(decode_json(response))

    # ------------------------------------------------------------------
    # Recordings
    # ------------------------------------------------------------------

    def get_doorbot_history_recording_uri(
        self, event_or_id: DoorbotHistoryEvent | int | str
    ) -> str:
        """Recording URL for a ding. No request is made and no auth check;
        the embedded token is whatever is currently held."""
        return self._url(
            f"dings/{_ding_id(event_or_id)}/recording",
            self._authentication_token,
        )

    async def async_get_doorbot_history_recording(
        self,
        event_or_id: DoorbotHistoryEvent | int | str,
        *,
        transport: RingTransport | None = None,
    ) -> ByteStream:
        """Open the recording of a ding as a stream.

        The caller owns the returned stream and must close it.

        Raises:
            RingNotAuthenticatedError: If async_authenticate has not succeeded.
        """
        token = self._require_token()
        return await (transport or self._transport).async_download_file(
            self._url(f"dings/{_ding_id(event_or_id)}/recording", token)
        )

    async def async_get_doorbot_history_recording_and_create_file(
        self,
        event_or_id: DoorbotHistoryEvent | int | str,
        destination_path: str | Path,
        *,
        transport: RingTransport | None = None,
    ) -> Path:
        """Download the recording of a ding into *destination_path*.

        The destination is validated before any request is made. The
        stream is closed whether or not the copy succeeds; a failed copy
        may leave a partial file behind.

        Raises:
            RingInvalidArgumentError: If the path is blank or its directory
                does not exist.
            RingNotAuthenticatedError: If async_authenticate has not succeeded.
            OSError: If the file cannot be written.
        """
        if not str(destination_path).strip():
            raise RingInvalidArgumentError(
                "destination_path",
                f"The filename is empty: '{destination_path}'",
                path=str(destination_path),
            )

        destination = Path(destination_path)
        directory = destination.parent
        if not directory.is_dir():
            raise RingInvalidArgumentError(
                "destination_path",
                f"The directory path is not valid for saving files: '{directory}'",
                path=str(directory),
            )

        stream = await self.async_get_doorbot_history_recording(
            event_or_id, transport=transport
        )
        try:
            async with aiofiles.open(destination, "wb") as file:
                while chunk := await stream.read(DOWNLOAD_CHUNK_SIZE):
                    await file.write(chunk)
        finally:
            stream.close()

        _LOGGER.debug(
            "Saved recording of ding %s to %s", _ding_id(event_or_id), destination
        )
        return destination
