"""HTTP transport for the Ring API, one exchange per call."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Mapping
from types import TracebackType
from typing import Protocol
from urllib.parse import urlsplit

import aiohttp

from .exceptions import (
    RingAuthError,
    RingConnectionError,
    RingDecodeError,
    RingRequestTimeout,
    RingTransportError,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float = 60.0  # seconds, for every exchange
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"


class ByteStream(Protocol):
    """Forward-only, single-use byte stream. The consumer must close it."""

    async def read(self, n: int = -1) -> bytes: ...

    def close(self) -> None: ...


class RingTransport(Protocol):
    """Capability used by RingClient for every HTTP exchange.

    AiohttpTransport is the network implementation; tests pass a fake
    with the same three coroutines.
    """

    async def async_get(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str | None: ...

    async def async_form_post(
        self,
        url: str,
        form_fields: Mapping[str, str],
        header_fields: Mapping[str, str],
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str | None: ...

    async def async_download_file(
        self, url: str, *, timeout: float = DEFAULT_TIMEOUT
    ) -> ByteStream: ...


def encode_form(form_fields: Mapping[str, str]) -> bytes:
    """Join *form_fields* as ``key=value`` pairs separated by ``&``.

    Values are written verbatim; callers pre-escape anything that needs it.
    """
    return "&".join(
        f"{key}={value}" for key, value in form_fields.items()
    ).encode("utf-8")


def _endpoint(url: str) -> str:
    """URL path only; query strings carry the auth token."""
    return urlsplit(url).path


def _check_status(resp: aiohttp.ClientResponse, endpoint: str) -> None:
    if resp.status == 401:
        raise RingAuthError(401, f"Unauthorized for {endpoint}")
    if resp.status >= 400:
        raise RingTransportError(
            resp.status, f"{endpoint} returned HTTP {resp.status}"
        )


async def _read_text(resp: aiohttp.ClientResponse, endpoint: str) -> str:
    try:
        return await resp.text()
    except UnicodeDecodeError as err:
        raise RingDecodeError(f"Undecodable body from {endpoint}: {err}") from err


class ResponseStream:
    """Live aiohttp response body exposed as a ByteStream.

    Nothing is buffered; close() releases the underlying connection.
    """

    def __init__(
        self,
        response: aiohttp.ClientResponse,
        endpoint: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._response: aiohttp.ClientResponse = response
        self._endpoint: str = endpoint
        self._timeout: float = timeout

    @property
    def status(self) -> int:
        return self._response.status

    @property
    def content_type(self) -> str:
        return self._response.content_type

    @property
    def closed(self) -> bool:
        return self._response.closed

    async def read(self, n: int = -1) -> bytes:
        try:
            return await self._response.content.read(n)
        except asyncio.TimeoutError as err:
            raise RingRequestTimeout(self._endpoint, self._timeout) from err
        except aiohttp.ClientError as err:
            raise RingConnectionError(str(err)) from err

    def iter_chunked(self, size: int) -> AsyncIterator[bytes]:
        return self._response.content.iter_chunked(size)

    def close(self) -> None:
        self._response.close()

    async def __aenter__(self) -> ResponseStream:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class AiohttpTransport:
    """RingTransport backed by an aiohttp.ClientSession.

    Does not own the session — caller is responsible for creating and
    closing it. No retries: every failure surfaces to the caller.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self._session: aiohttp.ClientSession = session

    async def async_get(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str | None:
        endpoint = _endpoint(url)
        _LOGGER.debug("GET %s", endpoint)
        try:
            async with self._session.get(
                url,
                headers=dict(headers) if headers else None,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                _check_status(resp, endpoint)
                body = await _read_text(resp, endpoint)
        except asyncio.TimeoutError as err:
            raise RingRequestTimeout(endpoint, timeout) from err
        except aiohttp.ClientError as err:
            raise RingConnectionError(str(err)) from err

        return body or None

    async def async_form_post(
        self,
        url: str,
        form_fields: Mapping[str, str],
        header_fields: Mapping[str, str],
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> str | None:
        endpoint = _endpoint(url)
        data = encode_form(form_fields)
        _LOGGER.debug("POST %s (%d form fields)", endpoint, len(form_fields))
        try:
            async with self._session.post(
                url,
                data=data,
                headers={**header_fields, "Content-Type": FORM_CONTENT_TYPE},
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                _check_status(resp, endpoint)
                body = await _read_text(resp, endpoint)
        except asyncio.TimeoutError as err:
            raise RingRequestTimeout(endpoint, timeout) from err
        except aiohttp.ClientError as err:
            raise RingConnectionError(str(err)) from err

        return body or None

    async def async_download_file(
        self, url: str, *, timeout: float = DEFAULT_TIMEOUT
    ) -> ResponseStream:
        """Start a ranged GET and hand back the unread response body.

        The timeout bounds connecting and each socket read, not the whole
        transfer, since the body is consumed by the caller.
        """
        endpoint = _endpoint(url)
        _LOGGER.debug("GET %s (download)", endpoint)
        try:
            resp = await self._session.get(
                url,
                headers={"Accept": "*/*", "Range": "bytes=0-"},
                allow_redirects=True,
                timeout=aiohttp.ClientTimeout(
                    total=None, connect=timeout, sock_read=timeout
                ),
            )
        except asyncio.TimeoutError as err:
            raise RingRequestTimeout(endpoint, timeout) from err
        except aiohttp.ClientError as err:
            raise RingConnectionError(str(err)) from err

        try:
            _check_status(resp, endpoint)
        except RingTransportError:
            resp.close()
            raise

        return ResponseStream(resp, endpoint, timeout)
