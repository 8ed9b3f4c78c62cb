"""Tests for aioring.transport — AiohttpTransport with mocked HTTP."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp import (
    ClientConnectionError,
    ClientPayloadError,
    ClientSession,
    ServerTimeoutError,
)
from aioresponses import aioresponses

from aioring.exceptions import (
    RingAuthError,
    RingConnectionError,
    RingDecodeError,
    RingRequestTimeout,
    RingTransportError,
)
from aioring.transport import (
    DEFAULT_TIMEOUT,
    FORM_CONTENT_TYPE,
    AiohttpTransport,
    ResponseStream,
    encode_form,
)

BASE = "https://api.ring.com/clients_api"
SESSION_URL = f"{BASE}/session"
DEVICES_URL = f"{BASE}/ring_devices?auth_token=tok&api_version=9"
RECORDING_URL = f"{BASE}/dings/42/recording?auth_token=tok&api_version=9"


def _only_call(m: aioresponses, method: str):
    # aioresponses keys requests by normalized (sorted-query) URL
    calls = [c for (meth, _), cs in m.requests.items() if meth == method for c in cs]
    assert len(calls) == 1
    return calls[0]


@pytest.fixture
async def session():
    async with ClientSession() as s:
        yield s


@pytest.fixture
def transport(session: ClientSession) -> AiohttpTransport:
    return AiohttpTransport(session)


class TestEncodeForm:
    def test_joins_pairs_in_order(self) -> None:
        assert (
            encode_form({"device[os]": "windows", "device[hardware_id]": "hw"})
            == b"device[os]=windows&device[hardware_id]=hw"
        )

    def test_values_written_verbatim(self) -> None:
        assert (
            encode_form({"date": "2017-03-05+09%3A04%3A07Z", "name": "a b&c"})
            == b"date=2017-03-05+09%3A04%3A07Z&name=a b&c"
        )

    def test_utf8(self) -> None:
        assert encode_form({"name": "Jörg"}) == "name=Jörg".encode("utf-8")

    def test_empty(self) -> None:
        assert encode_form({}) == b""


class TestDefaults:
    def test_default_timeout_is_sixty_seconds(self) -> None:
        assert DEFAULT_TIMEOUT == 60.0


class TestAsyncGet:
    async def test_returns_body(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, body='{"chimes": []}')
            body = await transport.async_get(DEVICES_URL)

        assert body == '{"chimes": []}'

    async def test_empty_body_is_none(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, body="")
            body = await transport.async_get(DEVICES_URL)

        assert body is None

    async def test_passes_headers(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, body="{}")
            await transport.async_get(DEVICES_URL, {"X-Test": "1"})

            call = _only_call(m, "GET")

        assert call.kwargs["headers"] == {"X-Test": "1"}

    async def test_unauthorized(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, status=401)

            with pytest.raises(RingAuthError) as exc_info:
                await transport.async_get(DEVICES_URL)

        assert exc_info.value.status == 401

    async def test_server_error(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, status=500)

            with pytest.raises(RingTransportError) as exc_info:
                await transport.async_get(DEVICES_URL)

        assert exc_info.value.status == 500
        assert "tok" not in str(exc_info.value)

    async def test_connection_error(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, exception=ClientConnectionError("DNS failed"))

            with pytest.raises(RingConnectionError):
                await transport.async_get(DEVICES_URL)

    async def test_timeout(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, exception=asyncio.TimeoutError())

            with pytest.raises(RingRequestTimeout) as exc_info:
                await transport.async_get(DEVICES_URL, timeout=5.0)

        assert exc_info.value.timeout == 5.0
        assert exc_info.value.endpoint == "/clients_api/ring_devices"

    async def test_undecodable_body(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(DEVICES_URL, body=b"\xff\xfe{}", content_type="application/json")

            with pytest.raises(RingDecodeError, match="/clients_api/ring_devices"):
                await transport.async_get(DEVICES_URL)


class TestAsyncFormPost:
    async def test_posts_encoded_form(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.post(SESSION_URL, body='{"profile": {}}')
            body = await transport.async_form_post(
                SESSION_URL,
                {"device[os]": "windows", "device[hardware_id]": "hw"},
                {"Authorization": "Basic abc", "X-API-LANG": "en"},
            )

            call = _only_call(m, "POST")

        assert body == '{"profile": {}}'
        assert call.kwargs["data"] == b"device[os]=windows&device[hardware_id]=hw"
        assert call.kwargs["headers"] == {
            "Authorization": "Basic abc",
            "X-API-LANG": "en",
            "Content-Type": FORM_CONTENT_TYPE,
        }

    async def test_empty_body_is_none(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.post(SESSION_URL, body="")
            body = await transport.async_form_post(SESSION_URL, {}, {})

        assert body is None

    async def test_invalid_credentials(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.post(SESSION_URL, status=401)

            with pytest.raises(RingAuthError):
                await transport.async_form_post(SESSION_URL, {}, {})

    async def test_connection_error(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.post(SESSION_URL, exception=ClientConnectionError("reset"))

            with pytest.raises(RingConnectionError):
                await transport.async_form_post(SESSION_URL, {}, {})

    async def test_undecodable_body(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.post(SESSION_URL, body=b"\xff\xfe{}", content_type="application/json")

            with pytest.raises(RingDecodeError):
                await transport.async_form_post(SESSION_URL, {}, {})


class TestAsyncDownloadFile:
    async def test_returns_unread_stream(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, body=b"\x00\x01video", content_type="video/mp4")
            stream = await transport.async_download_file(RECORDING_URL)

            call = _only_call(m, "GET")
            assert isinstance(stream, ResponseStream)
            assert stream.status == 200
            assert stream.content_type == "video/mp4"
            assert await stream.read() == b"\x00\x01video"
            stream.close()

        assert stream.closed is True
        assert call.kwargs["headers"] == {"Accept": "*/*", "Range": "bytes=0-"}
        assert call.kwargs["allow_redirects"] is True

    async def test_partial_content_accepted(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, status=206, body=b"abc")
            stream = await transport.async_download_file(RECORDING_URL)

            async with stream:
                assert await stream.read() == b"abc"

        assert stream.closed is True

    async def test_iter_chunked(self, transport: AiohttpTransport) -> None:
        chunks = []
        with aioresponses() as m:
            m.get(RECORDING_URL, body=b"abcdef")
            stream = await transport.async_download_file(RECORDING_URL)

            async with stream:
                async for chunk in stream.iter_chunked(4):
                    chunks.append(chunk)

        assert b"".join(chunks) == b"abcdef"

    async def test_not_found(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, status=404)

            with pytest.raises(RingTransportError) as exc_info:
                await transport.async_download_file(RECORDING_URL)

        assert exc_info.value.status == 404

    async def test_unauthorized(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, status=401)

            with pytest.raises(RingAuthError):
                await transport.async_download_file(RECORDING_URL)

    async def test_connection_error(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, exception=ClientConnectionError("refused"))

            with pytest.raises(RingConnectionError):
                await transport.async_download_file(RECORDING_URL)

    async def test_timeout(self, transport: AiohttpTransport) -> None:
        with aioresponses() as m:
            m.get(RECORDING_URL, exception=asyncio.TimeoutError())

            with pytest.raises(RingRequestTimeout):
                await transport.async_download_file(RECORDING_URL)


class TestResponseStreamRead:
    async def test_read_timeout(self) -> None:
        response = MagicMock()
        response.content.read = AsyncMock(
            side_effect=ServerTimeoutError("Timeout on reading data from socket")
        )
        stream = ResponseStream(response, "/clients_api/dings/42/recording", 5.0)

        with pytest.raises(RingRequestTimeout) as exc_info:
            await stream.read(1024)

        assert exc_info.value.timeout == 5.0
        assert exc_info.value.endpoint == "/clients_api/dings/42/recording"

    async def test_read_connection_error(self) -> None:
        response = MagicMock()
        response.content.read = AsyncMock(
            side_effect=ClientPayloadError("Response payload is not completed")
        )
        stream = ResponseStream(response, "/clients_api/dings/42/recording")

        with pytest.raises(RingConnectionError):
            await stream.read(1024)
