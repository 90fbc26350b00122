"""Tests for RealHttpClient over an httpx mock transport."""

from collections.abc import AsyncIterator

import httpx
import pytest

from cpm.errors import ArchiveTooLargeError, HttpError
from cpm.integrations.http.real import RealHttpClient


def _client(handler: httpx.MockTransport) -> RealHttpClient:
    return RealHttpClient(client=httpx.AsyncClient(transport=handler))


async def test_get_text_returns_body() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="registry"))
    http = _client(transport)

    assert await http.get_text("https://example.com/r.json", timeout=5) == "registry"
    await http.aclose()


async def test_status_error_maps_to_http_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    http = _client(transport)

    with pytest.raises(HttpError) as exc_info:
        await http.get_text("https://example.com/missing", timeout=5)

    assert exc_info.value.status_code == 404
    await http.aclose()


async def test_transport_error_maps_to_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = _client(httpx.MockTransport(handler))

    with pytest.raises(HttpError, match="connection refused"):
        await http.get_text("https://example.com/r.json", timeout=5)
    await http.aclose()


async def test_download_returns_bytes() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"tarball"))
    http = _client(transport)

    assert await http.download("https://example.com/p.tgz", max_bytes=100, timeout=5) == b"tarball"
    await http.aclose()


async def test_download_rejects_oversized_body() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"x" * 200))
    http = _client(transport)

    with pytest.raises(ArchiveTooLargeError):
        await http.download("https://example.com/p.tgz", max_bytes=100, timeout=5)
    await http.aclose()


async def test_download_rejects_declared_length_before_streaming() -> None:
    streamed: list[bytes] = []

    async def body() -> AsyncIterator[bytes]:
        streamed.append(b"started")
        yield b"x" * 10

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Length": "1000"}, content=body())

    http = _client(httpx.MockTransport(handler))

    with pytest.raises(ArchiveTooLargeError):
        await http.download("https://example.com/p.tgz", max_bytes=100, timeout=5)

    assert streamed == []
    await http.aclose()
