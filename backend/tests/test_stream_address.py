"""Tests for the push/play address lookup."""

import asyncio

import httpx
import pytest

from models import StreamAddresses
from services.stream_address import fetch_stream_addresses

LOOKUP_URL = "https://stream.example/address"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_fetch_returns_push_and_play_urls() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"url_push": "rtmp://push.example/live/abc", "url_play_flv": "https://play.example/live/abc.flv"},
        )

    async with _client(handler) as client:
        result = await fetch_stream_addresses(LOOKUP_URL, client=client)

    assert result == StreamAddresses(
        push_url="rtmp://push.example/live/abc",
        play_url="https://play.example/live/abc.flv",
    )
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == LOOKUP_URL
    assert seen[0].headers["Content-Type"] == "application/json; charset=UTF-8"


@pytest.mark.anyio
async def test_fetch_follows_redirect_to_lookup_backend() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(302, headers={"Location": "https://stream.example/new"})
        return httpx.Response(200, json={"url_push": "rtmp://push", "url_play_flv": "https://play.flv"})

    async with _client(handler) as client:
        result = await fetch_stream_addresses("https://stream.example/old", client=client)

    assert result == StreamAddresses(push_url="rtmp://push", play_url="https://play.flv")


@pytest.mark.anyio
async def test_fetch_does_not_close_injected_client() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"url_push": "a", "url_play_flv": "b"})

    async with _client(handler) as client:
        await fetch_stream_addresses(LOOKUP_URL, client=client)
        assert client.is_closed is False


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"url_push": "rtmp://push.example/live/abc"}),
        httpx.Response(200, json={"url_push": 1, "url_play_flv": "b"}),
        httpx.Response(200, json=["url_push", "url_play_flv"]),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(500, json={"url_push": "a", "url_play_flv": "b"}),
    ],
)
async def test_fetch_returns_none_for_bad_responses(response: httpx.Response) -> None:
    async with _client(lambda request: response) as client:
        assert await fetch_stream_addresses(LOOKUP_URL, client=client) is None


@pytest.mark.anyio
async def test_fetch_returns_none_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        assert await fetch_stream_addresses(LOOKUP_URL, client=client) is None


@pytest.mark.anyio
async def test_fetch_returns_none_without_url() -> None:
    assert await fetch_stream_addresses("") is None


@pytest.mark.anyio
async def test_fetch_returns_none_for_unsupported_scheme() -> None:
    assert await fetch_stream_addresses("not-a-url") is None


@pytest.mark.anyio
@pytest.mark.parametrize("anyio_backend", ["asyncio"])
async def test_fetch_is_cancellable() -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, json={"url_push": "a", "url_play_flv": "b"})

    async with _client(handler) as client:
        task = asyncio.create_task(fetch_stream_addresses(LOOKUP_URL, client=client))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
