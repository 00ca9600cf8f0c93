"""Tests for token caching and the streaming completion proxy."""

import asyncio
import json
import pathlib
import sys
from urllib.parse import parse_qs

import httpx
import pytest

# Allow importing the triz_course package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from triz_course.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamError,
    ValidationError,
)
from triz_course.gigachat import API_URL, OAUTH_URL, CompletionProxy, TokenCache

EVENTS = (
    b'data: {"choices":[{"delta":{"content":"\xd0\x9f\xd1\x80\xd0\xb8"}}]}\n\n'
    b'data: {"choices":[{"delta":{"content":"vet"}}]}\n\n'
    b"data: [DONE]\n\n"
)


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeProvider:
    """Records requests and answers like the GigaChat endpoints."""

    def __init__(self, token_ttl_ms=30 * 60 * 1000, clock=None, oauth_status=200, chat_status=200):
        self.clock = clock or FakeClock()
        self.token_ttl_ms = token_ttl_ms
        self.oauth_status = oauth_status
        self.chat_status = chat_status
        self.oauth_requests = []
        self.chat_requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == OAUTH_URL:
            self.oauth_requests.append(request)
            if self.oauth_status != 200:
                return httpx.Response(self.oauth_status, text="bad credentials")
            n = len(self.oauth_requests)
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{n}",
                    "expires_at": int(self.clock() * 1000) + self.token_ttl_ms,
                },
            )
        if str(request.url) == API_URL:
            self.chat_requests.append(request)
            if self.chat_status != 200:
                return httpx.Response(self.chat_status, text='{"message":"rate limited"}')
            return httpx.Response(
                200, headers={"content-type": "text/event-stream"}, content=EVENTS
            )
        return httpx.Response(404)


def _client(provider):
    return httpx.AsyncClient(transport=httpx.MockTransport(provider))


def test_token_is_reused_until_refresh_margin():
    async def run():
        clock = FakeClock()
        provider = FakeProvider(token_ttl_ms=10 * 60 * 1000, clock=clock)
        async with _client(provider) as client:
            cache = TokenCache(client, clock=clock)
            first = await cache.get_token("a2V5", "GIGACHAT_API_PERS")
            clock.now += 30
            second = await cache.get_token("a2V5", "GIGACHAT_API_PERS")
            assert first == second == "token-1"
            assert len(provider.oauth_requests) == 1

            # 50 seconds before expiry falls inside the refresh margin
            clock.now = 1_000 + 10 * 60 - 50
            third = await cache.get_token("a2V5", "GIGACHAT_API_PERS")
            assert third == "token-2"
            assert len(provider.oauth_requests) == 2
            assert cache.token.access_token == "token-2"

    asyncio.run(run())


def test_token_exchange_request_shape():
    async def run():
        provider = FakeProvider()
        async with _client(provider) as client:
            cache = TokenCache(client, clock=provider.clock)
            await cache.get_token("a2V5", "GIGACHAT_API_CORP")
            cache._token = None
            await cache.get_token("a2V5", "GIGACHAT_API_CORP")

        first, second = provider.oauth_requests
        assert first.method == "POST"
        assert first.headers["Authorization"] == "Basic a2V5"
        assert first.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(first.content.decode()) == {"scope": ["GIGACHAT_API_CORP"]}
        assert first.headers["RqUID"] != second.headers["RqUID"]

    asyncio.run(run())


def test_token_exchange_failure_raises_auth_error():
    async def run():
        provider = FakeProvider(oauth_status=401)
        async with _client(provider) as client:
            cache = TokenCache(client, clock=provider.clock)
            with pytest.raises(UpstreamAuthError) as excinfo:
                await cache.get_token("bad", "GIGACHAT_API_PERS")
            assert excinfo.value.status_code == 401
            assert excinfo.value.body == "bad credentials"
            assert cache.token is None

    asyncio.run(run())


def test_stream_completion_relays_events():
    async def run():
        provider = FakeProvider()
        async with _client(provider) as client:
            proxy = CompletionProxy(
                client, TokenCache(client, clock=provider.clock), credential_key="a2V5"
            )
            messages = [
                {"role": "system", "content": "Ты — преподаватель ТРИЗ."},
                {"role": "user", "content": "Что такое ИКР?"},
            ]
            stream = await proxy.stream_completion(messages)
            assert stream.media_type == "text/event-stream"
            body = b"".join([chunk async for chunk in stream])
            await stream.aclose()  # second close is harmless

        assert body == EVENTS
        (request,) = provider.chat_requests
        assert request.headers["Authorization"] == "Bearer token-1"
        payload = json.loads(request.content)
        assert payload == {"model": proxy.model, "messages": messages, "stream": True}

    asyncio.run(run())


def test_stream_completion_reuses_token_across_turns():
    async def run():
        provider = FakeProvider()
        async with _client(provider) as client:
            proxy = CompletionProxy(
                client, TokenCache(client, clock=provider.clock), credential_key="a2V5"
            )
            for _ in range(3):
                stream = await proxy.stream_completion([{"role": "user", "content": "hi"}])
                await stream.aclose()
        assert len(provider.oauth_requests) == 1
        assert len(provider.chat_requests) == 3

    asyncio.run(run())


def test_stream_completion_surfaces_upstream_error():
    async def run():
        provider = FakeProvider(chat_status=429)
        async with _client(provider) as client:
            proxy = CompletionProxy(
                client, TokenCache(client, clock=provider.clock), credential_key="a2V5"
            )
            with pytest.raises(UpstreamError) as excinfo:
                await proxy.stream_completion([{"role": "user", "content": "hi"}])
        assert excinfo.value.status_code == 429
        assert excinfo.value.body == '{"message":"rate limited"}'

    asyncio.run(run())


def test_stream_completion_validates_input_before_calling_upstream():
    async def run():
        provider = FakeProvider()
        async with _client(provider) as client:
            cache = TokenCache(client, clock=provider.clock)
            with pytest.raises(ValidationError):
                await CompletionProxy(client, cache, credential_key="a2V5").stream_completion([])
            with pytest.raises(ConfigurationError):
                await CompletionProxy(client, cache, credential_key=None).stream_completion(
                    [{"role": "user", "content": "hi"}]
                )
        assert provider.oauth_requests == []
        assert provider.chat_requests == []

    asyncio.run(run())


class TrackedStream(httpx.AsyncByteStream):
    """Upstream body that records when it is closed."""

    def __init__(self, chunks):
        self.chunks = chunks
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk

    async def aclose(self):
        self.closed = True


def test_abandoned_stream_releases_upstream_connection():
    async def run():
        upstream = TrackedStream([b'data: {"choices":[{"delta":{"content":"a"}}]}\n\n'] * 5)

        def handler(request):
            if str(request.url) == OAUTH_URL:
                return httpx.Response(
                    200, json={"access_token": "tok", "expires_at": 4102444800000}
                )
            return httpx.Response(200, stream=upstream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            proxy = CompletionProxy(client, TokenCache(client), credential_key="a2V5")
            stream = await proxy.stream_completion([{"role": "user", "content": "hi"}])
            chunks = stream.__aiter__()
            first = await chunks.__anext__()
            assert first.startswith(b"data: ")
            assert not upstream.closed

            await stream.aclose()
            assert upstream.closed
            await chunks.aclose()

    asyncio.run(run())


def test_fully_read_stream_closes_upstream():
    async def run():
        upstream = TrackedStream([b"data: [DONE]\n\n"])

        def handler(request):
            if str(request.url) == OAUTH_URL:
                return httpx.Response(
                    200, json={"access_token": "tok", "expires_at": 4102444800000}
                )
            return httpx.Response(200, stream=upstream)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            proxy = CompletionProxy(client, TokenCache(client), credential_key="a2V5")
            stream = await proxy.stream_completion([{"role": "user", "content": "hi"}])
            body = b"".join([chunk async for chunk in stream])

        assert body == b"data: [DONE]\n\n"
        assert upstream.closed

    asyncio.run(run())
