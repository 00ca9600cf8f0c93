"""GigaChat access: bearer token caching and streaming chat completions.

``TokenCache`` and ``CompletionProxy`` are created once at startup (see
``main.py``) around a shared ``httpx.AsyncClient`` and handed to the chat
routes through ``get_completion_proxy``.
"""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import httpx
from fastapi import Request

from triz_course.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamError,
    ValidationError,
)

logger = logging.getLogger(__name__)

OAUTH_URL = os.getenv(
    "GIGACHAT_OAUTH_URL", "https://ngw.devices.sberbank.ru:9443/api/v2/oauth"
)
API_URL = os.getenv(
    "GIGACHAT_API_URL",
    "https://gigachat.devices.sberbank.ru/api/v1/chat/completions",
)
MODEL = os.getenv("GIGACHAT_MODEL", "GigaChat")
AUTH_KEY = os.getenv("GIGACHAT_AUTH_KEY")
SCOPE = os.getenv("GIGACHAT_SCOPE", "GIGACHAT_API_PERS")
# The provider's certificates are issued by its own CA; disable verification
# only when that CA is not installed.
VERIFY_SSL = os.getenv("GIGACHAT_VERIFY_SSL", "true").lower() == "true"

# Tokens are refreshed this long before they expire.
REFRESH_MARGIN_MS = 60_000


def make_client() -> httpx.AsyncClient:
    # No read timeout: the model may pause between streamed chunks.
    return httpx.AsyncClient(verify=VERIFY_SSL, timeout=httpx.Timeout(10.0, read=None))


@dataclass
class CachedToken:
    access_token: str
    expires_at: int  # epoch milliseconds


class TokenCache:
    """Holds one bearer token and exchanges credentials when it runs out.

    Concurrent callers that both see an expired token both refresh it; the
    last exchange wins.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        oauth_url: str = OAUTH_URL,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.oauth_url = oauth_url
        self._clock = clock
        self._token: Optional[CachedToken] = None

    @property
    def token(self) -> Optional[CachedToken]:
        return self._token

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def get_token(self, credential_key: str, scope: str) -> str:
        cached = self._token
        if cached is not None and self._now_ms() < cached.expires_at - REFRESH_MARGIN_MS:
            return cached.access_token

        response = await self.client.post(
            self.oauth_url,
            headers={
                "Authorization": f"Basic {credential_key}",
                "RqUID": str(uuid.uuid4()),
                "Accept": "application/json",
            },
            data={"scope": scope},
        )
        if not response.is_success:
            logger.warning("GigaChat token exchange failed: %s", response.status_code)
            raise UpstreamAuthError(response.status_code, response.text)

        payload = response.json()
        self._token = CachedToken(
            access_token=payload["access_token"],
            expires_at=int(payload["expires_at"]),
        )
        logger.info("GigaChat token refreshed, expires at %s", self._token.expires_at)
        return self._token.access_token


class CompletionStream:
    """Provider event stream relayed chunk by chunk.

    The upstream response is closed when iteration ends, fails or is
    abandoned, and ``aclose()`` may be called any number of times.
    """

    media_type = "text/event-stream"

    def __init__(self, response: httpx.Response):
        self._response = response

    async def __aiter__(self):
        try:
            async for chunk in self._response.aiter_bytes():
                yield chunk
        finally:
            await self._response.aclose()

    async def aclose(self) -> None:
        await self._response.aclose()


class CompletionProxy:
    def __init__(
        self,
        client: httpx.AsyncClient,
        token_cache: TokenCache,
        credential_key: Optional[str] = AUTH_KEY,
        scope: str = SCOPE,
        api_url: str = API_URL,
        model: str = MODEL,
    ):
        self.client = client
        self.token_cache = token_cache
        self.credential_key = credential_key
        self.scope = scope
        self.api_url = api_url
        self.model = model

    async def stream_completion(self, messages: Sequence[dict]) -> CompletionStream:
        """Start a streaming completion for ``messages``.

        Errors are raised before any byte is relayed: ``ValidationError`` for
        an empty message list, ``UpstreamAuthError`` when no token can be
        obtained and ``UpstreamError`` for a non-success provider status.
        """
        if not messages:
            raise ValidationError("No messages provided")
        if not self.credential_key:
            raise ConfigurationError("GigaChat credentials not configured")

        token = await self.token_cache.get_token(self.credential_key, self.scope)
        request = self.client.build_request(
            "POST",
            self.api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "text/event-stream",
            },
            json={"model": self.model, "messages": list(messages), "stream": True},
        )
        response = await self.client.send(request, stream=True)
        if not response.is_success:
            await response.aread()
            await response.aclose()
            logger.warning("GigaChat completion failed: %s", response.status_code)
            raise UpstreamError(response.status_code, response.text)
        return CompletionStream(response)


def get_completion_proxy(request: Request) -> CompletionProxy:
    """FastAPI dependency returning the proxy built at startup."""
    return request.app.state.completion_proxy
