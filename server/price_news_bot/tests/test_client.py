"""
Tests for price_news_bot.treza_client.client

HTTP is replaced with a fake aiohttp session, no live Treza required.
"""
from __future__ import annotations

import asyncio

import aiohttp
import pytest

from price_news_bot.config import TrezaConfig
from price_news_bot.core.types import UpstreamError
from price_news_bot.treza_client.client import TrezaClient

CONFIG = TrezaConfig(
    api_key="test-key",
    base_url="https://treza.test/api/",
    agent_id="agent-123",
    user_id="template",
    timeout_s=5.0,
)


# ── Fakes ─────────────────────────────────────────────────────────────────────

class FakeResponse:
    def __init__(self, body: str | bytes = "", status: int = 200, reason: str = "OK") -> None:
        self.status = status
        self.reason = reason
        self._body = body.encode() if isinstance(body, str) else body

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self._body.decode(encoding, errors)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *_: object) -> bool:
        return False


class FakeSession:
    """Minimal stand-in for aiohttp.ClientSession.post()."""

    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def post(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


# ── chat() ────────────────────────────────────────────────────────────────────

async def test_chat_sends_expected_request():
    session = FakeSession(FakeResponse('0:"hello"'))

    async with TrezaClient(CONFIG, session=session) as client:
        await client.chat("Analyze BTC")

    url, kwargs = session.calls[0]
    assert url == "https://treza.test/api/chat"
    assert kwargs["json"] == {
        "messages": [{"role": "user", "content": "Analyze BTC"}],
        "agent": {"id": "agent-123", "userId": "template"},
    }
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["headers"]["Accept"] == "text/event-stream"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"].total == 5.0


async def test_chat_decodes_stream():
    body = '0:"BTC looks "\n0:"strong"\na:{"result": {"symbol": "BTC"}}\n'
    session = FakeSession(FakeResponse(body))

    async with TrezaClient(CONFIG, session=session) as client:
        result = await client.chat("Analyze BTC")

    assert result.text == "BTC looks strong"
    assert result.tool_result == {"symbol": "BTC"}


async def test_converse_returns_payload():
    session = FakeSession(FakeResponse('0:"Nothing notable"'))

    async with TrezaClient(CONFIG, session=session) as client:
        payload = await client.converse("news?")

    assert payload == {"message": {"content": "Nothing notable"}}


async def test_invalid_utf8_body_is_decoded_with_replacement():
    session = FakeSession(FakeResponse(b'0:"BTC \xff up"'))

    async with TrezaClient(CONFIG, session=session) as client:
        result = await client.chat("Analyze BTC")

    assert result.text == "BTC \ufffd up"


async def test_invalid_utf8_error_body_still_maps_to_upstream_error():
    session = FakeSession(FakeResponse(b"\xfe\xff", status=502, reason="Bad Gateway"))

    async with TrezaClient(CONFIG, session=session) as client:
        with pytest.raises(UpstreamError, match="502 Bad Gateway"):
            await client.chat("Analyze BTC")

        assert client.get_stats() == {"requests_sent": 1, "requests_failed": 1}


async def test_http_error_raises_upstream_error_with_status():
    session = FakeSession(FakeResponse("denied", status=401, reason="Unauthorized"))

    async with TrezaClient(CONFIG, session=session) as client:
        with pytest.raises(UpstreamError, match="Treza API error: 401 Unauthorized") as exc_info:
            await client.chat("Analyze BTC")

        assert client.get_stats() == {"requests_sent": 1, "requests_failed": 1}

    assert exc_info.value.status == 401
    assert exc_info.value.status_text == "Unauthorized"


async def test_timeout_raises_upstream_error():
    session = FakeSession(error=asyncio.TimeoutError())

    async with TrezaClient(CONFIG, session=session) as client:
        with pytest.raises(UpstreamError, match="timed out"):
            await client.chat("Analyze BTC")


async def test_connection_error_raises_upstream_error():
    session = FakeSession(error=aiohttp.ClientConnectionError("refused"))

    async with TrezaClient(CONFIG, session=session) as client:
        with pytest.raises(UpstreamError, match="request failed") as exc_info:
            await client.chat("Analyze BTC")

    assert exc_info.value.status is None


async def test_injected_session_not_closed():
    session = FakeSession(FakeResponse(""))

    async with TrezaClient(CONFIG, session=session):
        pass

    assert session.closed is False


async def test_chat_outside_context_manager_raises():
    client = TrezaClient(CONFIG)
    with pytest.raises(RuntimeError, match="async with"):
        await client.chat("Analyze BTC")
