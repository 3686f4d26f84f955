"""
Treza Chat Client

Async HTTP client for the Treza conversational analytics API.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional

import aiohttp

from price_news_bot.config import TrezaConfig
from price_news_bot.core.types import UpstreamError
from price_news_bot.models.market import StreamDecodeResult
from price_news_bot.treza_client.decoder import decode_stream

logger = logging.getLogger(__name__)


class TrezaClient:
    """
    Chat client bound to a single Treza agent.

    Holds one aiohttp session for the lifetime of a run:

        async with TrezaClient(settings.treza) as treza:
            payload = await treza.converse("Analyze BTC ...")
    """

    def __init__(
        self,
        config: TrezaConfig,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Endpoint, agent and credential settings
            session: Existing session to reuse; the client will not close it
        """
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_s)

        # Stats
        self._requests_sent = 0
        self._requests_failed = 0

    async def __aenter__(self) -> TrezaClient:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _build_request(self, message: str) -> tuple[dict[str, Any], dict[str, str]]:
        body = {
            "messages": [
                {
                    "role": "user",
                    "content": message,
                }
            ],
            "agent": {
                "id": self._config.agent_id,
                "userId": self._config.user_id,
            },
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }
        return body, headers

    async def chat(self, message: str) -> StreamDecodeResult:
        """
        Send one user message and decode the streamed reply.

        Raises:
            UpstreamError: On HTTP errors, timeouts or connection failures
        """
        if self._session is None:
            raise RuntimeError("Use async context manager: async with TrezaClient(...):")

        body, headers = self._build_request(message)
        self._requests_sent += 1
        t0 = time.monotonic()

        try:
            async with self._session.post(
                self._config.chat_url,
                json=body,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                if resp.status >= 400:
                    detail = await resp.text(errors="replace")
                    logger.error(
                        "Treza API response error",
                        extra={
                            "status": resp.status,
                            "status_text": resp.reason,
                            "data": detail[:500],
                        },
                    )
                    raise UpstreamError(
                        f"Treza API error: {resp.status} {resp.reason}",
                        status=resp.status,
                        status_text=resp.reason,
                    )
                raw = await resp.text(errors="replace")

        except UpstreamError:
            self._requests_failed += 1
            raise

        except asyncio.TimeoutError as e:
            self._requests_failed += 1
            raise UpstreamError(
                f"Treza API timed out after {self._config.timeout_s:.0f}s"
            ) from e

        except aiohttp.ClientError as e:
            self._requests_failed += 1
            raise UpstreamError(f"Treza API request failed: {e}") from e

        elapsed_ms = (time.monotonic() - t0) * 1000
        logger.debug(
            "Treza reply received",
            extra={"latency_ms": round(elapsed_ms, 1), "bytes": len(raw)},
        )
        return decode_stream(raw)

    async def converse(self, message: str) -> Any:
        """Send a message and return the tool result or message-shaped reply."""
        result = await self.chat(message)
        return result.payload()

    def get_stats(self) -> dict[str, Any]:
        """Get request statistics."""
        return {
            "requests_sent": self._requests_sent,
            "requests_failed": self._requests_failed,
        }
