"""
News Synthesizer

Turns the Treza news listing for an asset into one headline-style sentence.
Two dependent queries per asset: the listing, then a summary of it.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, Sequence

from price_news_bot.models.market import (
    MessageReply,
    NewsListReply,
    classify_reply,
    extract_summary_text,
)
from price_news_bot.synthesis.prompts import build_news_prompt, build_summary_prompt
from price_news_bot.treza_client.decoder import strip_quotes

logger = logging.getLogger(__name__)


class ChatService(Protocol):
    """Anything that answers a user message with a decoded Treza payload."""

    async def converse(self, message: str) -> Any:
        ...


def clean_summary(summary: str) -> Optional[str]:
    """Strip surrounding quotes, fold newlines into spaces, trim."""
    cleaned = strip_quotes(summary).replace("\n", " ").strip()
    return cleaned or None


class NewsSynthesizer:
    """
    Per-asset news lookup backed by a Treza chat service.

    get_news() never raises: every failure is logged and yields None so a
    single asset cannot abort the run.
    """

    def __init__(self, chat: ChatService) -> None:
        self._chat = chat

    async def get_news(self, symbol: str) -> Optional[str]:
        try:
            return await self._synthesize(symbol)
        except Exception as e:
            logger.error(
                f"Error getting news for {symbol}: {e}",
                extra={"symbol": symbol, "error": str(e)},
            )
            return None

    async def _synthesize(self, symbol: str) -> Optional[str]:
        news_response = await self._chat.converse(build_news_prompt(symbol))
        reply = classify_reply(news_response)

        if isinstance(reply, NewsListReply) and reply.items:
            all_news = " ".join(item.render() for item in reply.items)
            rephrased = await self._chat.converse(build_summary_prompt(symbol, all_news))

            summary = extract_summary_text(rephrased)
            if summary:
                return clean_summary(summary)

            logger.info(f"No valid summary content found for {symbol}")
            return None

        if isinstance(reply, MessageReply):
            return clean_summary(reply.content)

        logger.info(
            f"No news array or valid content found for {symbol}",
            extra={"symbol": symbol, "response_preview": repr(news_response)[:200]},
        )
        return None

    async def get_news_many(self, symbols: Sequence[str]) -> list[Optional[str]]:
        """Look up news for every symbol concurrently, in input order."""
        return list(await asyncio.gather(*(self.get_news(s) for s in symbols)))
