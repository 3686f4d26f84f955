"""
Market Update Pipeline

One run of the bot: analyze every tracked asset, attach news, compose the
post and publish it. All collaborators are injected so a run can be driven
entirely by fakes.

    analyze (fan-out) -> compose (news fan-out, rank, render) -> publish
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, Sequence

from price_news_bot.config import TRACKED_SYMBOLS
from price_news_bot.core.envelopes import (
    NOTHING_TO_PUBLISH_MESSAGE,
    failure_envelope,
    success_envelope,
)
from price_news_bot.core.types import NoAnalysisError
from price_news_bot.models.market import AssetAnalysis, MarketUpdate
from price_news_bot.synthesis.formatter import MAX_UPDATES, compose_market_update
from price_news_bot.synthesis.news import ChatService, NewsSynthesizer
from price_news_bot.synthesis.prompts import build_analysis_prompt
from price_news_bot.treza_client.normalizer import normalize_analysis
from price_news_bot.twitter_publisher.publisher import PublishedPost

logger = logging.getLogger(__name__)

RULE = "-" * 40


class PostPublisher(Protocol):
    async def publish(self, text: str) -> PublishedPost:
        ...


class MarketUpdatePipeline:
    """
    Generates and publishes one market update.

    Per-asset failures (analysis, news) are contained and logged. A run
    with no valid analysis, or a failed publish, ends with a failure
    envelope.
    """

    def __init__(
        self,
        chat: ChatService,
        publisher: PostPublisher,
        symbols: Sequence[str] = TRACKED_SYMBOLS,
        *,
        limit: int = MAX_UPDATES,
    ) -> None:
        self._chat = chat
        self._publisher = publisher
        self._symbols = tuple(symbols)
        self._limit = limit
        self._news = NewsSynthesizer(chat)

    @property
    def symbols(self) -> tuple[str, ...]:
        return self._symbols

    async def analyze(self, symbol: str) -> Optional[AssetAnalysis]:
        """Request and normalize the analysis of one asset; None on failure."""
        try:
            response = await self._chat.converse(build_analysis_prompt(symbol))
        except Exception as e:
            logger.error(
                f"Analysis request failed for {symbol}: {e}",
                extra={"symbol": symbol, "error": str(e)},
            )
            return None

        analysis = normalize_analysis(response, fallback_symbol=symbol)
        if analysis is None:
            logger.warning(f"No usable analysis for {symbol}", extra={"symbol": symbol})
        return analysis

    async def analyze_all(self) -> list[Optional[AssetAnalysis]]:
        """Analyze every tracked asset concurrently, in tracked order."""
        return list(await asyncio.gather(*(self.analyze(s) for s in self._symbols)))

    async def build_update(self) -> MarketUpdate:
        """
        Analyze, attach news, rank and render.

        Raises:
            NoAnalysisError: If no asset produced a valid analysis
        """
        results = await self.analyze_all()
        valid = [a for a in results if a is not None]
        if not valid:
            raise NoAnalysisError(
                "No valid analysis results obtained",
                symbols=self._symbols,
            )

        logger.info(
            f"Analyzed {len(valid)}/{len(self._symbols)} assets",
            extra={"symbols": [a.symbol for a in valid]},
        )
        return await compose_market_update(valid, self._news.get_news, limit=self._limit)

    async def run(self) -> dict[str, Any]:
        """Run once and return the result envelope. Never raises."""
        try:
            update = await self.build_update()

            logger.info(f"Generated Tweet:\n{RULE}\n{update.text}\n{RULE}")

            if update.is_empty:
                logger.info(NOTHING_TO_PUBLISH_MESSAGE)
                return success_envelope("", None, message=NOTHING_TO_PUBLISH_MESSAGE)

            post = await self._publisher.publish(update.text)
            logger.info(
                f"Published update {post.id}",
                extra={
                    "post_id": post.id,
                    "symbols": list(update.symbols),
                    "assets": [u.to_dict() for u in update.updates],
                },
            )

            return success_envelope(update.text, post.id)

        except Exception as e:
            logger.error(f"Error in market update run: {e}", exc_info=True)
            return failure_envelope(e)
