"""
Market Update Formatter

Attaches news to analyses, keeps the significant assets, ranks them by the
size of their 24h move and renders the post text.

Post layout (blocks separated by a blank line):
    📈 $BTC: +12.3% (24h)
    📰 Bitcoin tops $100k as ETF inflows surge
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from price_news_bot.models.market import (
    SIGNIFICANT_CHANGE_PCT,
    AssetAnalysis,
    AssetUpdate,
    MarketUpdate,
)

logger = logging.getLogger(__name__)

MAX_UPDATES = 4

UP_EMOJI = "\U0001F4C8"  # 📈
DOWN_EMOJI = "\U0001F4C9"  # 📉
NEWS_EMOJI = "\U0001F4F0"  # 📰

NewsLookup = Callable[[str], Awaitable[Optional[str]]]


def price_change_emoji(change: float) -> str:
    return UP_EMOJI if change >= 0 else DOWN_EMOJI


async def attach_news(
    analyses: Sequence[AssetAnalysis],
    news_lookup: NewsLookup,
) -> list[AssetUpdate]:
    """
    Look up news for every asset concurrently.

    Output order matches input order. A lookup that raises leaves that
    asset with news=None.
    """
    results = await asyncio.gather(
        *(news_lookup(a.symbol) for a in analyses),
        return_exceptions=True,
    )

    updates = []
    for analysis, news in zip(analyses, results):
        if isinstance(news, BaseException):
            if not isinstance(news, Exception):
                raise news
            logger.error(
                f"News lookup failed for {analysis.symbol}: {news}",
                extra={"symbol": analysis.symbol, "error": str(news)},
            )
            news = None
        updates.append(AssetUpdate.from_analysis(analysis, news))
    return updates


def rank_updates(
    updates: Sequence[AssetUpdate],
    limit: int = MAX_UPDATES,
) -> list[AssetUpdate]:
    """Significant updates, largest absolute 24h move first, at most `limit`."""
    significant = [u for u in updates if u.is_significant]
    significant.sort(key=lambda u: abs(u.price_change_24h), reverse=True)
    return significant[:limit]


def render_update(update: AssetUpdate) -> Optional[str]:
    """
    Render one asset block, or None if it has nothing worth posting.
    """
    change = update.price_change_24h
    if not update.has_news and abs(change) <= SIGNIFICANT_CHANGE_PCT:
        return None

    sign = "+" if change >= 0 else "-"
    lines = [
        f"{price_change_emoji(change)} ${update.symbol}: {sign}{abs(change):.1f}% (24h)"
    ]
    if update.has_news:
        lines.append(f"{NEWS_EMOJI} {update.news}")
    return "\n".join(lines)


def render_post(updates: Sequence[AssetUpdate]) -> MarketUpdate:
    """Join the rendered blocks; assets that render nothing are left out."""
    rendered = []
    blocks = []
    for update in updates:
        block = render_update(update)
        if block:
            rendered.append(update)
            blocks.append(block)
    return MarketUpdate(text="\n\n".join(blocks), updates=tuple(rendered))


async def compose_market_update(
    analyses: Sequence[AssetAnalysis],
    news_lookup: NewsLookup,
    limit: int = MAX_UPDATES,
) -> MarketUpdate:
    """
    Attach news, rank and render a set of analyses.

    Returns an empty MarketUpdate when no asset qualifies.
    """
    if not analyses:
        return MarketUpdate(text="")

    updates = await attach_news(analyses, news_lookup)
    top = rank_updates(updates, limit=limit)

    logger.debug(
        f"Selected {len(top)} of {len(updates)} assets",
        extra={"symbols": [u.symbol for u in top]},
    )
    return render_post(top)


async def format_market_update(
    analyses: Sequence[AssetAnalysis],
    news_lookup: NewsLookup,
    limit: int = MAX_UPDATES,
) -> str:
    """Post text for a set of analyses; empty when no asset qualifies."""
    update = await compose_market_update(analyses, news_lookup, limit=limit)
    return update.text
