"""
Tests for price_news_bot.synthesis.news

The Treza chat service is replaced with AsyncMock, no network required.
"""
from unittest.mock import AsyncMock

import pytest

from price_news_bot.core.types import UpstreamError
from price_news_bot.synthesis.news import NewsSynthesizer, clean_summary

NEWS_LISTING = [
    {"type": "article", "title": "ETF inflows hit record", "summary": "Funds added $1B"},
    {"type": "tweet", "text": "BTC breaking out"},
]


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def chat():
    service = AsyncMock()
    service.converse = AsyncMock()
    return service


# ── clean_summary() ───────────────────────────────────────────────────────────

class TestCleanSummary:
    def test_strips_quotes_and_newlines(self):
        assert clean_summary('"Bitcoin rallies\non ETF news"') == "Bitcoin rallies on ETF news"

    def test_trims(self):
        assert clean_summary("  SOL outage resolved  ") == "SOL outage resolved"

    def test_empty_is_none(self):
        assert clean_summary('""') is None

    def test_quote_before_trailing_newline_kept(self):
        assert clean_summary('"Bitcoin \"moons\"\n') == 'Bitcoin "moons"'


# ── get_news() ────────────────────────────────────────────────────────────────

async def test_listing_is_summarized_with_second_query(chat):
    chat.converse.side_effect = [
        NEWS_LISTING,
        {"message": {"content": '"Bitcoin ETFs pull in record\ninflows"'}},
    ]

    news = await NewsSynthesizer(chat).get_news("BTC")

    assert news == "Bitcoin ETFs pull in record inflows"
    assert chat.converse.call_count == 2

    first_prompt = chat.converse.call_args_list[0].args[0]
    second_prompt = chat.converse.call_args_list[1].args[0]
    assert "BTC" in first_prompt and "24 hours" in first_prompt
    assert second_prompt.endswith(
        "ETF inflows hit record. Funds added $1B Tweet: BTC breaking out"
    )
    assert "No emojis or slang" in second_prompt


async def test_summary_falls_back_to_content_field(chat):
    chat.converse.side_effect = [NEWS_LISTING, {"content": "Fallback summary"}]

    assert await NewsSynthesizer(chat).get_news("BTC") == "Fallback summary"


async def test_listing_without_summary_is_none(chat):
    chat.converse.side_effect = [NEWS_LISTING, {"message": {"content": ""}}]

    assert await NewsSynthesizer(chat).get_news("BTC") is None


async def test_direct_message_used_without_second_query(chat):
    chat.converse.return_value = {"message": {"content": "'ETH gas fees drop'"}}

    news = await NewsSynthesizer(chat).get_news("ETH")

    assert news == "ETH gas fees drop"
    chat.converse.assert_called_once()


async def test_empty_listing_is_none(chat):
    chat.converse.return_value = []

    assert await NewsSynthesizer(chat).get_news("SOL") is None
    chat.converse.assert_called_once()


async def test_unknown_shape_is_none(chat):
    chat.converse.return_value = {"symbol": "SOL"}

    assert await NewsSynthesizer(chat).get_news("SOL") is None


async def test_first_query_error_is_none(chat):
    chat.converse.side_effect = UpstreamError("Treza API error: 502 Bad Gateway", status=502)

    assert await NewsSynthesizer(chat).get_news("BTC") is None


async def test_second_query_error_is_none(chat):
    chat.converse.side_effect = [NEWS_LISTING, UpstreamError("timeout")]

    assert await NewsSynthesizer(chat).get_news("BTC") is None


# ── get_news_many() ───────────────────────────────────────────────────────────

async def test_get_news_many_isolates_failures():
    async def converse(prompt: str):
        if " B " in prompt:
            raise RuntimeError("boom")
        symbol = "A" if " A " in prompt else "C"
        return {"message": {"content": f"news for {symbol}"}}

    chat = AsyncMock()
    chat.converse = AsyncMock(side_effect=converse)

    results = await NewsSynthesizer(chat).get_news_many(["A", "B", "C"])

    assert results == ["news for A", None, "news for C"]
