"""
Synthesis Module

News summarization, ranking and post formatting.
"""
from price_news_bot.synthesis.formatter import (
    attach_news,
    compose_market_update,
    format_market_update,
    rank_updates,
    render_post,
    render_update,
)
from price_news_bot.synthesis.news import NewsSynthesizer, clean_summary

__all__ = [
    "NewsSynthesizer",
    "attach_news",
    "clean_summary",
    "compose_market_update",
    "format_market_update",
    "rank_updates",
    "render_post",
    "render_update",
]
