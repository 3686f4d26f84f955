"""
Price News Bot Data Models

Frozen dataclasses with validation for analyses, updates and chat replies.
"""
from price_news_bot.models.market import (
    AssetAnalysis,
    AssetUpdate,
    ChatReply,
    ContentReply,
    MarketUpdate,
    MessageReply,
    NewsItem,
    NewsItemKind,
    NewsListReply,
    StreamDecodeResult,
    classify_reply,
    extract_summary_text,
    is_placeholder_news,
)

__all__ = [
    "AssetAnalysis",
    "AssetUpdate",
    "ChatReply",
    "ContentReply",
    "MarketUpdate",
    "MessageReply",
    "NewsItem",
    "NewsItemKind",
    "NewsListReply",
    "StreamDecodeResult",
    "classify_reply",
    "extract_summary_text",
    "is_placeholder_news",
]
