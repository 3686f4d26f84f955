"""
Market Update Data Models

Core data structures for the stages of a market update run.
All models use frozen dataclasses with __post_init__ validation.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

# Price moves above this many percentage points are newsworthy on their own
SIGNIFICANT_CHANGE_PCT = 10.0

# Upstream sentinels meaning "no news", matched exactly after trimming
NEWS_PLACEHOLDERS = frozenset({"No major updates", "null"})


def is_placeholder_news(news: Optional[str]) -> bool:
    """True when news is missing, empty, or one of the upstream sentinels."""
    if not news or not news.strip():
        return True
    return news.strip() in NEWS_PLACEHOLDERS


class NewsItemKind(str, Enum):
    """Kind of item in a Treza news listing."""

    TWEET = "tweet"
    ARTICLE = "article"

    @classmethod
    def from_string(cls, value: Any) -> "NewsItemKind":
        """Anything that is not a tweet is rendered as an article."""
        if isinstance(value, str) and value.lower() == cls.TWEET.value:
            return cls.TWEET
        return cls.ARTICLE


@dataclass(frozen=True)
class AssetAnalysis:
    """
    Normalized price analysis for one tracked asset.

    Built once per asset per run from the Treza analysis tool result.
    """

    symbol: str
    current_price: float = 0.0
    price_change_24h: float = 0.0
    sentiment: str = "neutral"

    def __post_init__(self) -> None:
        """Validate fields."""
        if not self.symbol:
            raise ValueError("symbol must be non-empty string")
        if self.current_price < 0:
            raise ValueError(f"current_price must be >= 0, got {self.current_price}")
        if not math.isfinite(self.price_change_24h):
            raise ValueError(
                f"price_change_24h must be finite, got {self.price_change_24h}"
            )
        if self.sentiment is None:
            raise ValueError("sentiment must not be None")


@dataclass(frozen=True)
class AssetUpdate:
    """
    An AssetAnalysis with its synthesized news attached.

    Consumed once by the formatter, never persisted.
    """

    symbol: str
    current_price: float
    price_change_24h: float
    sentiment: str
    news: Optional[str] = None

    @classmethod
    def from_analysis(
        cls, analysis: AssetAnalysis, news: Optional[str]
    ) -> AssetUpdate:
        return cls(
            symbol=analysis.symbol,
            current_price=analysis.current_price,
            price_change_24h=analysis.price_change_24h,
            sentiment=analysis.sentiment,
            news=news,
        )

    @property
    def has_news(self) -> bool:
        return not is_placeholder_news(self.news)

    @property
    def is_significant(self) -> bool:
        """Worth posting: real news or a large 24h move."""
        return self.has_news or abs(self.price_change_24h) > SIGNIFICANT_CHANGE_PCT

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "current_price": self.current_price,
            "price_change_24h": self.price_change_24h,
            "sentiment": self.sentiment,
            "news": self.news if self.has_news else None,
        }


@dataclass(frozen=True)
class StreamDecodeResult:
    """
    Decoded Treza stream: accumulated text plus the last tool result.

    Produced once per upstream call and never mutated.
    """

    text: str = ""
    tool_result: Any = None

    def payload(self) -> Any:
        """Tool result if one arrived, otherwise a message-shaped dict."""
        if self.tool_result is not None:
            return self.tool_result
        return {"message": {"content": self.text}}


# ---------------------------------------------------------------------------
# Chat replies: the three payload shapes Treza answers news queries with
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NewsItem:
    """One article or tweet from a Treza news listing."""

    kind: NewsItemKind
    text: str = ""
    title: str = ""
    summary: str = ""

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> NewsItem:
        return cls(
            kind=NewsItemKind.from_string(d.get("type")),
            text=_as_text(d.get("text")),
            title=_as_text(d.get("title")),
            summary=_as_text(d.get("summary")),
        )

    def render(self) -> str:
        """Flatten to a single line for the summarization prompt."""
        if self.kind is NewsItemKind.TWEET:
            return f"Tweet: {self.text}"
        return f"{self.title}. {self.summary}"


@dataclass(frozen=True)
class NewsListReply:
    """Tool result listing news items."""

    items: tuple[NewsItem, ...]


@dataclass(frozen=True)
class MessageReply:
    """Reply carrying `message.content`."""

    content: str


@dataclass(frozen=True)
class ContentReply:
    """Reply carrying a top-level `content` field."""

    content: str


ChatReply = Union[NewsListReply, MessageReply, ContentReply]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def classify_reply(payload: Any) -> Optional[ChatReply]:
    """
    Map a decoded Treza payload onto one of the reply variants.

    Unknown shapes return None instead of raising. Non-dict entries in a
    news listing are dropped.
    """
    if isinstance(payload, list):
        items = tuple(NewsItem.from_dict(item) for item in payload if isinstance(item, dict))
        return NewsListReply(items=items)

    if not isinstance(payload, dict):
        return None

    message = payload.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str) and content:
            return MessageReply(content=content)

    content = payload.get("content")
    if isinstance(content, str) and content:
        return ContentReply(content=content)

    return None


def extract_summary_text(payload: Any) -> Optional[str]:
    """Summary text of a reply: `message.content` first, then `content`."""
    reply = classify_reply(payload)
    if isinstance(reply, (MessageReply, ContentReply)):
        return reply.content
    return None


@dataclass(frozen=True)
class MarketUpdate:
    """Rendered post text plus the assets that made it into the post."""

    text: str
    updates: tuple[AssetUpdate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(u.symbol for u in self.updates)
