"""
Treza Analysis Normalizer

Transforms the loosely-typed analysis tool result into AssetAnalysis.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

from price_news_bot.models.market import AssetAnalysis

logger = logging.getLogger(__name__)

DEFAULT_SENTIMENT = {"trend": "neutral"}


def coerce_number(value: Any) -> float:
    """
    Convert a JSON value to a finite float.

    Numbers and numeric strings are accepted. Anything else, including
    NaN and infinities, becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _extract_change_24h(price_change: Any) -> float:
    if not isinstance(price_change, dict):
        return 0.0
    return coerce_number(price_change.get("24h"))


def _extract_sentiment(market_sentiment: Any) -> str:
    """
    Lower-cased trend label.

    A missing sentiment object or trend falls back to neutral; anything
    that is not a sentiment object raises.
    """
    if market_sentiment is None:
        market_sentiment = DEFAULT_SENTIMENT
    trend = market_sentiment.get("trend")
    if trend is None:
        trend = DEFAULT_SENTIMENT["trend"]
    return trend.lower()


def normalize_analysis(
    raw: Any,
    fallback_symbol: Optional[str] = None,
) -> Optional[AssetAnalysis]:
    """
    Transform a Treza analysis payload to AssetAnalysis.

    Args:
        raw: Decoded analysis payload (usually a dict)
        fallback_symbol: Requested ticker, used when the payload omits it

    Returns:
        Normalized AssetAnalysis, or None when the payload is absent or
        has an unexpected shape
    """
    if not raw:
        return None

    try:
        symbol = raw.get("symbol") or fallback_symbol
        price = coerce_number(raw.get("currentPrice"))

        return AssetAnalysis(
            symbol=str(symbol).upper() if symbol else "",
            current_price=max(price, 0.0),
            price_change_24h=_extract_change_24h(raw.get("priceChange")),
            sentiment=_extract_sentiment(raw.get("marketSentiment")),
        )

    except Exception as e:
        logger.warning(
            "Failed to normalize analysis",
            extra={
                "error": str(e),
                "symbol": fallback_symbol,
                "payload_preview": repr(raw)[:200],
            },
        )
        return None
