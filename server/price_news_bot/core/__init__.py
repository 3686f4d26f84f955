"""
Price News Bot Core Utilities

Service-specific exceptions shared across the pipeline.
"""
from price_news_bot.core.types import (
    NoAnalysisError,
    PriceNewsBotError,
    PublishError,
    UpstreamError,
)

__all__ = [
    "NoAnalysisError",
    "PriceNewsBotError",
    "PublishError",
    "UpstreamError",
]
