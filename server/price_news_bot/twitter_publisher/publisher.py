"""
X (Twitter) Publisher

Posts the market update through the X v2 API using tweepy's async client.

Usage:
    publisher = TwitterPublisher(settings.twitter)
    post = await publisher.publish("📈 $BTC: +12.3% (24h)")
    print(post.id)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp
import tweepy
from tweepy.asynchronous import AsyncClient

from price_news_bot.config import TwitterConfig
from price_news_bot.core.types import PublishError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedPost:
    """A post accepted by X."""

    id: str
    text: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must be non-empty")


class TwitterPublisher:
    """
    Sends posts on behalf of the bot account (OAuth 1.0a user context).
    """

    def __init__(self, config: TwitterConfig) -> None:
        self._client = AsyncClient(
            consumer_key=config.api_key,
            consumer_secret=config.api_secret,
            access_token=config.access_token,
            access_token_secret=config.access_token_secret,
        )

    @staticmethod
    def _post_id(response: Any) -> str:
        data = getattr(response, "data", None) or {}
        post_id = data.get("id") if isinstance(data, dict) else None
        if not post_id:
            raise PublishError("Failed to send tweet: response carried no post id")
        return str(post_id)

    async def publish(self, text: str) -> PublishedPost:
        """
        Publish text as a new post.

        Raises:
            PublishError: If X rejects the post or cannot be reached
        """
        try:
            response = await self._client.create_tweet(text=text)
        except (tweepy.TweepyException, aiohttp.ClientError) as e:
            logger.error(
                "Error sending tweet",
                extra={"error": str(e)},
            )
            raise PublishError(f"Failed to send tweet: {e}") from e

        post = PublishedPost(id=self._post_id(response), text=text)
        logger.info(f"Tweet sent successfully: {post.id}")
        return post
