"""
X Publisher Module

Posts market updates to X via tweepy.
"""
from price_news_bot.twitter_publisher.publisher import PublishedPost, TwitterPublisher

__all__ = [
    "PublishedPost",
    "TwitterPublisher",
]
