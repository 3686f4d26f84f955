"""
Price News Bot

Scheduled market-update poster for crypto assets.
Asks the Treza analytics agent for per-asset price analysis and recent news,
condenses it into a short update and posts it to X.

Architecture:
    Treza (external) -> treza_client -> synthesis -> twitter_publisher

Components:
    - treza_client: HTTP client, stream decoder and analysis normalizer
    - synthesis: news summarization, ranking and post formatting
    - twitter_publisher: X posting via tweepy
    - pipeline: per-run orchestration and the result envelope
"""
