"""
Treza Client Module

HTTP client, stream decoder and analysis normalizer for the Treza chat API.
"""
from price_news_bot.treza_client.client import TrezaClient
from price_news_bot.treza_client.decoder import decode_stream, strip_quotes
from price_news_bot.treza_client.normalizer import normalize_analysis

__all__ = [
    "TrezaClient",
    "decode_stream",
    "normalize_analysis",
    "strip_quotes",
]
