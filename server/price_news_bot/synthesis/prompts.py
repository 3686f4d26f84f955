"""
Treza Prompt Templates

User-turn messages sent to the Treza agent. The agent picks its tools from
the wording, so keep the phrasing stable.
"""
from __future__ import annotations


def build_analysis_prompt(symbol: str) -> str:
    """Ask for the price analysis tool result of one asset."""
    return (
        f"Analyze {symbol} and give me: current price, 24h change, "
        f"and market sentiment (bullish/bearish/neutral)."
    )


def build_news_prompt(symbol: str) -> str:
    """Ask for the recent news listing of one asset."""
    return (
        f"What's the most significant news for {symbol} in the last 24 hours? "
        f"Include both articles and tweets."
    )


def build_summary_prompt(symbol: str, all_news: str) -> str:
    """
    Ask for a one-sentence synthesis of the flattened news listing.

    Headline register: no formal phrasing, emojis or slang.
    """
    return (
        f"Analyze and summarize all of this {symbol} news into one clear, "
        f"concise sentence that captures the most significant developments. "
        f"Use a natural tone, like something you'd read in a headline or tweet, "
        f"no overly formal or academic phrasing. No emojis or slang: {all_news}"
    )
