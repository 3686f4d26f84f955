"""
Price News Bot Entry Point

Stateless, externally scheduled entry point (e.g. an AWS Lambda cron).
Each invocation generates one market update and posts it to X.

Usage:
    cd server
    python -m price_news_bot.main
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from dotenv import load_dotenv

from price_news_bot.core.envelopes import failure_envelope

load_dotenv()

# Configure logging before importing config (which may fail)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run_once() -> dict[str, Any]:
    """
    Run the pipeline once. Never raises.

    Returns the result envelope with a dict body. Anything that goes wrong
    before or around the pipeline (settings, credentials, client setup)
    becomes a failure envelope.
    """
    try:
        return await _run_pipeline()
    except Exception as e:
        logger.error(f"Market update run failed: {e}", exc_info=True)
        return failure_envelope(e)


async def _run_pipeline() -> dict[str, Any]:
    """Build the collaborators from settings and run the pipeline."""
    from price_news_bot.config import settings
    from price_news_bot.pipeline import MarketUpdatePipeline
    from price_news_bot.treza_client import TrezaClient
    from price_news_bot.twitter_publisher import TwitterPublisher

    logging.getLogger().setLevel(settings.log_level)

    settings.treza.validate()
    settings.twitter.validate()

    logger.info(
        "Starting market update",
        extra={"symbols": list(settings.symbols)},
    )

    publisher = TwitterPublisher(settings.twitter)

    async with TrezaClient(settings.treza) as treza:
        pipeline = MarketUpdatePipeline(treza, publisher, settings.symbols)
        result = await pipeline.run()

        logger.info("Treza stats", extra=treza.get_stats())
        return result


def handler(event: Any = None, context: Any = None) -> dict[str, Any]:
    """
    Lambda-style handler. The event and context are not used.

    Returns {"statusCode": 200|500, "body": "<json>"}.
    """
    result = asyncio.run(run_once())
    return {
        "statusCode": result["statusCode"],
        "body": json.dumps(result["body"], ensure_ascii=False),
    }


if __name__ == "__main__":
    response = handler()
    print(json.dumps(response, ensure_ascii=False, indent=2))
    raise SystemExit(0 if response["statusCode"] == 200 else 1)
