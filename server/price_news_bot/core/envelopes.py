"""
Run Result Envelopes

Lambda-style result of one run. Kept free of configuration imports so the
entry point can report a failure even when settings cannot be loaded.
"""
from __future__ import annotations

from typing import Any, Optional

SUCCESS_MESSAGE = "Successfully generated and sent market update"
NOTHING_TO_PUBLISH_MESSAGE = "No significant market updates to publish"
FAILURE_MESSAGE = "Failed to generate or send market update"


def success_envelope(
    tweet: str,
    tweet_id: Optional[str],
    message: str = SUCCESS_MESSAGE,
) -> dict[str, Any]:
    return {
        "statusCode": 200,
        "body": {
            "message": message,
            "tweet": tweet,
            "tweetId": tweet_id,
        },
    }


def failure_envelope(error: BaseException) -> dict[str, Any]:
    return {
        "statusCode": 500,
        "body": {
            "message": FAILURE_MESSAGE,
            "error": str(error),
        },
    }
