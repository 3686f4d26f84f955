"""
Treza Stream Decoder

Parses the line-oriented stream returned by the Treza chat endpoint.

Wire format (one record per line, two-character tag):
    0:"chunk of assistant text"
    a:{"toolCallId": "...", "result": {...}}

Text chunks are concatenated; the last tool result wins.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from price_news_bot.models.market import StreamDecodeResult

logger = logging.getLogger(__name__)

TEXT_CHUNK_TAG = "0:"
TOOL_RESULT_TAG = "a:"

# Footer marker appended by the upstream model
FOOTER_MARKER = "---"

# One quote character at either end (\Z so a trailing newline is kept)
SURROUNDING_QUOTE_PATTERN = re.compile(r"^[\"']|[\"']\Z")


def strip_quotes(text: str) -> str:
    """Remove one leading and one trailing quote character, if present."""
    return SURROUNDING_QUOTE_PATTERN.sub("", text)


def _decode_text_chunk(body: str) -> str:
    return strip_quotes(body.strip())


def _decode_tool_result(body: str) -> Any:
    """
    Return the `result` field of a tool-result record, or None.

    Raises:
        json.JSONDecodeError: If the record body is not valid JSON
    """
    data = json.loads(body)
    if isinstance(data, dict):
        return data.get("result")
    return None


def decode_stream(raw: str) -> StreamDecodeResult:
    """
    Decode a raw Treza stream payload.

    Args:
        raw: Response body, possibly empty

    Returns:
        StreamDecodeResult with the cleaned text and the last tool result
    """
    message = ""
    tool_result: Any = None

    for line in (raw or "").split("\n"):
        if not line.strip():
            continue

        if line.startswith(TEXT_CHUNK_TAG):
            message += _decode_text_chunk(line[len(TEXT_CHUNK_TAG):])

        elif line.startswith(TOOL_RESULT_TAG):
            try:
                result = _decode_tool_result(line[len(TOOL_RESULT_TAG):])
            except json.JSONDecodeError as e:
                logger.warning(
                    "Failed to parse tool result",
                    extra={
                        "error": str(e),
                        "line_preview": line[:200],
                    },
                )
                continue

            # Empty scalars ('', 0, false) do not count as a result
            if result or isinstance(result, (dict, list)):
                tool_result = result

    if message:
        message = message.split(FOOTER_MARKER, 1)[0].strip()

    return StreamDecodeResult(text=message, tool_result=tool_result)
