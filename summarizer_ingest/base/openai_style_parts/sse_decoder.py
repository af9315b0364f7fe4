"""Frame decoder for OpenAI-compatible Chat Completions streams.

Shared by OpenAI, DeepSeek and OpenRouter. Each event is a ``data:`` line
whose payload is a ``chat.completion.chunk`` object; text lives at
``choices[0].delta.content``. ``data: [DONE]`` ends the stream. OpenRouter
interleaves ``: OPENROUTER PROCESSING`` comment lines, which are ignorable.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..constants import SSE_DONE_SENTINEL
from ..streaming.frames import (
    SKIP,
    TERMINAL,
    Delta,
    FrameResult,
    ParseError,
    Skip,
    is_ignorable,
    sse_data_payload,
)


def first_delta_content(data: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` when it is a string."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    delta = first.get("delta") if isinstance(first, dict) else None
    content = delta.get("content") if isinstance(delta, dict) else None
    return content if isinstance(content, str) else None


def error_message(data: Any) -> Optional[str]:
    """Extract an in-band ``{"error": ...}`` message, if present."""
    if not isinstance(data, dict) or not data.get("error"):
        return None
    err = data["error"]
    if isinstance(err, dict):
        return str(err.get("message") or err)
    return str(err)


class OpenAIStyleFrameDecoder:
    """Decode ``data:`` lines of an OpenAI-style SSE body."""

    def decode(self, line: str) -> FrameResult:
        line = line.rstrip("\r")
        if is_ignorable(line):
            return SKIP
        payload = sse_data_payload(line)
        if payload is None:
            return SKIP
        if payload.strip() == SSE_DONE_SENTINEL:
            return TERMINAL
        try:
            data = json.loads(payload)
        except ValueError:
            return ParseError(line)
        message = error_message(data)
        if message is not None:
            return Skip(error=message)
        content = first_delta_content(data)
        return Delta(content) if content else SKIP


__all__ = ["OpenAIStyleFrameDecoder", "first_delta_content", "error_message"]
