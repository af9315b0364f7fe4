"""Anthropic Messages API stream decoding.

The body is SSE with explicit ``event:`` lines followed by ``data:`` lines.
Only ``content_block_delta`` payloads carry text (``delta.text``); every
other event type (``message_start``, ``content_block_start``, ``ping``,
``message_delta``, ``message_stop``) is skipped. The stream ends when the
body is exhausted; there is no ``[DONE]`` sentinel. ``error`` events are
reported in-band and surface as a ``Skip`` carrying the message.
"""

from __future__ import annotations

import json

from ..base.constants import SSE_EVENT_PREFIX
from ..base.streaming.frames import (
    SKIP,
    Delta,
    FrameResult,
    ParseError,
    Skip,
    is_ignorable,
    sse_data_payload,
)

CONTENT_BLOCK_DELTA = "content_block_delta"


class AnthropicFrameDecoder:
    """Decode Anthropic ``data:`` lines into text deltas."""

    def decode(self, line: str) -> FrameResult:
        line = line.rstrip("\r")
        if is_ignorable(line) or line.startswith(SSE_EVENT_PREFIX):
            return SKIP
        payload = sse_data_payload(line)
        if payload is None:
            return SKIP
        try:
            data = json.loads(payload)
        except ValueError:
            return ParseError(line)
        if not isinstance(data, dict):
            return SKIP
        kind = data.get("type")
        if kind == "error":
            err = data.get("error")
            message = err.get("message") if isinstance(err, dict) else err
            return Skip(error=str(message or "provider error"))
        if kind != CONTENT_BLOCK_DELTA:
            return SKIP
        delta = data.get("delta")
        text = delta.get("text") if isinstance(delta, dict) else None
        return Delta(text) if isinstance(text, str) and text else SKIP


__all__ = ["AnthropicFrameDecoder", "CONTENT_BLOCK_DELTA"]
