"""Ollama ``/api/chat`` stream decoding.

The body is newline-delimited JSON, one object per line. Text is at
``message.content`` (``response`` for the ``/api/generate`` shape). A line
carrying ``"done": true`` is an ordinary frame; the stream ends when the body
is exhausted. ``{"error": ...}`` lines surface as a ``Skip`` with the message.
"""

from __future__ import annotations

import json

from ..base.streaming.frames import SKIP, Delta, FrameResult, ParseError, Skip, is_ignorable


class OllamaFrameDecoder:
    """Decode NDJSON lines into text deltas."""

    def decode(self, line: str) -> FrameResult:
        if is_ignorable(line):
            return SKIP
        try:
            data = json.loads(line)
        except ValueError:
            return ParseError(line)
        if not isinstance(data, dict):
            return SKIP
        if data.get("error"):
            return Skip(error=str(data["error"]))
        message = data.get("message")
        if isinstance(message, dict):
            content = message.get("content")
        else:
            content = data.get("response")
        return Delta(content) if isinstance(content, str) and content else SKIP


__all__ = ["OllamaFrameDecoder"]
