"""Chunk-to-line assembly.

Transport chunks split lines at arbitrary byte positions. ``LineAssembler``
buffers the unterminated tail so decoders only ever see complete lines, which
makes the decoded delta sequence independent of how the body was chunked.
"""
from __future__ import annotations

from typing import List


class LineAssembler:
    """Split incoming text chunks on ``\\n`` (``\\r\\n`` tolerated)."""

    def __init__(self) -> None:
        self._tail = ""

    @property
    def pending(self) -> str:
        return self._tail

    def feed(self, chunk: str) -> List[str]:
        """Return the complete lines finished by ``chunk``."""
        if not chunk:
            return []
        lines = (self._tail + chunk).split("\n")
        self._tail = lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def flush(self) -> List[str]:
        """Return the unterminated final line, if any, at end of stream."""
        tail, self._tail = self._tail.rstrip("\r"), ""
        return [tail] if tail else []


__all__ = ["LineAssembler"]
