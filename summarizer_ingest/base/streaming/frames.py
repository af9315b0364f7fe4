"""Frame decoding contract shared by every provider family.

A decoder turns one complete transport line into a :data:`FrameResult`:

``Skip``
    Nothing to contribute (blank line, SSE comment, ``event:`` line, a frame
    without text). ``error`` is set when the provider reported an in-band
    error; the stream continues.
``Delta``
    A non-empty text fragment to append to the buffer.
``Terminal``
    The provider signalled the end of the stream.
``ParseError``
    The line looked like a frame but its payload did not parse; ``raw`` is
    the line kept for the pending-fragment recovery.

Decoders are pure and stateless; recovery across lines is the aggregator's
job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union

from ..constants import SSE_COMMENT_PREFIX, SSE_DATA_PREFIX, SSE_EVENT_PREFIX


@dataclass(frozen=True)
class Skip:
    error: Optional[str] = None


@dataclass(frozen=True)
class Delta:
    text: str


@dataclass(frozen=True)
class Terminal:
    pass


@dataclass(frozen=True)
class ParseError:
    raw: str


FrameResult = Union[Skip, Delta, Terminal, ParseError]

SKIP = Skip()
TERMINAL = Terminal()


@dataclass(frozen=True)
class DeltaEvent:
    """Aggregator-level event: a text fragment or the end-of-stream marker."""

    text: str = ""
    terminal: bool = False


END_OF_STREAM = DeltaEvent(terminal=True)


class FrameDecoder(Protocol):
    """Decode one transport line into a frame result."""

    def decode(self, line: str) -> FrameResult:  # pragma: no cover - protocol
        ...


def is_ignorable(line: str) -> bool:
    """Blank lines and SSE comment lines never carry data."""
    return not line.strip() or line.startswith(SSE_COMMENT_PREFIX)


def starts_frame(line: str) -> bool:
    """Whether ``line`` opens a new frame (SSE field or NDJSON object) rather than continuing one."""
    return line.startswith((SSE_DATA_PREFIX, SSE_EVENT_PREFIX, "{"))


def split_sse_field(line: str) -> Tuple[Optional[str], str]:
    """Split an SSE ``field: value`` line; the single space after ``:`` is optional."""
    field, sep, value = line.partition(":")
    if not sep:
        return None, line
    if value.startswith(" "):
        value = value[1:]
    return field, value


def sse_data_payload(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, ``None`` for any other line."""
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return split_sse_field(line)[1]


__all__ = [
    "Skip",
    "Delta",
    "Terminal",
    "ParseError",
    "FrameResult",
    "SKIP",
    "TERMINAL",
    "DeltaEvent",
    "END_OF_STREAM",
    "FrameDecoder",
    "is_ignorable",
    "starts_frame",
    "split_sse_field",
    "sse_data_payload",
]
