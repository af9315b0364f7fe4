"""Streaming package: frame contract, line assembly, session state and the aggregator.

Exposes the transport-agnostic pieces of a stream session under a single
namespace. Provider-specific decoders live in their provider packages.
"""

from .aggregator import StreamAggregator
from .frames import (
    END_OF_STREAM,
    SKIP,
    TERMINAL,
    Delta,
    DeltaEvent,
    FrameDecoder,
    FrameResult,
    ParseError,
    Skip,
    Terminal,
    is_ignorable,
    sse_data_payload,
    starts_frame,
)
from .line_assembler import LineAssembler
from .session import ProviderFamily, SessionState, StreamSession
from .stream_config import StreamConfig
from .streaming_metrics import StreamMetrics

__all__ = [
    "StreamAggregator",
    "StreamConfig",
    "StreamMetrics",
    "StreamSession",
    "SessionState",
    "ProviderFamily",
    "LineAssembler",
    "FrameDecoder",
    "FrameResult",
    "Skip",
    "Delta",
    "Terminal",
    "ParseError",
    "SKIP",
    "TERMINAL",
    "DeltaEvent",
    "END_OF_STREAM",
    "is_ignorable",
    "sse_data_payload",
    "starts_frame",
]
