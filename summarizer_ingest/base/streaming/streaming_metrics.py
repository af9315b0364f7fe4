"""Streaming metrics data structures."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters collected by the aggregator for a single session.

    ``deltas`` counts decoded text fragments, ``partial_updates`` the
    throttled callbacks, ``frames_retried`` failed decodes that were kept as
    pending fragments and ``frames_dropped`` pending fragments given up on.
    """

    deltas: int = 0
    chars: int = 0
    partial_updates: int = 0
    frames_retried: int = 0
    frames_dropped: int = 0
    provider_errors: int = 0
    early_completion: bool = False
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]
