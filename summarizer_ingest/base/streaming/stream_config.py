"""Per-stream tuning knobs."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_MAX_RETRIES, DEFAULT_MIN_EAGER_CHARS, DEFAULT_THROTTLE_MS


class StreamConfig(BaseModel):
    """Aggregation settings for one stream session.

    Attributes:
        max_retries: Consecutive failed frame decodes tolerated before the
            pending fragment is dropped.
        throttle_ms: Minimum spacing of partial updates once the buffer has
            reached ``min_eager_chars``.
        min_eager_chars: Below this buffer size every delta triggers a tick.
        stop_on_complete: Finalize as soon as a tick finds a complete, valid,
            shape-matching document.
        inactivity_timeout_seconds: Optional maximum wait for the next chunk;
            ``None`` waits indefinitely.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    throttle_ms: float = Field(default=DEFAULT_THROTTLE_MS, ge=0)
    min_eager_chars: int = Field(default=DEFAULT_MIN_EAGER_CHARS, ge=0)
    stop_on_complete: bool = True
    inactivity_timeout_seconds: Optional[float] = Field(default=None, gt=0)


__all__ = ["StreamConfig"]
