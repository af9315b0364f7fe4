"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs used by stream sessions via the canonical
``summarizer_ingest.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is polled by the aggregator before every chunk read
  and before every decoded line.
- ``CancelledError`` is raised by operations that observe a cancellation
  request; the aggregator turns it into the ``cancelled`` session state and
  never emits a result for that session.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
