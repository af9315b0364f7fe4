"""Cancellation error type.

Defines the public ``CancelledError`` raised when a stream session observes a
cancellation request.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream session is cancelled cooperatively.

    Distinguishes cancellation from transport and decoding failures so the
    aggregator can settle the session without emitting a result.
    """

__all__ = ["CancelledError"]
