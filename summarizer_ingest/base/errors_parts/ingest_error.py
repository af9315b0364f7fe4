"""
Structured ingestion error exception types.

``IngestError`` wraps failures raised while building provider requests,
driving a stream session or emitting a result with a normalized `ErrorCode`.
``TransportError`` narrows it to failures of the HTTP exchange itself
(non-2xx responses and network failures before or during streaming).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class IngestError(Exception):
    """Represents a structured ingestion error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str = "-"
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass
class TransportError(IngestError):
    """HTTP exchange failure (status error, connect/read failure, timeout).

    ``status_code`` is populated for non-2xx responses and ``None`` for
    network-level failures.
    """

    status_code: Optional[int] = None


__all__ = ["IngestError", "TransportError"]
