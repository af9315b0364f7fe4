"""
Provider-agnostic interfaces for the ingestion layer.

A streaming provider knows how to build its HTTP request and which frame
decoder understands its response body; the aggregator and the service never
look at provider wire formats directly.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .dto.chat import StreamRequestDTO
from .models import ProviderRequest
from .streaming.frames import FrameDecoder
from .streaming.session import ProviderFamily


@runtime_checkable
class StreamingProvider(Protocol):
    """Build streaming requests and decode the resulting frames."""

    @property
    def provider_name(self) -> str:  # pragma: no cover - protocol
        ...

    @property
    def family(self) -> ProviderFamily:  # pragma: no cover - protocol
        ...

    def default_model(self) -> Optional[str]:  # pragma: no cover - protocol
        ...

    def decoder(self) -> FrameDecoder:  # pragma: no cover - protocol
        ...

    def validate_request(self, request: StreamRequestDTO) -> None:  # pragma: no cover - protocol
        ...

    def build_request(
        self, request: StreamRequestDTO, *, model: Optional[str] = None
    ) -> ProviderRequest:  # pragma: no cover - protocol
        ...


__all__ = ["StreamingProvider"]
