"""AnthropicProvider: Messages API streaming request builder.

Requests go to ``POST {base_url}/messages`` with ``x-api-key`` and the
pinned ``anthropic-version`` header. Frames are decoded by
:class:`AnthropicFrameDecoder`.
"""

from __future__ import annotations

from typing import Optional

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.dto.chat import StreamRequestDTO
from ..base.errors import ErrorCode, TransportError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderRequest
from ..base.streaming.frames import FrameDecoder
from ..base.streaming.session import ProviderFamily
from ..config import get_provider_config
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
)
from .helpers import build_body, split_system_messages
from .stream_helpers import AnthropicFrameDecoder


class AnthropicProvider:
    """Anthropic (Claude) streaming provider."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        cfg = get_provider_config(
            "anthropic",
            {"api_key": api_key, "base_url": base_url, "model": model, "max_tokens": max_tokens},
        )
        self._api_key = cfg.get("api_key")
        self._base_url = (cfg.get("base_url") or ANTHROPIC_DEFAULT_BASE_URL).rstrip("/")
        self._model = cfg.get("model") or ANTHROPIC_DEFAULT_MODEL
        self._max_tokens = int(cfg.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS)
        self._logger = get_logger("ingest.providers.anthropic")

    @property
    def provider_name(self) -> str:
        return ProviderFamily.ANTHROPIC.value

    @property
    def family(self) -> ProviderFamily:
        return ProviderFamily.ANTHROPIC

    def default_model(self) -> Optional[str]:
        return self._model

    def decoder(self) -> FrameDecoder:
        return AnthropicFrameDecoder()

    def validate_request(self, request: StreamRequestDTO) -> None:
        """Raise ``IngestError(VALIDATION)`` when only system messages were given."""
        split_system_messages(request)

    def build_request(
        self, request: StreamRequestDTO, *, model: Optional[str] = None
    ) -> ProviderRequest:
        """Build the streaming request; raises ``TransportError(AUTH)`` without a key."""
        model = model or self._model
        if not self._api_key:
            raise TransportError(
                code=ErrorCode.AUTH,
                message=MISSING_API_KEY_ERROR,
                provider=self.provider_name,
                model=model,
            )
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "content-type": "application/json",
            "accept": "text/event-stream",
        }
        built = ProviderRequest(
            url=f"{self._base_url}/messages",
            headers=headers,
            body=build_body(request, model, self._max_tokens),
        )
        normalized_log_event(
            self._logger,
            "request.built",
            LogContext(provider=self.provider_name, model=model),
            phase="request",
            messages=len(built.body["messages"]),
            url=built.url,
        )
        return built


__all__ = ["AnthropicProvider"]
