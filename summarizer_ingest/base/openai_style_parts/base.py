"""BaseOpenAIStyleProvider: request building for Chat Completions APIs.

Purpose:
- Provide a reusable base for providers exposing an OpenAI-compatible
  ``POST {base_url}/chat/completions`` streaming endpoint.

Failure semantics:
- A missing API key raises ``TransportError(AUTH)`` before any network I/O;
  the service emits it as a transport failure.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..constants import MISSING_API_KEY_ERROR
from ..dto.chat import StreamRequestDTO
from ..errors import ErrorCode, TransportError
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ProviderRequest
from ..streaming.frames import FrameDecoder
from ..streaming.session import ProviderFamily
from .provider_init import _ProviderInit
from .sse_decoder import OpenAIStyleFrameDecoder


class BaseOpenAIStyleProvider:
    """Reusable base class for OpenAI-compatible providers."""

    def __init__(self, init: _ProviderInit) -> None:
        self._family = init.family
        self._api_key = init.api_key
        self._base_url = init.base_url.rstrip("/")
        self._model = init.default_model
        self._extra_headers = dict(init.extra_headers)
        self._logger = get_logger(f"ingest.providers.{init.family.value}")

    @property
    def provider_name(self) -> str:
        return self._family.value

    @property
    def family(self) -> ProviderFamily:
        return self._family

    def default_model(self) -> Optional[str]:
        """Return the default model name configured for this provider."""
        return self._model

    def decoder(self) -> FrameDecoder:
        return OpenAIStyleFrameDecoder()

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/chat/completions"

    def validate_request(self, request: StreamRequestDTO) -> None:
        """Chat Completions accept any validated message list."""
        return None

    def build_body(self, request: StreamRequestDTO, model: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": model,
            "messages": request.wire_messages(),
            "stream": True,
        }
        if request.max_tokens is not None:
            body["max_tokens"] = request.max_tokens
        if request.temperature is not None:
            body["temperature"] = request.temperature
        body.update(request.extra)
        body["stream"] = True
        return body

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
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
            **self._extra_headers,
        }
        built = ProviderRequest(url=self.endpoint, headers=headers, body=self.build_body(request, model))
        normalized_log_event(
            self._logger,
            "request.built",
            LogContext(provider=self.provider_name, model=model),
            phase="request",
            messages=len(request.messages),
            url=built.url,
        )
        return built


__all__ = ["BaseOpenAIStyleProvider"]
