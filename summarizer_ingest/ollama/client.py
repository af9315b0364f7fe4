"""OllamaProvider: local daemon ``/api/chat`` streaming request builder.

No API key is required. When credentials do carry a key (an authenticating
proxy in front of the daemon) it is sent as a bearer token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.dto.chat import StreamRequestDTO
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ProviderRequest
from ..base.streaming.frames import FrameDecoder
from ..base.streaming.session import ProviderFamily
from ..config import get_provider_config
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL
from .stream_helpers import OllamaFrameDecoder


def build_options(request: StreamRequestDTO) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if request.temperature is not None:
        options["temperature"] = request.temperature
    if request.max_tokens is not None:
        options["num_predict"] = request.max_tokens
    return options


class OllamaProvider:
    """Ollama streaming provider."""

    def __init__(
        self,
        host: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config("ollama", {"host": host or base_url, "model": model, "api_key": api_key})
        self._host = (cfg.get("host") or OLLAMA_DEFAULT_HOST).rstrip("/")
        self._model = cfg.get("model") or OLLAMA_DEFAULT_MODEL
        self._api_key = cfg.get("api_key")
        self._logger = get_logger("ingest.providers.ollama")

    @property
    def provider_name(self) -> str:
        return ProviderFamily.OLLAMA.value

    @property
    def family(self) -> ProviderFamily:
        return ProviderFamily.OLLAMA

    def default_model(self) -> Optional[str]:
        return self._model

    def decoder(self) -> FrameDecoder:
        return OllamaFrameDecoder()

    def validate_request(self, request: StreamRequestDTO) -> None:
        return None

    def build_request(
        self, request: StreamRequestDTO, *, model: Optional[str] = None
    ) -> ProviderRequest:
        model = model or self._model
        body: Dict[str, Any] = {"model": model, "messages": request.wire_messages()}
        options = build_options(request)
        if options:
            body["options"] = options
        body.update(request.extra)
        body["stream"] = True
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        built = ProviderRequest(url=f"{self._host}/api/chat", headers=headers, body=body)
        normalized_log_event(
            self._logger,
            "request.built",
            LogContext(provider=self.provider_name, model=model),
            phase="request",
            messages=len(request.messages),
            url=built.url,
        )
        return built


__all__ = ["OllamaProvider", "build_options"]
