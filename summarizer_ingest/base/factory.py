"""Provider Factory utilities.

Purpose
-------
Create streaming provider instances (request builder + frame decoder) from a
provider family name. Provider packages are imported lazily with
``importlib`` so the base layer never imports them directly.

Failure semantics
-----------------
Unknown families, import failures, missing classes and constructor errors all
raise :class:`UnknownProviderError` with an actionable message.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .errors import ErrorCode, IngestError
from .streaming.frames import FrameDecoder
from .streaming.session import ProviderFamily


class UnknownProviderError(IngestError):
    """Raised when a provider cannot be resolved or initialized."""


class ProviderFactory:
    """Create providers based on a family (e.g., ``"openai"``, ``"claude"``)."""

    _PROVIDERS: Dict[ProviderFamily, Dict[str, str]] = {
        ProviderFamily.OPENAI: {"module": "summarizer_ingest.openai.client", "class": "OpenAIProvider"},
        ProviderFamily.ANTHROPIC: {"module": "summarizer_ingest.anthropic.client", "class": "AnthropicProvider"},
        ProviderFamily.DEEPSEEK: {"module": "summarizer_ingest.deepseek.client", "class": "DeepseekProvider"},
        ProviderFamily.OPENROUTER: {"module": "summarizer_ingest.openrouter.client", "class": "OpenRouterProvider"},
        ProviderFamily.OLLAMA: {"module": "summarizer_ingest.ollama.client", "class": "OllamaProvider"},
    }

    @classmethod
    def create(cls, provider: "str | ProviderFamily", **kwargs: Any) -> Any:
        """Create a provider instance.

        Parameters
        ----------
        provider:
            Family name or :class:`ProviderFamily`; ``"claude"`` resolves to
            Anthropic.
        **kwargs:
            Constructor kwargs (``api_key``, ``base_url``, ``model``, ...).
            ``None`` values are dropped so configured defaults apply.
        """
        try:
            family = ProviderFamily.parse(provider)
        except IngestError as exc:
            raise UnknownProviderError(
                ErrorCode.UNSUPPORTED, f"Unknown provider '{provider}'", provider=str(provider)
            ) from exc
        spec = cls._PROVIDERS[family]
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                ErrorCode.INTERNAL,
                f"Failed to import module '{module_path}' for provider '{family.value}': {exc}",
                provider=family.value,
            ) from exc
        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                ErrorCode.INTERNAL,
                f"Provider class '{class_name}' not found in '{module_path}'",
                provider=family.value,
            ) from exc
        try:
            return klass(**{k: v for k, v in kwargs.items() if v is not None})
        except TypeError as exc:
            raise UnknownProviderError(
                ErrorCode.VALIDATION,
                f"Invalid arguments for '{family.value}' provider constructor: {exc}",
                provider=family.value,
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return supported family names in deterministic order."""
        return tuple(family.value for family in cls._PROVIDERS)


_DECODERS: Dict[ProviderFamily, Tuple[str, str]] = {
    ProviderFamily.OPENAI: ("summarizer_ingest.base.openai_style_parts.sse_decoder", "OpenAIStyleFrameDecoder"),
    ProviderFamily.DEEPSEEK: ("summarizer_ingest.base.openai_style_parts.sse_decoder", "OpenAIStyleFrameDecoder"),
    ProviderFamily.OPENROUTER: ("summarizer_ingest.base.openai_style_parts.sse_decoder", "OpenAIStyleFrameDecoder"),
    ProviderFamily.ANTHROPIC: ("summarizer_ingest.anthropic.stream_helpers", "AnthropicFrameDecoder"),
    ProviderFamily.OLLAMA: ("summarizer_ingest.ollama.stream_helpers", "OllamaFrameDecoder"),
}


def get_decoder(provider: "str | ProviderFamily") -> FrameDecoder:
    """Return a fresh frame decoder for ``provider`` without building a provider."""
    try:
        family = ProviderFamily.parse(provider)
    except IngestError as exc:
        raise UnknownProviderError(
            ErrorCode.UNSUPPORTED, f"Unknown provider '{provider}'", provider=str(provider)
        ) from exc
    module_path, class_name = _DECODERS[family]
    return getattr(import_module(module_path), class_name)()


__all__ = ["ProviderFactory", "UnknownProviderError", "get_decoder"]
