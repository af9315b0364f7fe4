"""OpenAIProvider: Chat Completions streaming against api.openai.com.

All request building and frame decoding is inherited from
``BaseOpenAIStyleProvider``; this module only resolves OpenAI defaults.
"""

from __future__ import annotations

from typing import Optional

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.streaming.session import ProviderFamily
from ..config import get_provider_config
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL


class OpenAIProvider(BaseOpenAIStyleProvider):
    """OpenAI provider built on the OpenAI-style base class."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config("openai", {"api_key": api_key, "base_url": base_url, "model": model})
        super().__init__(
            _ProviderInit(
                family=ProviderFamily.OPENAI,
                api_key=cfg.get("api_key"),
                base_url=cfg.get("base_url") or OPENAI_DEFAULT_BASE_URL,
                default_model=cfg.get("model") or OPENAI_DEFAULT_MODEL,
            )
        )


__all__ = ["OpenAIProvider"]
