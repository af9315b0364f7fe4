"""DeepseekProvider using the OpenAI-compatible Chat Completions API.

DeepSeek streams the same ``data:`` frames as OpenAI, so only the base URL
and default model differ.
"""

from __future__ import annotations

from typing import Optional

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.streaming.session import ProviderFamily
from ..config import get_provider_config
from ..config.defaults import DEEPSEEK_DEFAULT_BASE_URL, DEEPSEEK_DEFAULT_MODEL


class DeepseekProvider(BaseOpenAIStyleProvider):
    """Deepseek provider built on the OpenAI-style base class."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config("deepseek", {"api_key": api_key, "base_url": base_url, "model": model})
        super().__init__(
            _ProviderInit(
                family=ProviderFamily.DEEPSEEK,
                api_key=cfg.get("api_key"),
                base_url=cfg.get("base_url") or DEEPSEEK_DEFAULT_BASE_URL,
                default_model=cfg.get("model") or DEEPSEEK_DEFAULT_MODEL,
            )
        )


__all__ = ["DeepseekProvider"]
