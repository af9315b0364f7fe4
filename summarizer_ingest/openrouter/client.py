"""OpenRouterProvider using the OpenAI-compatible Chat Completions API.

OpenRouter keeps the connection alive with ``: OPENROUTER PROCESSING`` SSE
comment lines; the shared decoder treats them as ignorable. Requests carry
the optional attribution headers (``X-Title``, ``HTTP-Referer``) when
configured.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..base.openai_style_parts import BaseOpenAIStyleProvider, _ProviderInit
from ..base.streaming.session import ProviderFamily
from ..config import get_provider_config
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL, OPENROUTER_DEFAULT_MODEL


def attribution_headers(app_title: Optional[str], referer: Optional[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    if app_title:
        headers["X-Title"] = app_title
    if referer:
        headers["HTTP-Referer"] = referer
    return headers


class OpenRouterProvider(BaseOpenAIStyleProvider):
    """OpenRouter provider built on the OpenAI-style base class."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        app_title: Optional[str] = None,
        referer: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config(
            "openrouter",
            {
                "api_key": api_key,
                "base_url": base_url,
                "model": model,
                "app_title": app_title,
                "referer": referer,
            },
        )
        super().__init__(
            _ProviderInit(
                family=ProviderFamily.OPENROUTER,
                api_key=cfg.get("api_key"),
                base_url=cfg.get("base_url") or OPENROUTER_DEFAULT_BASE_URL,
                default_model=cfg.get("model") or OPENROUTER_DEFAULT_MODEL,
                extra_headers=attribution_headers(cfg.get("app_title"), cfg.get("referer")),
            )
        )


__all__ = ["OpenRouterProvider", "attribution_headers"]
