"""Shared pieces for OpenAI-compatible providers.

- ``OpenAIStyleFrameDecoder``: SSE ``data:`` frame decoder.
- ``BaseOpenAIStyleProvider``: Chat Completions request builder.
- ``_ProviderInit``: constructor bundle for the base provider.
"""

from .base import BaseOpenAIStyleProvider
from .provider_init import _ProviderInit
from .sse_decoder import OpenAIStyleFrameDecoder, error_message, first_delta_content

__all__ = [
    "BaseOpenAIStyleProvider",
    "OpenAIStyleFrameDecoder",
    "_ProviderInit",
    "error_message",
    "first_delta_content",
]
