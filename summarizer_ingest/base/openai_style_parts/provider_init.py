"""Initialization dataclass for OpenAI-style providers.

Encapsulates the constructor parameters used by ``BaseOpenAIStyleProvider``.
No I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..streaming.session import ProviderFamily


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``BaseOpenAIStyleProvider``.

    Attributes:
        family: Provider family (selects log names and error attribution).
        api_key: Bearer credential; required before a request can be built.
        base_url: API base URL; ``/chat/completions`` is appended.
        default_model: Model used when the caller does not pass one.
        extra_headers: Additional static headers (e.g. OpenRouter attribution).
    """

    family: ProviderFamily
    api_key: Optional[str]
    base_url: str
    default_model: str
    extra_headers: Dict[str, str] = field(default_factory=dict)


__all__ = ["_ProviderInit"]
