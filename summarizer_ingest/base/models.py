"""Wire-level request model produced by provider request builders."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ProviderRequest:
    """A fully built streaming HTTP request.

    Attributes:
        url: Absolute endpoint URL.
        headers: Request headers (credentials included).
        body: JSON body; always carries ``"stream": true``.
    """

    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)

    def redacted_headers(self) -> Dict[str, str]:
        """Headers safe for logging (credential values masked)."""
        secret = {"authorization", "x-api-key"}
        return {k: ("***" if k.lower() in secret else v) for k, v in self.headers.items()}


__all__ = ["ProviderRequest"]
