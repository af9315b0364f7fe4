"""Anthropic request helpers.

The Messages API takes the system prompt as a top-level ``system`` string
and only ``user``/``assistant`` turns in ``messages``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.dto.chat import StreamRequestDTO
from ..base.errors import ErrorCode, IngestError


def split_system_messages(request: StreamRequestDTO) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Return ``(system, turns)``; multiple system messages are joined by blank lines."""
    system_parts: List[str] = []
    turns: List[Dict[str, Any]] = []
    for message in request.messages:
        if message.role == "system":
            system_parts.append(message.content)
        else:
            turns.append({"role": message.role, "content": message.content})
    if not turns:
        raise IngestError(
            ErrorCode.VALIDATION,
            "anthropic requests need at least one user or assistant message",
            provider="anthropic",
        )
    return ("\n\n".join(system_parts) or None), turns


def build_body(request: StreamRequestDTO, model: str, default_max_tokens: int) -> Dict[str, Any]:
    system, turns = split_system_messages(request)
    body: Dict[str, Any] = {
        "model": model,
        "messages": turns,
        "max_tokens": request.max_tokens or default_max_tokens,
    }
    if system:
        body["system"] = system
    if request.temperature is not None:
        body["temperature"] = request.temperature
    body.update(request.extra)
    body["stream"] = True
    return body


__all__ = ["split_system_messages", "build_body"]
