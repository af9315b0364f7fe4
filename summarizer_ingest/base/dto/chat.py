"""
Pydantic DTOs validating the inbound stream request payload and credentials.

Purpose
-------
Validate the caller-supplied request before any provider request is built:
roles, non-empty content and numeric parameter bounds. Provider packages map
these DTOs to their wire bodies.

Failure Modes
-------------
Validation either succeeds or raises ``pydantic.ValidationError``; the
service layer turns that into ``IngestError(VALIDATION)``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


Role = Literal["system", "user", "assistant"]


class MessageDTO(BaseModel):
    """A chat message with plain-text content."""

    role: Role
    content: str

    @field_validator("content")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content string must be non-empty")
        return value


class StreamRequestDTO(BaseModel):
    """Provider-agnostic request payload.

    Parameters:
        messages: Ordered, non-empty list of messages; the first one must be
            from ``system`` or ``user``.
        max_tokens: Optional positive completion limit.
        temperature: Optional sampling temperature within [0.0, 2.0].
        extra: Provider-specific body fields merged verbatim into the request.
    """

    messages: List[MessageDTO] = Field(..., min_length=1)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_sequence(self) -> "StreamRequestDTO":
        if self.messages[0].role not in ("system", "user"):
            raise ValueError("first message must be from 'system' or 'user'")
        return self

    def wire_messages(self) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in self.messages]


class CredentialsDTO(BaseModel):
    """Per-call credentials; values override the configured ones."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: Optional[str] = None

    def __repr__(self) -> str:  # pragma: no cover - keeps keys out of logs
        masked = "***" if self.api_key else None
        return f"CredentialsDTO(api_key={masked!r}, base_url={self.base_url!r})"

    __str__ = __repr__


__all__ = ["Role", "MessageDTO", "StreamRequestDTO", "CredentialsDTO"]
