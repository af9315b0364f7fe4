"""Stream session state.

A :class:`StreamSession` is owned by exactly one aggregator run. It holds the
accumulated buffer, the pending (not yet decodable) fragment, the retry
counter and the lifecycle state:

    IDLE -> STREAMING <-> RETRYING -> DONE | FAILED | CANCELLED

``IDLE`` may also move straight to ``FAILED`` (transport failure before the
first chunk) or ``CANCELLED``. Terminal states are final; an illegal
transition raises ``IngestError(INTERNAL)``.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet

from ..constants import DEFAULT_MAX_RETRIES
from ..errors import ErrorCode, IngestError


class ProviderFamily(str, Enum):
    """Wire-format family of a provider; selects the frame decoder."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"
    OPENROUTER = "openrouter"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: "str | ProviderFamily") -> "ProviderFamily":
        """Resolve a family from its value; ``"claude"`` is an alias for Anthropic."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == "claude":
            return cls.ANTHROPIC
        try:
            return cls(key)
        except ValueError as exc:
            raise IngestError(
                ErrorCode.UNSUPPORTED, f"unknown provider family: {value!r}", provider=key
            ) from exc


class SessionState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    RETRYING = "retrying"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


_TERMINAL_STATES: FrozenSet[SessionState] = frozenset(
    {SessionState.DONE, SessionState.FAILED, SessionState.CANCELLED}
)
_TRANSITIONS: Dict[SessionState, FrozenSet[SessionState]] = {
    SessionState.IDLE: frozenset(
        {SessionState.STREAMING, SessionState.FAILED, SessionState.CANCELLED}
    ),
    SessionState.STREAMING: frozenset({SessionState.RETRYING}) | _TERMINAL_STATES,
    SessionState.RETRYING: frozenset({SessionState.STREAMING}) | _TERMINAL_STATES,
    SessionState.DONE: frozenset(),
    SessionState.FAILED: frozenset(),
    SessionState.CANCELLED: frozenset(),
}


@dataclass
class StreamSession:
    provider: ProviderFamily
    model: str
    max_retries: int = DEFAULT_MAX_RETRIES
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: SessionState = SessionState.IDLE
    retry_count: int = 0
    pending_fragment: str = ""
    last_emit_ms: float = 0.0
    _buffer: str = field(default="", repr=False)

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def finished(self) -> bool:
        return self.state in _TERMINAL_STATES

    @property
    def retries_exhausted(self) -> bool:
        return self.retry_count > self.max_retries

    def transition(self, target: SessionState) -> None:
        if target is self.state:
            return
        if target not in _TRANSITIONS[self.state]:
            raise IngestError(
                ErrorCode.INTERNAL,
                f"illegal session transition {self.state.value} -> {target.value}",
                provider=self.provider.value,
                model=self.model,
            )
        self.state = target

    def append(self, text: str) -> None:
        """Append a decoded fragment; the buffer only ever grows."""
        if self.finished:
            raise IngestError(
                ErrorCode.INTERNAL,
                "append on a finished session",
                provider=self.provider.value,
                model=self.model,
            )
        self._buffer += text

    def record_decoded(self) -> None:
        """A frame decoded: reset the retry counter, leave RETRYING."""
        self.retry_count = 0
        self.pending_fragment = ""
        if self.state is SessionState.RETRYING:
            self.transition(SessionState.STREAMING)

    def record_failed_decode(self, fragment: str) -> None:
        """Keep ``fragment`` as the pending fragment and count the failure."""
        self.pending_fragment = fragment
        self.retry_count += 1
        if self.state is SessionState.STREAMING:
            self.transition(SessionState.RETRYING)

    def drop_pending(self) -> str:
        """Discard the pending fragment (retry counter untouched)."""
        dropped, self.pending_fragment = self.pending_fragment, ""
        if self.state is SessionState.RETRYING:
            self.transition(SessionState.STREAMING)
        return dropped


__all__ = ["ProviderFamily", "SessionState", "StreamSession"]
