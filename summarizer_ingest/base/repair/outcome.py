"""Repair pipeline outcome types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class RepairAttempt:
    """One parse attempt: the strategy, the text it was given, the text it parsed, and its error."""

    strategy: str
    input: str
    output: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RepairSuccess:
    """Parsed value plus the strategy that produced parseable text.

    ``strategy`` is ``"original"`` when no rewrite was needed.
    """

    value: Any
    strategy: str
    attempts: Tuple[RepairAttempt, ...] = ()

    @property
    def repaired(self) -> bool:
        return self.strategy != "original"


@dataclass(frozen=True)
class RepairFailure:
    """Every strategy failed; carries the three parse errors and the raw text."""

    original_error: str
    basic_error: str
    advanced_error: str
    raw_text: str
    attempts: Tuple[RepairAttempt, ...] = ()

    @property
    def message(self) -> str:
        return (
            "JSON parsing failed after all repair attempts. "
            f"Original: {self.original_error}. "
            f"Basic repair: {self.basic_error}. "
            f"Advanced repair: {self.advanced_error}"
        )

    def __str__(self) -> str:
        return self.message


RepairOutcome = Union[RepairSuccess, RepairFailure]

__all__ = ["RepairAttempt", "RepairSuccess", "RepairFailure", "RepairOutcome"]
