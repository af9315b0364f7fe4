"""Terminal result types delivered once per stream session."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple, Union

from ..errors import ErrorCode
from ..repair.outcome import RepairAttempt


class FailureCategory(str, Enum):
    """Where a failed session broke down."""

    TRANSPORT = "transport"
    REPAIR = "repair"


@dataclass(frozen=True)
class Ok:
    """Successful result.

    Attributes:
        value: Parsed document (JSON schemas) or cleaned text (text schema).
        raw_text: Full accumulated buffer the value was derived from.
        repaired_by: Name of the repair strategy used, ``None`` when the
            buffer parsed as-is.
    """

    value: Any
    raw_text: str = ""
    repaired_by: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed result; ``raw_text`` is always the unmodified buffer."""

    message: str
    category: FailureCategory
    raw_text: str = ""
    code: ErrorCode = ErrorCode.UNKNOWN
    attempts: Tuple[RepairAttempt, ...] = ()
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


StructuredResult = Union[Ok, Err]

__all__ = ["FailureCategory", "Ok", "Err", "StructuredResult"]
