"""Completeness verdict types.

A verdict classifies an accumulated buffer at one point in time:

``Incomplete``
    The buffer does not yet look like a whole document (no opening bracket,
    unbalanced brackets, wrong final character) or it parsed but failed the
    shape predicate.
``CompleteInvalid``
    Brackets balance and the buffer ends with ``]``/``}`` but it is not
    parseable JSON.
``CompleteValid``
    Parseable JSON that satisfies the shape predicate; ``value`` holds the
    parsed document.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Incomplete:
    reason: str = "unbalanced"


@dataclass(frozen=True)
class CompleteInvalid:
    error: str


@dataclass(frozen=True)
class CompleteValid:
    value: Any


Verdict = Union[Incomplete, CompleteInvalid, CompleteValid]

INCOMPLETE_NOT_STARTED = Incomplete("not_started")
INCOMPLETE_UNBALANCED = Incomplete("unbalanced")
INCOMPLETE_SHAPE = Incomplete("shape_mismatch")

__all__ = [
    "Incomplete",
    "CompleteInvalid",
    "CompleteValid",
    "Verdict",
    "INCOMPLETE_NOT_STARTED",
    "INCOMPLETE_UNBALANCED",
    "INCOMPLETE_SHAPE",
]
