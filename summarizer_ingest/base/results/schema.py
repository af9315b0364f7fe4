"""Result schemas: what a session expects the buffer to contain.

A schema picks the finalization mode (free text vs JSON), the shape
predicate used by the completeness detector and the repair profile.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..completeness.shapes import RequiredKeysShape, ReviewItemsShape, ShapePredicate
from ..repair.profile import CODE_REVIEW_PROFILE, DEFAULT_PROFILE, RepairProfile


class ResultKind(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class ResultSchema:
    name: str
    kind: ResultKind = ResultKind.JSON
    shape: Optional[ShapePredicate] = None
    repair_profile: RepairProfile = DEFAULT_PROFILE

    @property
    def is_text(self) -> bool:
        return self.kind is ResultKind.TEXT


TEXT = ResultSchema("text", kind=ResultKind.TEXT)
ANY_JSON = ResultSchema("json")
CODE_REVIEW = ResultSchema(
    "code_review", shape=ReviewItemsShape(), repair_profile=CODE_REVIEW_PROFILE
)


def issue_actions(*required_keys: str) -> ResultSchema:
    """Schema for a single JSON object carrying ``required_keys``."""
    return ResultSchema("issue_actions", shape=RequiredKeysShape(tuple(required_keys)))


__all__ = [
    "ResultKind",
    "ResultSchema",
    "TEXT",
    "ANY_JSON",
    "CODE_REVIEW",
    "issue_actions",
]
