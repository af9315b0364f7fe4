"""Repair profile: per-schema knobs consulted by the repair strategies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RepairProfile:
    """Tuning for one result schema.

    Attributes:
        empty_field_defaults: ``(field, default)`` pairs. An empty-string
            value for ``field`` is replaced with ``default`` before empty
            fields are removed. Defaults that look like JSON numbers are
            written unquoted.
        severity_field: Field whose value is title-cased by the advanced
            strategy when it is one of critical/high/medium/low.
        array_root: When True the advanced strategy wraps the document in
            ``[...]`` if it is not already an array.
    """

    empty_field_defaults: Tuple[Tuple[str, str], ...] = (("severity", "Medium"), ("line", "0"))
    severity_field: str = "severity"
    array_root: bool = False


DEFAULT_PROFILE = RepairProfile()
CODE_REVIEW_PROFILE = RepairProfile(array_root=True)

__all__ = ["RepairProfile", "DEFAULT_PROFILE", "CODE_REVIEW_PROFILE"]
