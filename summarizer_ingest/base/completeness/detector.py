"""Completeness detection for accumulated stream buffers.

The check is intentionally cheap because it runs on every throttled tick:
after fence stripping, the raw counts of ``[``/``]`` and ``{``/``}`` must
match and the text must end with ``]`` or ``}``. Brackets inside string
literals are counted too; a document whose strings contain unbalanced
brackets is therefore reported ``Incomplete`` and is settled by the
finalization path instead.
"""
from __future__ import annotations

import json
from typing import Optional

from ..utils.fences import strip_code_fence
from .shapes import ShapePredicate
from .verdict import (
    INCOMPLETE_NOT_STARTED,
    INCOMPLETE_SHAPE,
    INCOMPLETE_UNBALANCED,
    CompleteInvalid,
    CompleteValid,
    Verdict,
)


def brackets_balanced(text: str) -> bool:
    """Return True when raw bracket and brace counts match."""
    return text.count("[") == text.count("]") and text.count("{") == text.count("}")


def check(buffer: str, shape: Optional[ShapePredicate] = None) -> Verdict:
    """Classify ``buffer`` as incomplete, complete-invalid or complete-valid.

    Pure function of ``buffer`` and ``shape``.
    """
    trimmed = strip_code_fence(buffer)
    if not trimmed.startswith(("[", "{")):
        return INCOMPLETE_NOT_STARTED
    if not trimmed.endswith(("]", "}")) or not brackets_balanced(trimmed):
        return INCOMPLETE_UNBALANCED
    try:
        value = json.loads(trimmed)
    except (ValueError, RecursionError) as exc:
        return CompleteInvalid(error=str(exc))
    if shape is not None and not shape(value):
        return INCOMPLETE_SHAPE
    return CompleteValid(value=value)


__all__ = ["check", "brackets_balanced"]
