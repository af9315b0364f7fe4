"""Shape predicates applied to parsed documents.

A shape predicate is any callable taking the parsed value and returning
``True`` when it has the structure the caller expects. Predicates are
consulted by the completeness detector only; repair never checks shape.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Tuple


class ShapePredicate(Protocol):
    """Callable protocol for shape checks."""

    def __call__(self, value: Any) -> bool:  # pragma: no cover - protocol
        ...


def any_shape(value: Any) -> bool:
    """Accept every parsed value."""
    return True


def _present(item: Mapping[str, Any], key: str) -> bool:
    return bool(item.get(key))


@dataclass(frozen=True)
class ReviewItemsShape:
    """Accept code-review item arrays in either supported key layout.

    Only the first element of a non-empty array is inspected. It must carry
    ``file`` + ``current`` + ``suggested``, or the older layout of
    (``severity`` | ``category``) + (``line`` | ``line_number``) +
    (``current_code`` | ``code_snippet``). Empty arrays and non-array values
    are accepted.
    """

    def __call__(self, value: Any) -> bool:
        if not isinstance(value, list) or not value:
            return True
        first = value[0]
        if not isinstance(first, Mapping):
            return False
        if all(_present(first, k) for k in ("file", "current", "suggested")):
            return True
        return (
            (_present(first, "severity") or _present(first, "category"))
            and (_present(first, "line") or _present(first, "line_number"))
            and (_present(first, "current_code") or _present(first, "code_snippet"))
        )


@dataclass(frozen=True)
class RequiredKeysShape:
    """Accept an object carrying every key in ``keys``."""

    keys: Tuple[str, ...]

    def __call__(self, value: Any) -> bool:
        return isinstance(value, Mapping) and all(k in value for k in self.keys)


__all__ = ["ShapePredicate", "any_shape", "ReviewItemsShape", "RequiredKeysShape"]
