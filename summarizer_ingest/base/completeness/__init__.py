"""Completeness detection: verdict types, shape predicates and ``check``."""

from .detector import brackets_balanced, check
from .shapes import ReviewItemsShape, RequiredKeysShape, ShapePredicate, any_shape
from .verdict import CompleteInvalid, CompleteValid, Incomplete, Verdict

__all__ = [
    "check",
    "brackets_balanced",
    "ShapePredicate",
    "any_shape",
    "ReviewItemsShape",
    "RequiredKeysShape",
    "Incomplete",
    "CompleteInvalid",
    "CompleteValid",
    "Verdict",
]
