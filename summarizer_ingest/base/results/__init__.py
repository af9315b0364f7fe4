"""Result types, schemas and the single-shot result emitter."""

from .emitter import ResultEmitter
from .partial_view import PartialView
from .schema import ANY_JSON, CODE_REVIEW, TEXT, ResultKind, ResultSchema, issue_actions
from .structured_result import Err, FailureCategory, Ok, StructuredResult

__all__ = [
    "ResultEmitter",
    "PartialView",
    "ResultSchema",
    "ResultKind",
    "TEXT",
    "ANY_JSON",
    "CODE_REVIEW",
    "issue_actions",
    "Ok",
    "Err",
    "FailureCategory",
    "StructuredResult",
]
