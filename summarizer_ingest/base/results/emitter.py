"""Result emitter: the single point where a session's outcome is delivered.

The emitter converts a finalization outcome (``CompleteValid``,
``RepairSuccess``, ``RepairFailure``) or a transport failure into a
:class:`StructuredResult`, logs it, and hands it to the ``on_result``
callback. A second terminal emission raises ``IngestError(INTERNAL)``.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Union

from ..completeness.verdict import CompleteValid
from ..errors import ErrorCode, IngestError, TransportError
from ..logging import LogContext, get_logger, normalized_log_event
from ..repair.outcome import RepairFailure, RepairSuccess
from .partial_view import PartialView
from .structured_result import Err, FailureCategory, Ok, StructuredResult

ResultCallback = Callable[[StructuredResult], None]
PartialCallback = Callable[[PartialView], None]
FinalOutcome = Union[CompleteValid, RepairSuccess, RepairFailure]


class ResultEmitter:
    """Deliver partial views and exactly one terminal result."""

    def __init__(
        self,
        *,
        on_result: Optional[ResultCallback] = None,
        on_partial_update: Optional[PartialCallback] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._on_result = on_result
        self._on_partial = on_partial_update
        self._logger = logger or get_logger("ingest.result")
        self._ctx = ctx
        self._lock = threading.Lock()
        self._result: Optional[StructuredResult] = None

    @property
    def emitted(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[StructuredResult]:
        return self._result

    def emit_partial(self, text: str, status: str = "incomplete") -> PartialView:
        """Build a :class:`PartialView` and pass it to the partial callback."""
        if self.emitted:
            raise IngestError(ErrorCode.INTERNAL, "partial update after terminal result")
        view = PartialView(text=text, status=status)
        if self._on_partial is not None:
            self._on_partial(view)
        return view

    def emit(self, outcome: FinalOutcome, *, raw_text: str) -> StructuredResult:
        """Convert a finalization outcome into a result and deliver it."""
        if isinstance(outcome, CompleteValid):
            result: StructuredResult = Ok(value=outcome.value, raw_text=raw_text)
        elif isinstance(outcome, RepairSuccess):
            result = Ok(
                value=outcome.value,
                raw_text=raw_text,
                repaired_by=outcome.strategy if outcome.repaired else None,
            )
            if outcome.repaired:
                normalized_log_event(
                    self._logger,
                    "repair.succeeded",
                    self._ctx,
                    phase="finalize",
                    attempt=len(outcome.attempts),
                    chars=len(raw_text),
                    strategy=outcome.strategy,
                )
        elif isinstance(outcome, RepairFailure):
            result = Err(
                message=outcome.message,
                category=FailureCategory.REPAIR,
                raw_text=outcome.raw_text,
                code=ErrorCode.REPAIR_EXHAUSTED,
                attempts=outcome.attempts,
            )
            normalized_log_event(
                self._logger,
                "repair.failed",
                self._ctx,
                phase="finalize",
                attempt=len(outcome.attempts),
                error_code=ErrorCode.REPAIR_EXHAUSTED.value,
                chars=len(raw_text),
                level=logging.WARNING,
            )
        else:
            raise IngestError(ErrorCode.INTERNAL, f"unsupported outcome: {type(outcome).__name__}")
        return self._deliver(result)

    def emit_failure(self, error: IngestError, *, raw_text: str = "") -> StructuredResult:
        """Deliver a transport (or other pre-finalization) failure."""
        status = error.status_code if isinstance(error, TransportError) else None
        return self._deliver(
            Err(
                message=error.message,
                category=FailureCategory.TRANSPORT,
                raw_text=raw_text,
                code=error.code,
                status_code=status,
            )
        )

    def _deliver(self, result: StructuredResult) -> StructuredResult:
        with self._lock:
            if self._result is not None:
                raise IngestError(ErrorCode.INTERNAL, "result already emitted for this session")
            self._result = result
        if self._on_result is not None:
            self._on_result(result)
        return result


__all__ = ["ResultEmitter", "ResultCallback", "PartialCallback", "FinalOutcome"]
