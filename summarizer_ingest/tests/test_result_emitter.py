"""ResultEmitter delivers exactly one terminal result per session."""

from __future__ import annotations

import pytest

from summarizer_ingest.base.completeness import CompleteValid
from summarizer_ingest.base.errors import ErrorCode, IngestError, TransportError
from summarizer_ingest.base.repair import repair
from summarizer_ingest.base.results import Err, FailureCategory, Ok, ResultEmitter


def test_complete_valid_becomes_ok_without_repair_marker():
    delivered = []
    emitter = ResultEmitter(on_result=delivered.append)
    result = emitter.emit(CompleteValid([1]), raw_text="[1]")
    assert result == Ok(value=[1], raw_text="[1]")  # nosec B101
    assert delivered == [result] and result.ok  # nosec B101


def test_original_strategy_is_not_reported_as_repair():
    result = ResultEmitter().emit(repair('{"a": 1}'), raw_text='{"a": 1}')
    assert result.repaired_by is None  # nosec B101


def test_repair_success_reports_strategy(log_capture):
    result = ResultEmitter().emit(repair('{a: 1}'), raw_text="{a: 1}")
    assert result.repaired_by == "basic" and result.value == {"a": 1}  # nosec B101
    assert log_capture.named("repair.succeeded")[0]["strategy"] == "basic"  # nosec B101


def test_transport_failure_keeps_status_and_raw_text():
    error = TransportError(code=ErrorCode.RATE_LIMIT, message="HTTP 429", provider="openai", status_code=429)
    result = ResultEmitter().emit_failure(error, raw_text="partial")
    assert isinstance(result, Err) and not result.ok  # nosec B101
    assert result.category is FailureCategory.TRANSPORT  # nosec B101
    assert (result.code, result.status_code, result.raw_text) == (ErrorCode.RATE_LIMIT, 429, "partial")  # nosec B101


def test_second_emission_raises_internal():
    delivered = []
    emitter = ResultEmitter(on_result=delivered.append)
    emitter.emit(CompleteValid("x"), raw_text="x")
    with pytest.raises(IngestError) as exc:
        emitter.emit(CompleteValid("y"), raw_text="y")
    assert exc.value.code is ErrorCode.INTERNAL  # nosec B101
    with pytest.raises(IngestError):
        emitter.emit_partial("late")
    assert len(delivered) == 1 and emitter.result.value == "x"  # nosec B101


def test_partial_view_reports_progress():
    views = []
    view = ResultEmitter(on_partial_update=views.append).emit_partial("abc", "incomplete")
    assert views == [view]  # nosec B101
    assert view.length == 3 and view.progress_message == "Receiving response... (3 characters)"  # nosec B101
