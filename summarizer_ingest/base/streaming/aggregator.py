"""Stream aggregator: drive one session from transport chunks to a result.

Lifecycle of :meth:`StreamAggregator.run`:

1. ``IDLE -> STREAMING``; log ``stream.start``.
2. For every chunk of the reader (cancellation polled before each read):
   assemble complete lines, poll cancellation again, decode each line with
   the pending-fragment recovery described below, append deltas to the
   buffer and run a throttled tick.
3. At a tick the buffer is either reported as a :class:`PartialView` or, for
   JSON schemas with ``stop_on_complete``, finalized early when the
   completeness detector returns ``CompleteValid``.
4. On the terminal frame or reader exhaustion the buffer is finalized:
   text schemas emit the cleaned text, JSON schemas emit the parsed document
   or run the repair pipeline.

Pending-fragment recovery
-------------------------
A line whose payload fails to parse is kept as the pending fragment. The
next non-blank line is first decoded concatenated to it. When that fails but
the line decodes on its own, the fragment is dropped. Otherwise the line is
appended to the fragment and the retry counter grows. Once the counter
exceeds ``max_retries`` one last decode of the whole fragment is attempted
before it is dropped. The counter resets only when a frame decodes.

Failures
--------
Reader exceptions become :class:`TransportError` and are emitted as an
``Err`` with the transport category. Cancellation settles the session as
``CANCELLED`` without emitting anything.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Iterator, Optional

from ..cancellation import CancellationToken, CancelledError
from ..completeness.detector import check
from ..completeness.verdict import CompleteInvalid, CompleteValid, Verdict
from ..errors import TransportError, to_transport_error
from ..logging import LogContext, get_logger, normalized_log_event
from ..repair.outcome import RepairFailure
from ..repair.pipeline import repair
from ..results.emitter import FinalOutcome, ResultEmitter
from ..results.schema import TEXT, ResultSchema
from ..results.structured_result import StructuredResult
from ..utils.fences import clean_response_text
from .frames import (
    END_OF_STREAM,
    Delta,
    DeltaEvent,
    FrameDecoder,
    FrameResult,
    ParseError,
    Terminal,
    is_ignorable,
    starts_frame,
)
from .line_assembler import LineAssembler
from .session import SessionState, StreamSession
from .stream_config import StreamConfig
from .streaming_metrics import StreamMetrics


def _status_of(verdict: Verdict) -> str:
    if isinstance(verdict, CompleteValid):
        return "complete_valid"
    if isinstance(verdict, CompleteInvalid):
        return "complete_invalid"
    return "incomplete"


class StreamAggregator:
    """Accumulate decoded deltas for one session and emit its result."""

    def __init__(
        self,
        decoder: FrameDecoder,
        *,
        schema: ResultSchema = TEXT,
        config: Optional[StreamConfig] = None,
        emitter: Optional[ResultEmitter] = None,
        cancellation_token: Optional[CancellationToken] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._decoder = decoder
        self._schema = schema
        self._config = config or StreamConfig()
        self._logger = logger or get_logger("ingest.stream")
        self._emitter = emitter or ResultEmitter(logger=self._logger)
        self._token = cancellation_token
        self._clock = clock or time.perf_counter
        self.metrics = StreamMetrics()

    @property
    def emitter(self) -> ResultEmitter:
        return self._emitter

    def run(self, session: StreamSession, reader: Iterable[str]) -> Optional[StructuredResult]:
        """Consume ``reader`` and return the emitted result (``None`` if cancelled)."""
        ctx = LogContext(
            provider=session.provider.value, model=session.model, session_id=session.session_id
        )
        started = self._now_ms()
        session.transition(SessionState.STREAMING)
        session.last_emit_ms = started
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            emitted=False,
            chars=0,
            schema=self._schema.name,
        )
        try:
            for event in self._iter_events(session, reader, ctx):
                if event.terminal:
                    break
                self._append(session, event.text, started)
                early = self._tick(session, ctx)
                if early is not None:
                    self.metrics.early_completion = True
                    return self._settle(session, early, ctx, started)
            self._check_cancelled()
        except CancelledError as exc:
            return self._cancelled(session, exc, ctx, started)
        except TransportError as exc:
            return self._transport_failed(session, exc, ctx, started)
        return self._settle(session, self._finalize(session, ctx), ctx, started)

    # ------------------------------------------------------------------ reading
    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def _check_cancelled(self) -> None:
        if self._token is not None:
            self._token.raise_if_cancelled()

    def _read_chunks(self, session: StreamSession, reader: Iterable[str]) -> Iterator[str]:
        iterator = iter(reader)
        while True:
            self._check_cancelled()
            try:
                chunk = next(iterator)
            except StopIteration:
                return
            except Exception as exc:
                # a read interrupted by cancel() surfaces as an I/O error
                self._check_cancelled()
                raise to_transport_error(
                    exc, provider=session.provider.value, model=session.model
                ) from exc
            yield chunk

    def _iter_events(
        self, session: StreamSession, reader: Iterable[str], ctx: LogContext
    ) -> Iterator[DeltaEvent]:
        assembler = LineAssembler()
        for chunk in self._read_chunks(session, reader):
            for line in assembler.feed(chunk):
                self._check_cancelled()
                event = self._decode_line(session, line, ctx)
                if event is not None:
                    yield event
                    if event.terminal:
                        return
        for line in assembler.flush():
            event = self._decode_line(session, line, ctx)
            if event is not None:
                yield event
                if event.terminal:
                    return
        event = self._settle_pending(session, ctx)
        if event is not None:
            yield event
        yield END_OF_STREAM

    # ----------------------------------------------------------------- decoding
    def _decode_line(
        self, session: StreamSession, line: str, ctx: LogContext
    ) -> Optional[DeltaEvent]:
        if is_ignorable(line):
            return None
        pending = session.pending_fragment
        if not pending:
            frame = self._decoder.decode(line)
            if isinstance(frame, ParseError):
                return self._retry(session, frame.raw, ctx)
            return self._accept(session, frame, ctx)
        frame = self._decoder.decode(pending + line)
        if isinstance(frame, ParseError):
            standalone = self._decoder.decode(line)
            if not self._supersedes(standalone, line):
                return self._retry(session, pending + line, ctx)
            self._drop(session, ctx, reason="superseded")
            frame = standalone
        return self._accept(session, frame, ctx)

    @staticmethod
    def _supersedes(standalone: FrameResult, line: str) -> bool:
        """A line replaces the pending fragment only when it is a frame of its own."""
        if isinstance(standalone, (Delta, Terminal)):
            return True
        return not isinstance(standalone, ParseError) and starts_frame(line)

    def _retry(self, session: StreamSession, fragment: str, ctx: LogContext) -> Optional[DeltaEvent]:
        session.record_failed_decode(fragment)
        self.metrics.frames_retried += 1
        normalized_log_event(
            self._logger,
            "stream.frame.retry",
            ctx,
            phase="decode",
            attempt=session.retry_count,
            chars=len(fragment),
            level=logging.DEBUG,
        )
        if not session.retries_exhausted:
            return None
        frame = self._decoder.decode(session.pending_fragment.strip())
        if isinstance(frame, ParseError):
            self._drop(session, ctx, reason="retries_exhausted")
            return None
        return self._accept(session, frame, ctx)

    def _settle_pending(self, session: StreamSession, ctx: LogContext) -> Optional[DeltaEvent]:
        """Last chance for a fragment still pending when the reader is exhausted."""
        if not session.pending_fragment:
            return None
        frame = self._decoder.decode(session.pending_fragment.strip())
        if isinstance(frame, ParseError):
            self._drop(session, ctx, reason="end_of_stream")
            return None
        return self._accept(session, frame, ctx)

    def _drop(self, session: StreamSession, ctx: LogContext, *, reason: str) -> None:
        dropped = session.drop_pending()
        self.metrics.frames_dropped += 1
        normalized_log_event(
            self._logger,
            "stream.frame.dropped",
            ctx,
            phase="decode",
            attempt=session.retry_count,
            chars=len(dropped),
            reason=reason,
            level=logging.WARNING,
        )

    def _accept(
        self, session: StreamSession, frame: FrameResult, ctx: LogContext
    ) -> Optional[DeltaEvent]:
        session.record_decoded()
        if isinstance(frame, Delta):
            return DeltaEvent(frame.text) if frame.text else None
        if isinstance(frame, Terminal):
            return END_OF_STREAM
        error = getattr(frame, "error", None)
        if error:
            self.metrics.provider_errors += 1
            normalized_log_event(
                self._logger,
                "stream.provider_error",
                ctx,
                phase="decode",
                chars=len(session.buffer),
                provider_message=error,
                level=logging.WARNING,
            )
        return None

    # ------------------------------------------------------------- accumulation
    def _append(self, session: StreamSession, text: str, started: float) -> None:
        if self.metrics.deltas == 0:
            self.metrics.time_to_first_delta_ms = self._now_ms() - started
        session.append(text)
        self.metrics.deltas += 1
        self.metrics.chars = len(session.buffer)

    def _tick(self, session: StreamSession, ctx: LogContext) -> Optional[CompleteValid]:
        """Throttled check; returns a verdict when the session can finish early."""
        now = self._now_ms()
        buffer = session.buffer
        due = (now - session.last_emit_ms > self._config.throttle_ms) or (
            len(buffer) < self._config.min_eager_chars
        )
        if not due:
            return None
        session.last_emit_ms = now
        if self._schema.is_text:
            status = "text"
        else:
            verdict = check(buffer, self._schema.shape)
            if isinstance(verdict, CompleteValid) and self._config.stop_on_complete:
                return verdict
            status = _status_of(verdict)
        self._emitter.emit_partial(buffer, status)
        self.metrics.partial_updates += 1
        normalized_log_event(
            self._logger,
            "stream.partial",
            ctx,
            phase="stream",
            emitted=False,
            chars=len(buffer),
            status=status,
            level=logging.DEBUG,
        )
        return None

    # ------------------------------------------------------------- finalization
    def _finalize(self, session: StreamSession, ctx: LogContext) -> FinalOutcome:
        buffer = session.buffer
        if self._schema.is_text:
            return CompleteValid(clean_response_text(buffer))
        verdict = check(buffer, self._schema.shape)
        if isinstance(verdict, CompleteValid):
            return verdict
        normalized_log_event(
            self._logger,
            "repair.attempt",
            ctx,
            phase="finalize",
            chars=len(buffer),
            status=_status_of(verdict),
        )
        return repair(buffer, self._schema.repair_profile)

    def _settle(
        self, session: StreamSession, outcome: FinalOutcome, ctx: LogContext, started: float
    ) -> StructuredResult:
        failed = isinstance(outcome, RepairFailure)
        session.transition(SessionState.FAILED if failed else SessionState.DONE)
        self.metrics.total_duration_ms = self._now_ms() - started
        result = self._emitter.emit(outcome, raw_text=session.buffer)
        normalized_log_event(
            self._logger,
            "stream.error" if failed else "stream.end",
            ctx,
            phase="finalize",
            emitted=True,
            chars=len(session.buffer),
            error_code=None if result.ok else result.code.value,
            metrics=self.metrics.to_dict(),
            level=logging.WARNING if failed else logging.INFO,
        )
        return result

    def _transport_failed(
        self, session: StreamSession, exc: TransportError, ctx: LogContext, started: float
    ) -> StructuredResult:
        session.transition(SessionState.FAILED)
        self.metrics.total_duration_ms = self._now_ms() - started
        result = self._emitter.emit_failure(exc, raw_text=session.buffer)
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="stream",
            emitted=True,
            chars=len(session.buffer),
            error_code=exc.code.value,
            message=exc.message,
            level=logging.WARNING,
        )
        return result

    def _cancelled(
        self, session: StreamSession, exc: CancelledError, ctx: LogContext, started: float
    ) -> None:
        session.transition(SessionState.CANCELLED)
        self.metrics.total_duration_ms = self._now_ms() - started
        normalized_log_event(
            self._logger,
            "stream.cancelled",
            ctx,
            phase="stream",
            emitted=False,
            chars=len(session.buffer),
            reason=str(exc),
        )
        return None


__all__ = ["StreamAggregator"]
