"""
Streaming ingestion service facade.

Purpose
-------
Wire a provider request builder, the pooled httpx client and a
``StreamAggregator`` into a single handle a caller can run, run in the
background, wait on or cancel.

Flow
----
1. ``start_stream`` validates the payload into a ``StreamRequestDTO`` and
   resolves the provider through ``ProviderFactory``. Validation problems
   raise ``IngestError(VALIDATION)`` synchronously.
2. ``StreamHandle.run`` builds the provider request, opens the streaming
   response and hands ``response.iter_text()`` to the aggregator.
3. Failures before the first chunk (missing key, non-2xx status, connect
   errors) never reach the aggregator: they are delivered as a ``TRANSPORT``
   ``Err`` through the same emitter so ``on_result`` still fires once.

Cancellation
------------
``cancel(handle)`` trips the handle's token. The token closes the live
response, which unblocks a pending read; the aggregator then settles the
session as ``CANCELLED`` and nothing is emitted.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken, CancelledError
from ..base.constants import ERROR_BODY_PREVIEW_CHARS
from ..base.dto.chat import CredentialsDTO, StreamRequestDTO
from ..base.errors import (
    ErrorCode,
    IngestError,
    TransportError,
    code_for_status,
    to_transport_error,
)
from ..base.factory import ProviderFactory
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.results.emitter import PartialCallback, ResultCallback, ResultEmitter
from ..base.results.schema import TEXT, ResultSchema
from ..base.results.structured_result import StructuredResult
from ..base.streaming.aggregator import StreamAggregator
from ..base.streaming.session import ProviderFamily, SessionState, StreamSession
from ..base.streaming.stream_config import StreamConfig
from ..base.streaming.streaming_metrics import StreamMetrics
from ..base.timeouts import build_httpx_timeout
from ..config import get_stream_config

RequestPayload = Union[StreamRequestDTO, Mapping[str, Any]]


def _validate_payload(payload: RequestPayload, provider: str) -> StreamRequestDTO:
    if isinstance(payload, StreamRequestDTO):
        return payload
    try:
        return StreamRequestDTO.model_validate(payload)
    except ValidationError as exc:
        raise IngestError(
            ErrorCode.VALIDATION, f"invalid request payload: {exc}", provider=provider, raw=exc
        ) from exc


def _status_error(response: httpx.Response, provider: str, model: str) -> TransportError:
    """Build a ``TransportError`` for a non-2xx response (body already read)."""
    status = response.status_code
    preview = response.text[:ERROR_BODY_PREVIEW_CHARS]
    return TransportError(
        code=code_for_status(status),
        message=f"HTTP {status}: {preview}" if preview else f"HTTP {status}",
        provider=provider,
        model=model,
        status_code=status,
    )


class StreamHandle:
    """One streaming request: run it inline or on a daemon thread."""

    def __init__(
        self,
        *,
        provider: Any,
        request: StreamRequestDTO,
        session: StreamSession,
        aggregator: StreamAggregator,
        config: StreamConfig,
        client: httpx.Client,
        token: CancellationToken,
        logger: logging.Logger,
    ) -> None:
        self._provider = provider
        self._request = request
        self._session = session
        self._aggregator = aggregator
        self._config = config
        self._client = client
        self._token = token
        self._logger = logger
        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()
        self._result: Optional[StructuredResult] = None

    @property
    def session(self) -> StreamSession:
        return self._session

    @property
    def metrics(self) -> StreamMetrics:
        return self._aggregator.metrics

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def result(self) -> Optional[StructuredResult]:
        return self._result

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def _ctx(self) -> LogContext:
        return LogContext(
            provider=self._session.provider.value,
            model=self._session.model,
            session_id=self._session.session_id,
        )

    def run(self) -> Optional[StructuredResult]:
        """Drive the stream to completion on the calling thread.

        Returns the emitted result, or ``None`` when the stream was cancelled.
        """
        try:
            self._result = self._run()
            return self._result
        finally:
            self._done.set()

    def _run(self) -> Optional[StructuredResult]:
        name = self._provider.provider_name
        model = self._session.model
        try:
            self._token.raise_if_cancelled()
            built = self._provider.build_request(self._request, model=model)
            timeout = build_httpx_timeout(self._config.inactivity_timeout_seconds)
            with self._client.stream(
                "POST", built.url, json=built.body, headers=built.headers, timeout=timeout
            ) as response:
                self._token.on_cancel(response.close)
                if not response.is_success:
                    response.read()
                    raise _status_error(response, name, model)
                return self._aggregator.run(self._session, response.iter_text())
        except CancelledError as exc:
            return self._cancelled_before_stream(exc)
        except TransportError as exc:
            return self._failed_before_stream(exc)
        except httpx.HTTPError as exc:
            if self._token.cancelled:
                return self._cancelled_before_stream(CancelledError(self._token.reason or "stream cancelled"))
            return self._failed_before_stream(to_transport_error(exc, provider=name, model=model))

    def _failed_before_stream(self, exc: TransportError) -> StructuredResult:
        self._session.transition(SessionState.FAILED)
        result = self._aggregator.emitter.emit_failure(exc, raw_text="")
        normalized_log_event(
            self._logger,
            "stream.error",
            self._ctx(),
            phase="request",
            emitted=True,
            chars=0,
            error_code=exc.code.value,
            status_code=exc.status_code,
            message=exc.message,
            level=logging.WARNING,
        )
        return result

    def _cancelled_before_stream(self, exc: CancelledError) -> None:
        if not self._session.finished:
            self._session.transition(SessionState.CANCELLED)
        normalized_log_event(
            self._logger,
            "stream.cancelled",
            self._ctx(),
            phase="request",
            emitted=False,
            chars=len(self._session.buffer),
            reason=str(exc),
        )
        return None

    def start(self) -> "StreamHandle":
        """Run the stream on a daemon thread; returns ``self`` for chaining."""
        if self._thread is not None:
            raise IngestError(ErrorCode.INTERNAL, "stream handle already started")
        self._thread = threading.Thread(
            target=self.run, name=f"ingest-{self._session.session_id[:8]}", daemon=True
        )
        self._thread.start()
        return self

    def wait(self, timeout: Optional[float] = None) -> Optional[StructuredResult]:
        """Block until the stream settles (or ``timeout`` elapses) and return the result."""
        self._done.wait(timeout)
        return self._result

    def cancel(self, reason: Optional[str] = None) -> None:
        self._token.cancel(reason)


def start_stream(
    provider: "str | ProviderFamily",
    model: Optional[str],
    request_payload: RequestPayload,
    credentials: Optional[CredentialsDTO] = None,
    *,
    schema: ResultSchema = TEXT,
    on_partial_update: Optional[PartialCallback] = None,
    on_result: Optional[ResultCallback] = None,
    config: Optional[StreamConfig] = None,
    client: Optional[httpx.Client] = None,
    cancellation_token: Optional[CancellationToken] = None,
) -> StreamHandle:
    """Prepare a streaming request and return its (not yet running) handle.

    Parameters
    ----------
    provider:
        Provider family (``openai``, ``claude``/``anthropic``, ``deepseek``,
        ``openrouter``, ``ollama``).
    model:
        Model name; ``None`` uses the provider's configured default.
    request_payload:
        ``StreamRequestDTO`` or a mapping validated into one.
    credentials:
        Per-call ``api_key`` / ``base_url`` overriding configuration.
    schema:
        How the final buffer is interpreted (text or JSON with a shape).
    client:
        Optional ``httpx.Client``; the pooled streaming client by default.
    """
    family = ProviderFamily.parse(provider)
    request = _validate_payload(request_payload, family.value)
    creds = credentials or CredentialsDTO()
    impl = ProviderFactory.create(family, api_key=creds.api_key, base_url=creds.base_url, model=model)
    resolved_model = model or impl.default_model()
    if not resolved_model:
        raise IngestError(ErrorCode.VALIDATION, "no model given or configured", provider=family.value)
    impl.validate_request(request)

    stream_config = config or get_stream_config()
    session = StreamSession(
        provider=family, model=resolved_model, max_retries=stream_config.max_retries
    )
    logger = get_logger("ingest.stream")
    emitter = ResultEmitter(
        on_result=on_result,
        on_partial_update=on_partial_update,
        logger=logger,
        ctx=LogContext(provider=family.value, model=resolved_model, session_id=session.session_id),
    )
    token = cancellation_token or CancellationToken()
    aggregator = StreamAggregator(
        impl.decoder(),
        schema=schema,
        config=stream_config,
        emitter=emitter,
        cancellation_token=token,
        logger=logger,
    )
    return StreamHandle(
        provider=impl,
        request=request,
        session=session,
        aggregator=aggregator,
        config=stream_config,
        client=client or get_httpx_client(purpose="stream"),
        token=token,
        logger=logger,
    )


def cancel(handle: StreamHandle, reason: Optional[str] = None) -> None:
    """Cancel a running or pending stream; no result is emitted afterwards."""
    handle.cancel(reason)


__all__ = ["StreamHandle", "start_stream", "cancel"]
