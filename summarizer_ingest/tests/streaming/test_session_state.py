"""StreamSession state machine and buffer invariants."""

from __future__ import annotations

import pytest

from summarizer_ingest.base.errors import ErrorCode, IngestError
from summarizer_ingest.base.streaming.session import ProviderFamily, SessionState, StreamSession


def _session(**kwargs) -> StreamSession:
    return StreamSession(provider=ProviderFamily.OPENAI, model="gpt-4o-mini", **kwargs)


def test_family_parse_accepts_claude_alias_and_rejects_unknown():
    assert ProviderFamily.parse("Claude") is ProviderFamily.ANTHROPIC  # nosec B101
    assert ProviderFamily.parse(ProviderFamily.OLLAMA) is ProviderFamily.OLLAMA  # nosec B101
    with pytest.raises(IngestError) as exc:
        ProviderFamily.parse("gemini")
    assert exc.value.code is ErrorCode.UNSUPPORTED  # nosec B101


def test_legal_lifecycle_with_retry_loop():
    session = _session()
    session.transition(SessionState.STREAMING)
    session.record_failed_decode("data: {")
    assert session.state is SessionState.RETRYING and session.retry_count == 1  # nosec B101
    session.record_decoded()
    assert session.state is SessionState.STREAMING  # nosec B101
    assert session.retry_count == 0 and session.pending_fragment == ""  # nosec B101
    session.transition(SessionState.DONE)
    assert session.finished  # nosec B101


@pytest.mark.parametrize(
    "path",
    [
        (SessionState.DONE,),
        (SessionState.RETRYING,),
        (SessionState.STREAMING, SessionState.DONE, SessionState.STREAMING),
        (SessionState.STREAMING, SessionState.CANCELLED, SessionState.FAILED),
    ],
)
def test_illegal_transitions_raise_internal(path):
    session = _session()
    with pytest.raises(IngestError) as exc:
        for target in path:
            session.transition(target)
    assert exc.value.code is ErrorCode.INTERNAL  # nosec B101


def test_idle_may_fail_or_cancel_before_streaming():
    failed = _session()
    failed.transition(SessionState.FAILED)
    cancelled = _session()
    cancelled.transition(SessionState.CANCELLED)
    assert failed.finished and cancelled.finished  # nosec B101


def test_buffer_only_grows_and_is_frozen_after_finish():
    session = _session()
    session.transition(SessionState.STREAMING)
    session.append("ab")
    session.append("c")
    assert session.buffer == "abc"  # nosec B101
    session.transition(SessionState.DONE)
    with pytest.raises(IngestError):
        session.append("d")
    assert session.buffer == "abc"  # nosec B101


def test_drop_pending_keeps_retry_count():
    session = _session(max_retries=1)
    session.transition(SessionState.STREAMING)
    session.record_failed_decode("x")
    session.record_failed_decode("xy")
    assert session.retries_exhausted  # nosec B101
    assert session.drop_pending() == "xy"  # nosec B101
    assert session.state is SessionState.STREAMING and session.retry_count == 2  # nosec B101
