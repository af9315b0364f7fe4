"""start_stream / cancel over an ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from summarizer_ingest.base.constants import MISSING_API_KEY_ERROR
from summarizer_ingest.base.dto.chat import CredentialsDTO
from summarizer_ingest.base.errors import ErrorCode, IngestError
from summarizer_ingest.base.results import CODE_REVIEW, Err, FailureCategory, Ok
from summarizer_ingest.base.streaming import SessionState, StreamConfig
from summarizer_ingest.service import cancel, start_stream

from ..streaming.helpers import chunked, claude_body, ollama_body, openai_body

PAYLOAD = {"messages": [{"role": "user", "content": "Review this diff."}]}
CREDS = CredentialsDTO(api_key="sk-live-123")


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _sse(body: str, size: int = 13):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=iter([c.encode("utf-8") for c in chunked(body, size)]),
        )

    return handler


def test_openai_stream_end_to_end():
    seen: List[httpx.Request] = []
    results = []
    document = '[{"file": "a.rb", "line": 3, "current": "x", "suggested": "y"}]'
    inner = _sse(openai_body(*chunked(document, 9)))

    def handler(request):
        seen.append(request)
        return inner(request)

    handle = start_stream(
        "openai", "gpt-4o-mini", PAYLOAD, CREDS, schema=CODE_REVIEW, on_result=results.append, client=_client(handler)
    )
    result = handle.run()

    assert isinstance(result, Ok) and result.value[0]["suggested"] == "y"  # nosec B101
    assert results == [result]  # nosec B101
    assert handle.session.state is SessionState.DONE  # nosec B101
    sent = json.loads(seen[0].content)
    assert sent["stream"] is True and sent["model"] == "gpt-4o-mini"  # nosec B101
    assert str(seen[0].url) == "https://api.openai.com/v1/chat/completions"  # nosec B101


def test_claude_and_ollama_streams():
    claude = start_stream("claude", None, PAYLOAD, CREDS, client=_client(_sse(claude_body("Hi", "!"))))
    ollama = start_stream("ollama", "llama3.1", PAYLOAD, client=_client(_sse(ollama_body("o", "k"))))

    assert claude.run() == Ok(value="Hi!", raw_text="Hi!")  # nosec B101
    assert ollama.run().value == "ok"  # nosec B101
    assert claude.session.model == "claude-3-5-sonnet-latest"  # nosec B101


@pytest.mark.parametrize(
    "status, code",
    [(401, ErrorCode.AUTH), (429, ErrorCode.RATE_LIMIT), (503, ErrorCode.UNAVAILABLE)],
)
def test_non_2xx_is_transport_err(status, code, log_capture):
    results = []

    def handler(request):
        return httpx.Response(status, json={"error": {"message": "nope"}})

    handle = start_stream("openai", None, PAYLOAD, CREDS, on_result=results.append, client=_client(handler))
    result = handle.run()

    assert isinstance(result, Err) and results == [result]  # nosec B101
    assert result.category is FailureCategory.TRANSPORT  # nosec B101
    assert result.code is code and result.status_code == status  # nosec B101
    assert "nope" in result.message  # nosec B101
    assert handle.session.state is SessionState.FAILED  # nosec B101
    assert log_capture.named("stream.error")[0]["status_code"] == status  # nosec B101


def test_connect_error_is_network_err():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = start_stream("deepseek", None, PAYLOAD, CREDS, client=_client(handler)).run()
    assert result.code is ErrorCode.NETWORK and result.raw_text == ""  # nosec B101


def test_missing_key_is_delivered_as_auth_err():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    result = start_stream("openrouter", None, PAYLOAD, client=_client(handler)).run()
    assert result.code is ErrorCode.AUTH and result.message == MISSING_API_KEY_ERROR  # nosec B101
    assert calls == []  # nosec B101


def test_invalid_payload_and_provider_raise_synchronously():
    with pytest.raises(IngestError) as exc:
        start_stream("openai", None, {"messages": []}, CREDS)
    assert exc.value.code is ErrorCode.VALIDATION  # nosec B101
    with pytest.raises(IngestError) as exc:
        start_stream("gemini", None, PAYLOAD, CREDS)
    assert exc.value.code is ErrorCode.UNSUPPORTED  # nosec B101


def test_claude_system_only_request_is_rejected_before_streaming():
    calls = []
    results = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200)

    system_only = {"messages": [{"role": "system", "content": "You review merge requests."}]}
    for creds in (CREDS, None):
        with pytest.raises(IngestError) as exc:
            start_stream("claude", None, system_only, creds, on_result=results.append, client=_client(handler))
        assert exc.value.code is ErrorCode.VALIDATION  # nosec B101
    assert calls == [] and results == []  # nosec B101

    handle = start_stream(
        "claude",
        None,
        {"messages": system_only["messages"] + [{"role": "user", "content": "Go."}]},
        CREDS,
        on_result=results.append,
        client=_client(_sse(claude_body("ok"))),
    ).start()
    assert handle.wait(timeout=10).value == "ok"  # nosec B101
    assert len(results) == 1 and len(calls) == 0  # nosec B101


def test_cancel_before_run_emits_nothing():
    results = []
    handle = start_stream("openai", None, PAYLOAD, CREDS, on_result=results.append, client=_client(_sse(openai_body("a"))))
    cancel(handle, "user closed popup")

    assert handle.run() is None and results == []  # nosec B101
    assert handle.session.state is SessionState.CANCELLED  # nosec B101


def test_cancel_mid_stream_from_partial_callback():
    results = []
    holder = {}

    def on_partial(view):
        if view.length >= 2:
            cancel(holder["handle"])

    holder["handle"] = start_stream(
        "openai",
        None,
        PAYLOAD,
        CREDS,
        on_partial_update=on_partial,
        on_result=results.append,
        client=_client(_sse(openai_body("a", "b", "c", "d"), size=400)),
    )
    handle = holder["handle"]

    assert handle.run() is None  # nosec B101
    assert results == [] and handle.session.buffer == "ab"  # nosec B101
    assert handle.session.state is SessionState.CANCELLED  # nosec B101


def test_start_runs_on_a_thread_and_wait_returns_result():
    handle = start_stream(
        "openai",
        None,
        PAYLOAD,
        CREDS,
        config=StreamConfig(throttle_ms=0),
        client=_client(_sse(openai_body("threaded"))),
    ).start()

    result = handle.wait(timeout=10)
    assert handle.done and result.value == "threaded"  # nosec B101
    with pytest.raises(IngestError):
        handle.start()


def test_stream_config_comes_from_environment(monkeypatch):
    monkeypatch.setenv("INGEST_MAX_RETRIES", "2")
    handle = start_stream("openai", None, PAYLOAD, CREDS, client=_client(_sse(openai_body("x"))))
    assert handle.session.max_retries == 2  # nosec B101
