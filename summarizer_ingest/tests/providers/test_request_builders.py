"""Per-provider streaming request construction."""

from __future__ import annotations

import pytest

from summarizer_ingest.anthropic import AnthropicProvider
from summarizer_ingest.anthropic.helpers import split_system_messages
from summarizer_ingest.base.constants import MISSING_API_KEY_ERROR
from summarizer_ingest.base.dto.chat import StreamRequestDTO
from summarizer_ingest.base.errors import ErrorCode, IngestError, TransportError
from summarizer_ingest.deepseek import DeepseekProvider
from summarizer_ingest.ollama import OllamaProvider
from summarizer_ingest.openai import OpenAIProvider
from summarizer_ingest.openrouter import OpenRouterProvider


def _request(**kwargs) -> StreamRequestDTO:
    messages = kwargs.pop(
        "messages",
        [
            {"role": "system", "content": "You review merge requests."},
            {"role": "user", "content": "Summarize this diff."},
        ],
    )
    return StreamRequestDTO(messages=messages, **kwargs)


def test_openai_request_shape():
    provider = OpenAIProvider(api_key="sk-live-123", base_url="https://api.local/v1/")
    built = provider.build_request(_request(max_tokens=256, temperature=0.2), model="gpt-4o")

    assert built.url == "https://api.local/v1/chat/completions"  # nosec B101
    assert built.headers["Authorization"] == "Bearer sk-live-123"  # nosec B101
    assert built.headers["Accept"] == "text/event-stream"  # nosec B101
    assert built.body == {
        "model": "gpt-4o",
        "messages": [
            {"role": "system", "content": "You review merge requests."},
            {"role": "user", "content": "Summarize this diff."},
        ],
        "stream": True,
        "max_tokens": 256,
        "temperature": 0.2,
    }  # nosec B101
    assert built.redacted_headers()["Authorization"] == "***"  # nosec B101


def test_default_model_and_extra_body_fields():
    provider = DeepseekProvider(api_key="sk-live-123")
    built = provider.build_request(_request(extra={"stream": False, "top_p": 0.9}))
    assert built.url == "https://api.deepseek.com/v1/chat/completions"  # nosec B101
    assert built.body["model"] == "deepseek-chat"  # nosec B101
    assert built.body["top_p"] == 0.9 and built.body["stream"] is True  # nosec B101


def test_openrouter_sends_attribution_headers():
    provider = OpenRouterProvider(api_key="sk-or-123", referer="https://summarizer.local")
    built = provider.build_request(_request())
    assert built.headers["X-Title"] == "summarizer-ingest"  # nosec B101
    assert built.headers["HTTP-Referer"] == "https://summarizer.local"  # nosec B101
    assert built.url == "https://openrouter.ai/api/v1/chat/completions"  # nosec B101


@pytest.mark.parametrize("provider_cls", [OpenAIProvider, DeepseekProvider, OpenRouterProvider, AnthropicProvider])
def test_missing_key_is_auth_transport_error(provider_cls):
    with pytest.raises(TransportError) as exc:
        provider_cls().build_request(_request())
    assert exc.value.code is ErrorCode.AUTH  # nosec B101
    assert exc.value.message == MISSING_API_KEY_ERROR  # nosec B101


def test_key_is_read_from_environment(monkeypatch):
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-env")
    built = AnthropicProvider().build_request(_request())
    assert built.headers["x-api-key"] == "sk-ant-env"  # nosec B101


def test_anthropic_extracts_system_and_defaults_max_tokens():
    provider = AnthropicProvider(api_key="sk-ant-123")
    built = provider.build_request(_request(), model="claude-3-5-haiku-latest")

    assert built.url == "https://api.anthropic.com/v1/messages"  # nosec B101
    assert built.headers["anthropic-version"] == "2023-06-01"  # nosec B101
    assert built.body == {
        "model": "claude-3-5-haiku-latest",
        "messages": [{"role": "user", "content": "Summarize this diff."}],
        "max_tokens": 4000,
        "system": "You review merge requests.",
        "stream": True,
    }  # nosec B101


def test_anthropic_joins_multiple_system_messages():
    request = _request(
        messages=[
            {"role": "system", "content": "A"},
            {"role": "system", "content": "B"},
            {"role": "user", "content": "go"},
        ]
    )
    system, turns = split_system_messages(request)
    assert system == "A\n\nB" and turns == [{"role": "user", "content": "go"}]  # nosec B101


def test_anthropic_requires_a_conversation_turn():
    with pytest.raises(IngestError) as exc:
        split_system_messages(_request(messages=[{"role": "system", "content": "only"}]))
    assert exc.value.code is ErrorCode.VALIDATION  # nosec B101


def test_ollama_posts_to_configured_host_without_key(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    built = OllamaProvider().build_request(_request(temperature=0.1, max_tokens=50))

    assert built.url == "http://gpu-box:11434/api/chat"  # nosec B101
    assert "Authorization" not in built.headers  # nosec B101
    assert built.body["options"] == {"temperature": 0.1, "num_predict": 50}  # nosec B101
    assert built.body["stream"] is True and built.body["model"] == "llama3.1"  # nosec B101
