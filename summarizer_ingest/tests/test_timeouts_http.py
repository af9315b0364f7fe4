"""Timeout resolution and the pooled httpx client."""

from __future__ import annotations

import httpx

from summarizer_ingest.base.http import close_all_clients, get_httpx_client
from summarizer_ingest.base.timeouts import build_httpx_timeout, get_timeout_config


def test_stream_read_timeout_defaults_to_unbounded(monkeypatch):
    for name in ("INGEST_TIMEOUT_START_SECONDS", "INGEST_TIMEOUT_STREAM_SECONDS", "INGEST_TIMEOUT_WRITE_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    timeout = build_httpx_timeout()
    assert timeout.read is None  # nosec B101
    assert timeout.connect == 30.0 and timeout.pool == 30.0  # nosec B101
    assert build_httpx_timeout(5).read == 5  # nosec B101


def test_environment_overrides_are_picked_up(monkeypatch):
    monkeypatch.setenv("INGEST_TIMEOUT_START_SECONDS", "2.5")
    monkeypatch.setenv("INGEST_TIMEOUT_STREAM_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.start_timeout_seconds == 2.5  # nosec B101
    assert cfg.stream_timeout_seconds is None  # nosec B101

    monkeypatch.setenv("INGEST_TIMEOUT_STREAM_SECONDS", "45")
    assert build_httpx_timeout().read == 45.0  # nosec B101


def test_pooled_client_is_reused_until_closed():
    close_all_clients()
    first = get_httpx_client(purpose="stream")
    assert get_httpx_client(purpose="stream") is first  # nosec B101
    assert get_httpx_client(purpose="probe") is not first  # nosec B101
    assert isinstance(first, httpx.Client)  # nosec B101

    close_all_clients()
    assert first.is_closed  # nosec B101
    assert get_httpx_client(purpose="stream") is not first  # nosec B101
    close_all_clients()
