"""Pytest configuration for the ingestion test suite.

Fixtures:
- ``fake_clock``: deterministic clock injected into ``StreamAggregator``.
- ``log_capture``: parsed JSON payloads of every ``ingest`` log event.
- ``isolated_config`` (autouse): no ``.env`` file, no config file and no
  provider credentials leak in from the developer environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from summarizer_ingest.config import clear_config_cache
from summarizer_ingest.config.env import ENV_ALIASES, ENV_MAP

_PROVIDER_ENV_PREFIXES = ("OPENAI", "ANTHROPIC", "DEEPSEEK", "OPENROUTER", "OLLAMA", "CLAUDE")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Run each test against defaults only."""
    monkeypatch.setenv("INGEST_DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.delenv("INGEST_CONFIG_FILE", raising=False)
    names = set(ENV_MAP.values())
    for aliases in ENV_ALIASES.values():
        names.update(aliases)
    for prefix in _PROVIDER_ENV_PREFIXES:
        for suffix in ("MODEL", "BASE_URL", "HOST", "API_KEY"):
            names.add(f"{prefix}_{suffix}")
    for name in names:
        monkeypatch.delenv(name, raising=False)
    for name in (
        "INGEST_MAX_RETRIES",
        "INGEST_THROTTLE_MS",
        "INGEST_MIN_EAGER_CHARS",
        "INGEST_STOP_ON_COMPLETE",
        "INGEST_INACTIVITY_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


class FakeClock:
    """Callable clock returning seconds; advanced explicitly by tests."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


class _PayloadHandler(logging.Handler):
    """Collect the JSON payload of each record."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        payload["_level"] = record.levelno
        self.events.append(payload)


class LogCapture:
    def __init__(self, handler: _PayloadHandler) -> None:
        self._handler = handler

    @property
    def events(self) -> List[Dict[str, Any]]:
        return self._handler.events

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event") == event]

    def names(self) -> List[str]:
        return [e.get("event") for e in self.events]


@pytest.fixture()
def log_capture(monkeypatch: pytest.MonkeyPatch) -> Iterator[LogCapture]:
    """Capture ``ingest`` events at DEBUG level."""
    from summarizer_ingest.base.logging import get_logger

    monkeypatch.setenv("INGEST_LOG_LEVEL", "DEBUG")
    logger = get_logger("ingest")
    handler = _PayloadHandler()
    logger.addHandler(handler)
    try:
        yield LogCapture(handler)
    finally:
        logger.removeHandler(handler)
