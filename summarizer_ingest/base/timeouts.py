"""Timeout configuration for provider HTTP exchanges.

This module centralizes the timeout values applied to the streaming request
and turns them into an ``httpx.Timeout``. The stream phase has no default
limit: a session waits for the next chunk until the provider closes the body,
a network error occurs, or the caller cancels. An inactivity limit can be
opted into per stream (``StreamConfig.inactivity_timeout_seconds``) or
process-wide via the environment.

Key Components
--------------
TimeoutConfig
    Frozen dataclass with the normalized values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again whenever the relevant variables change. Supported
    environment variables (all optional, positive floats):
        INGEST_TIMEOUT_START_SECONDS
        INGEST_TIMEOUT_STREAM_SECONDS
        INGEST_TIMEOUT_WRITE_SECONDS

build_httpx_timeout(inactivity_seconds)
    Combines the cached config with a per-stream inactivity override.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

_ENV_START = "INGEST_TIMEOUT_START_SECONDS"
_ENV_STREAM = "INGEST_TIMEOUT_STREAM_SECONDS"
_ENV_WRITE = "INGEST_TIMEOUT_WRITE_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Connect/pool timeout for opening the stream.
        stream_timeout_seconds: Maximum wait between two body chunks; ``None``
            waits indefinitely.
        write_timeout_seconds: Timeout for sending the request body.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: Optional[float] = None
    write_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the supported variables changes so
    tests can adjust values with ``monkeypatch.setenv``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in (_ENV_START, _ENV_STREAM, _ENV_WRITE))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        start_timeout_seconds=float(_parse_env_float(_ENV_START, 30.0)),
        stream_timeout_seconds=_parse_env_float(_ENV_STREAM, None),
        write_timeout_seconds=float(_parse_env_float(_ENV_WRITE, 30.0)),
    )
    _ENV_GUARD = guard
    return _CACHED


def build_httpx_timeout(inactivity_seconds: Optional[float] = None) -> httpx.Timeout:
    """Build the ``httpx.Timeout`` for one streaming request.

    ``inactivity_seconds`` overrides the configured stream (read) timeout.
    """
    cfg = get_timeout_config()
    read = inactivity_seconds if inactivity_seconds is not None else cfg.stream_timeout_seconds
    return httpx.Timeout(
        connect=cfg.start_timeout_seconds,
        read=read,
        write=cfg.write_timeout_seconds,
        pool=cfg.start_timeout_seconds,
    )


__all__ = ["TimeoutConfig", "get_timeout_config", "build_httpx_timeout"]
