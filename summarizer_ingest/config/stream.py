"""Stream configuration loader.

Builds a :class:`StreamConfig` from, in order (later wins): model defaults,
the ``stream`` section of the external config file, ``INGEST_*``
environment variables and explicit overrides. Values are validated by the
pydantic model, so a malformed variable raises ``pydantic.ValidationError``.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from ..base.streaming.stream_config import StreamConfig
from .defaults import STREAM_ENV_FIELDS


def _env_stream_fields() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in STREAM_ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is None or not raw.strip():
            continue
        out[field] = raw.strip()
    return out


def get_stream_config(overrides: Optional[Mapping[str, Any]] = None) -> StreamConfig:
    """Return the effective :class:`StreamConfig`."""
    from . import load_external_config

    fields: Dict[str, Any] = {}
    section = load_external_config().get("stream")
    if isinstance(section, dict):
        fields |= section
    fields |= _env_stream_fields()
    if overrides:
        fields |= {k: v for k, v in overrides.items() if v is not None}
    return StreamConfig.model_validate(fields)


__all__ = ["get_stream_config"]
