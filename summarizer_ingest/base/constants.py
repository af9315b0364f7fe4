"""Base shared constants for the ingestion layer.

Central location to avoid scattering magic strings and default numbers
across decoders, the aggregator and the result emitter.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Server-sent events framing
SSE_DATA_PREFIX = "data:"
SSE_EVENT_PREFIX = "event:"
SSE_COMMENT_PREFIX = ":"
SSE_DONE_SENTINEL = "[DONE]"

# Stream aggregation defaults
DEFAULT_MAX_RETRIES = 5
DEFAULT_THROTTLE_MS = 1000.0
DEFAULT_MIN_EAGER_CHARS = 100

# Partial view
PROGRESS_MESSAGE_TEMPLATE = "Receiving response... (%d characters)"

# Transport error bodies are truncated to this many characters in messages
ERROR_BODY_PREVIEW_CHARS = 500

__all__ = [
    "MISSING_API_KEY_ERROR",
    "SSE_DATA_PREFIX",
    "SSE_EVENT_PREFIX",
    "SSE_COMMENT_PREFIX",
    "SSE_DONE_SENTINEL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_THROTTLE_MS",
    "DEFAULT_MIN_EAGER_CHARS",
    "PROGRESS_MESSAGE_TEMPLATE",
    "ERROR_BODY_PREVIEW_CHARS",
]
