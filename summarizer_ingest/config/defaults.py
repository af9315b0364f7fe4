"""summarizer_ingest.config.defaults
==================================

Central place for small, stable default values used by the provider request
builders and the stream configuration loader. These defaults can be
overridden via environment variables or an external configuration file.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider-specific defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_APP_TITLE = "summarizer-ingest"

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet-latest"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 4000

OLLAMA_DEFAULT_MODEL = "llama3.1"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# ---- Configuration sources ----
CONFIG_FILE_ENV = "INGEST_CONFIG_FILE"
DOTENV_FILE_ENV = "INGEST_DOTENV_FILE"

# ---- Stream aggregation env overrides ----
STREAM_ENV_FIELDS = {
    "max_retries": "INGEST_MAX_RETRIES",
    "throttle_ms": "INGEST_THROTTLE_MS",
    "min_eager_chars": "INGEST_MIN_EAGER_CHARS",
    "stop_on_complete": "INGEST_STOP_ON_COMPLETE",
    "inactivity_timeout_seconds": "INGEST_INACTIVITY_TIMEOUT_SECONDS",
}
