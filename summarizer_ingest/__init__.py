"""summarizer_ingest package

Streaming response ingestion and progressive JSON repair for LLM providers
(OpenAI, Anthropic/Claude, DeepSeek, OpenRouter, Ollama).

Public API (re-exported):
    - Version: ``__version__``
    - Service: :func:`start_stream`, :func:`cancel`, :class:`StreamHandle`
    - Results: :class:`Ok`, :class:`Err`, :class:`PartialView` and the
      ``TEXT`` / ``ANY_JSON`` / ``CODE_REVIEW`` schemas
    - Repair: :func:`repair` for callers holding a finished buffer
    - Errors: :class:`IngestError`, :class:`ErrorCode`
"""

from .base.errors import ErrorCode, IngestError, TransportError
from .base.factory import ProviderFactory
from .base.repair import RepairFailure, RepairSuccess, repair
from .base.results import (
    ANY_JSON,
    CODE_REVIEW,
    TEXT,
    Err,
    Ok,
    PartialView,
    ResultSchema,
    StructuredResult,
    issue_actions,
)
from .base.streaming import StreamConfig
from .service import StreamHandle, cancel, start_stream

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Service
    "start_stream",
    "cancel",
    "StreamHandle",
    "StreamConfig",
    # Results
    "StructuredResult",
    "Ok",
    "Err",
    "PartialView",
    "ResultSchema",
    "TEXT",
    "ANY_JSON",
    "CODE_REVIEW",
    "issue_actions",
    # Repair
    "repair",
    "RepairSuccess",
    "RepairFailure",
    # Errors & factory
    "ErrorCode",
    "IngestError",
    "TransportError",
    "ProviderFactory",
]
