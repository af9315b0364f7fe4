"""
Ingest Base Package

Exports the provider-agnostic pipeline used by every provider package:

- Streaming: frame contract, line assembly, session state, aggregator
- Completeness: bracket-gated trial parse with pluggable shape predicates
- Repair: ordered text strategies and the ``repair`` pipeline
- Results: ``StructuredResult``, ``PartialView``, ``ResultEmitter``, schemas
- Factory: lazy creation of providers and decoders by family name
"""

from .cancellation import CancellationToken, CancelledError
from .completeness import CompleteInvalid, CompleteValid, Incomplete, check
from .errors import ErrorCode, IngestError, TransportError
from .factory import ProviderFactory, UnknownProviderError, get_decoder
from .interfaces import StreamingProvider
from .models import ProviderRequest
from .repair import RepairFailure, RepairProfile, RepairSuccess, repair
from .results import (
    ANY_JSON,
    CODE_REVIEW,
    TEXT,
    Err,
    FailureCategory,
    Ok,
    PartialView,
    ResultEmitter,
    ResultSchema,
    StructuredResult,
    issue_actions,
)
from .streaming import (
    ProviderFamily,
    SessionState,
    StreamAggregator,
    StreamConfig,
    StreamMetrics,
    StreamSession,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors & cancellation
    "ErrorCode",
    "IngestError",
    "TransportError",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "ProviderFamily",
    "SessionState",
    "StreamSession",
    "StreamConfig",
    "StreamMetrics",
    "StreamAggregator",
    # Completeness & repair
    "check",
    "Incomplete",
    "CompleteValid",
    "CompleteInvalid",
    "repair",
    "RepairProfile",
    "RepairSuccess",
    "RepairFailure",
    # Results
    "StructuredResult",
    "Ok",
    "Err",
    "FailureCategory",
    "PartialView",
    "ResultEmitter",
    "ResultSchema",
    "TEXT",
    "ANY_JSON",
    "CODE_REVIEW",
    "issue_actions",
    # Providers
    "ProviderFactory",
    "UnknownProviderError",
    "get_decoder",
    "StreamingProvider",
    "ProviderRequest",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
