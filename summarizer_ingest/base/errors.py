"""Unified ingestion error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``summarizer_ingest.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.ingest_error import IngestError, TransportError
from .errors_parts.classification import (
    classify_exception,
    code_for_status,
    to_transport_error,
)

__all__ = [
    "ErrorCode",
    "IngestError",
    "TransportError",
    "classify_exception",
    "code_for_status",
    "to_transport_error",
]
