"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `summarizer_ingest.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .ingest_error import IngestError, TransportError
from .classification import classify_exception, code_for_status, to_transport_error

__all__ = [
    "ErrorCode",
    "IngestError",
    "TransportError",
    "classify_exception",
    "code_for_status",
    "to_transport_error",
]
