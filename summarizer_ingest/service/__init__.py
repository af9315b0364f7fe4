"""Service facade: start, run and cancel streaming ingestion sessions."""

from .stream_service import StreamHandle, cancel, start_stream

__all__ = ["StreamHandle", "start_stream", "cancel"]
