"""Ollama provider package."""

from .client import OllamaProvider
from .stream_helpers import OllamaFrameDecoder

__all__ = ["OllamaProvider", "OllamaFrameDecoder"]
