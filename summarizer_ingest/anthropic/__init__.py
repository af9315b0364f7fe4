"""Anthropic (Claude) provider package."""

from .client import AnthropicProvider
from .stream_helpers import AnthropicFrameDecoder

__all__ = ["AnthropicProvider", "AnthropicFrameDecoder"]
