"""
OpenAI provider package.

Exports:
- OpenAIProvider: streaming request builder for OpenAI Chat Completions
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
