"""Small text helpers shared across the base layer."""

from .fences import clean_response_text, strip_code_fence

__all__ = ["clean_response_text", "strip_code_fence"]
