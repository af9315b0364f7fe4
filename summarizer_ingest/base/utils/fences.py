"""Markdown fence helpers shared by completeness checks, repair and text mode."""
from __future__ import annotations

import re

_JSON_FENCE_OPEN = re.compile(r"^```json\s*")
_ANY_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")
_HTML_FENCE = re.compile(r"```html\s*", re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Trim ``text`` and remove a wrapping markdown code fence.

    A leading fence (```json or a bare ```) and a trailing ``` are removed;
    an unterminated fence is tolerated so the function also works on the
    prefix of a streamed document.
    """
    trimmed = text.strip()
    if trimmed.startswith("```json"):
        trimmed = _JSON_FENCE_OPEN.sub("", trimmed)
        return _FENCE_CLOSE.sub("", trimmed)
    if trimmed.startswith("```"):
        trimmed = _ANY_FENCE_OPEN.sub("", trimmed)
        return _FENCE_CLOSE.sub("", trimmed)
    return trimmed


def clean_response_text(text: str) -> str:
    """Drop ```html openers and any remaining ``` markers from free text."""
    cleaned = _HTML_FENCE.sub("", text)
    return cleaned.replace("```", "").strip()


__all__ = ["strip_code_fence", "clean_response_text"]
