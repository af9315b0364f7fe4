"""Text-to-text repair strategies for malformed JSON documents.

Each strategy is an ordered tuple of small rewrite steps. Steps are pure
``(text, profile) -> text`` functions, so a strategy's output depends only on
its input text and the :class:`RepairProfile`.

``basic``
    Cheap local fixes: preamble and fence removal, smart quotes, missing
    colons and commas, unquoted keys and values, empty-field defaults and
    removal, stray commas.
``advanced``
    Everything ``basic`` does plus: merging text fused between two string
    values, separating adjacent objects, closing truncated strings and
    brackets (or trimming trailing non-JSON when balanced), severity
    title-casing and optional array-root enforcement.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Tuple

from ..utils.fences import strip_code_fence
from .profile import DEFAULT_PROFILE, RepairProfile
from .text_utils import closers_for, json_string, map_outside_strings, scan_structure

RepairStep = Callable[[str, RepairProfile], str]

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```\s*$")
_SMART_DOUBLE_OPEN = re.compile(r"([{\[,:]\s*)[“”]")
_SMART_DOUBLE_CLOSE = re.compile(r"[“”](\s*[:,}\]])")
_SMART_SINGLE = re.compile(r"[‘’]")
_MISSING_COLON = re.compile(
    r'([{,]\s*)"([A-Za-z_][\w-]*)"\s+(?=["\[{\-\d]|true\b|false\b|null\b)'
)
_UNCLOSED_KEY = re.compile(r'([{,]\s*)"([A-Za-z_]\w*)\s+"(?!\s*[:,}\]])')
_MISSING_FIELD_COMMA = re.compile(r'"(\s*)"([A-Za-z_][\w-]*)"(\s*):')
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_][\w-]*)(\s*):")
_BARE_VALUE = re.compile(r':(\s*)([^"\s,\[\]{}][^",\[\]{}]*?)(?=\s*[,\]}])')
_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_EMPTY_KEY_EMPTY_VALUE = re.compile(r'""\s*:\s*""\s*,?')
_EMPTY_FIELD = re.compile(r'"(?:[^"\\]|\\.)*"\s*:\s*""\s*,?')
_REPEATED_COMMAS = re.compile(r",(\s*,)+")
_LEADING_COMMA = re.compile(r"([\[{]\s*),")
_TRAILING_COMMA = re.compile(r",(\s*[\]}])")
_FUSED_STRINGS = re.compile(
    r'("[A-Za-z_][\w-]*"\s*:\s*)"((?:[^"\\]|\\.)*)"\s*'
    r'([^",:\[\]{}\s][^",:\[\]{}]*?)\s*"(?=[A-Za-z_][\w-]*"\s*:)'
)
_ADJACENT_CONTAINERS = re.compile(r"([}\]])(\s*)([{\[])")
_DANGLING_KEY = re.compile(r',?\s*"(?:[^"\\]|\\.)*"\s*:\s*$')
_DANGLING_OBJECT_KEY = re.compile(r'([{,])\s*"(?:[^"\\]|\\.)*"\s*$')
_DANGLING_COMMA = re.compile(r",\s*$")


def _strip_preamble(text: str, _profile: RepairProfile) -> str:
    """Drop everything before the first ``[`` or ``{``."""
    text = text.strip()
    starts = [i for i in (text.find("["), text.find("{")) if i >= 0]
    if not starts:
        return text
    return text[min(starts) :]


def _strip_fences(text: str, _profile: RepairProfile) -> str:
    text = _FENCE_OPEN.sub("", text)
    return _FENCE_CLOSE.sub("", text)


def _normalize_quotes(text: str, _profile: RepairProfile) -> str:
    """Replace typographic quotes used as JSON delimiters."""
    text = _SMART_DOUBLE_OPEN.sub(r'\1"', text)
    text = _SMART_DOUBLE_CLOSE.sub(r'"\1', text)
    return _SMART_SINGLE.sub("'", text)


def _fix_missing_colons(text: str, _profile: RepairProfile) -> str:
    """``"key" "value"`` and ``"key "value"`` become ``"key": "value"``."""
    text = _MISSING_COLON.sub(r'\1"\2": ', text)
    return _UNCLOSED_KEY.sub(r'\1"\2": "', text)


def _fix_missing_field_commas(text: str, _profile: RepairProfile) -> str:
    """Insert the comma in ``"value" "next":``."""
    return _MISSING_FIELD_COMMA.sub(r'",\1"\2"\3:', text)


def _quote_property_names(text: str, _profile: RepairProfile) -> str:
    return map_outside_strings(text, lambda gap: _UNQUOTED_KEY.sub(r'\1"\2"\3:', gap))


def _render_bare(value: str) -> str:
    lowered = value.lower()
    if lowered in ("true", "false", "null"):
        return lowered
    if _NUMBER.fullmatch(value):
        return value
    return json_string(value)


def _quote_bare_values(text: str, _profile: RepairProfile) -> str:
    """Quote unquoted scalar values other than numbers, booleans and null."""

    def _gap(gap: str) -> str:
        return _BARE_VALUE.sub(
            lambda m: ":" + m.group(1) + _render_bare(m.group(2).strip()), gap
        )

    return map_outside_strings(text, _gap)


def _apply_empty_defaults(text: str, profile: RepairProfile) -> str:
    for field_name, default in profile.empty_field_defaults:
        rendered = default if _NUMBER.fullmatch(default) else json_string(default)
        pattern = re.compile(r'"' + re.escape(field_name) + r'"\s*:\s*""')
        text = pattern.sub(lambda _m: f'"{field_name}": {rendered}', text)
    return text


def _drop_empty_fields(text: str, _profile: RepairProfile) -> str:
    text = _EMPTY_KEY_EMPTY_VALUE.sub("", text)
    return _EMPTY_FIELD.sub("", text)


def _collapse_commas(text: str, _profile: RepairProfile) -> str:
    """Remove doubled, leading and trailing commas."""

    def _gap(gap: str) -> str:
        gap = _REPEATED_COMMAS.sub(",", gap)
        gap = _LEADING_COMMA.sub(r"\1", gap)
        return _TRAILING_COMMA.sub(r"\1", gap)

    return map_outside_strings(text, _gap)


def _merge_fused_strings(text: str, _profile: RepairProfile) -> str:
    """``"a": "x" y "b":`` becomes ``"a": "x y", "b":``."""

    def _merge(m: re.Match) -> str:
        tail = m.group(3).replace("\\", "\\\\")
        return f'{m.group(1)}"{m.group(2)} {tail}", "'

    return _FUSED_STRINGS.sub(_merge, text)


def _separate_adjacent_containers(text: str, _profile: RepairProfile) -> str:
    """Insert the comma in ``}{`` and ``][``."""
    return map_outside_strings(text, lambda gap: _ADJACENT_CONTAINERS.sub(r"\1,\2\3", gap))


def _close_or_trim(text: str, _profile: RepairProfile) -> str:
    """Close a truncated document, or trim trailing non-JSON from a whole one."""
    stack, in_string, escaped, last_close = scan_structure(text)
    if not in_string and not stack:
        return text[: last_close + 1] if last_close >= 0 else text
    if in_string:
        if escaped:
            text = text[:-1]
        text += '"'
    text = _DANGLING_KEY.sub("", text)
    if stack and stack[-1] == "{":
        text = _DANGLING_OBJECT_KEY.sub(r"\1", text)
    text = _DANGLING_COMMA.sub("", text)
    stack, _in_string, _escaped, _last = scan_structure(text)
    return text + closers_for(stack)


def _normalize_severity(text: str, profile: RepairProfile) -> str:
    pattern = re.compile(
        r'("' + re.escape(profile.severity_field) + r'"\s*:\s*)"(critical|high|medium|low)"',
        re.IGNORECASE,
    )
    return pattern.sub(lambda m: f'{m.group(1)}"{m.group(2).capitalize()}"', text)


def _force_array_root(text: str, profile: RepairProfile) -> str:
    if not profile.array_root:
        return text
    text = text.strip()
    if not text.startswith("["):
        text = "[" + text
    if not text.endswith("]"):
        text += "]"
    return text


@dataclass(frozen=True)
class RepairStrategy:
    """Named, ordered sequence of rewrite steps."""

    name: str
    steps: Tuple[RepairStep, ...]

    def apply(self, text: str, profile: RepairProfile = DEFAULT_PROFILE) -> str:
        repaired = text
        for step in self.steps:
            repaired = step(repaired, profile)
        return repaired


BASIC = RepairStrategy(
    "basic",
    (
        _strip_preamble,
        _strip_fences,
        _normalize_quotes,
        _fix_missing_colons,
        _fix_missing_field_commas,
        _quote_property_names,
        _apply_empty_defaults,
        _quote_bare_values,
        _drop_empty_fields,
        _collapse_commas,
    ),
)

ADVANCED = RepairStrategy(
    "advanced",
    (
        _strip_preamble,
        _strip_fences,
        _normalize_quotes,
        _merge_fused_strings,
        _fix_missing_colons,
        _fix_missing_field_commas,
        _separate_adjacent_containers,
        _close_or_trim,
        _quote_property_names,
        _apply_empty_defaults,
        _quote_bare_values,
        _drop_empty_fields,
        _collapse_commas,
        _normalize_severity,
        _force_array_root,
    ),
)

STRATEGIES: Tuple[RepairStrategy, ...] = (BASIC, ADVANCED)


def basic_repair(text: str, profile: RepairProfile = DEFAULT_PROFILE) -> str:
    """Apply the ``basic`` strategy to ``text``."""
    return BASIC.apply(text, profile)


def advanced_repair(text: str, profile: RepairProfile = DEFAULT_PROFILE) -> str:
    """Apply the ``advanced`` strategy to ``text``."""
    return ADVANCED.apply(text, profile)


def original_text(text: str) -> str:
    """Text used for the initial plain parse: trimmed, fence stripped."""
    return strip_code_fence(text)


__all__ = [
    "RepairStep",
    "RepairStrategy",
    "BASIC",
    "ADVANCED",
    "STRATEGIES",
    "basic_repair",
    "advanced_repair",
    "original_text",
]
