"""String-literal aware text helpers for the repair strategies.

Most rewrites must not touch the inside of JSON string literals. The helpers
here split a document into string literals and the structural "gaps" between
them so a rewrite can run on the gaps only.
"""
from __future__ import annotations

import json
import re
from typing import Callable, List, Tuple

STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)

_PAIRS = {"[": "]", "{": "}"}
_lenient_decoder = json.JSONDecoder(strict=False)


def map_outside_strings(text: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to every region of ``text`` outside string literals."""
    out: List[str] = []
    pos = 0
    for match in STRING_LITERAL.finditer(text):
        out.append(transform(text[pos : match.start()]))
        out.append(match.group(0))
        pos = match.end()
    out.append(transform(text[pos:]))
    return "".join(out)


def scan_structure(text: str) -> Tuple[List[str], bool, bool, int]:
    """Walk ``text`` tracking open brackets outside strings.

    Returns ``(open_stack, in_string, trailing_escape, last_close_index)``.
    Mismatched closers are ignored.
    """
    stack: List[str] = []
    in_string = False
    escaped = False
    last_close = -1
    for index, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _PAIRS:
            stack.append(ch)
        elif ch in "]}":
            if stack and _PAIRS[stack[-1]] == ch:
                stack.pop()
            last_close = index
    return stack, in_string, escaped, last_close


def closers_for(stack: List[str]) -> str:
    """Return the closing brackets for ``stack`` innermost first."""
    return "".join(_PAIRS[opener] for opener in reversed(stack))


def loads_lenient(text: str):
    """Parse JSON allowing raw control characters inside strings."""
    return _lenient_decoder.decode(text)


def json_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


__all__ = [
    "STRING_LITERAL",
    "map_outside_strings",
    "scan_structure",
    "closers_for",
    "loads_lenient",
    "json_string",
]
