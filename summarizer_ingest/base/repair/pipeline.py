"""Repair pipeline: plain parse, then each strategy until one parses.

``repair`` is deterministic and side-effect free. Strategies always run
against the raw input text, not against a previous strategy's output.
"""
from __future__ import annotations

import json
from typing import List

from .outcome import RepairAttempt, RepairFailure, RepairOutcome, RepairSuccess
from .profile import DEFAULT_PROFILE, RepairProfile
from .strategies import STRATEGIES, original_text
from .text_utils import loads_lenient


def repair(text: str, profile: RepairProfile = DEFAULT_PROFILE) -> RepairOutcome:
    """Parse ``text`` as JSON, falling back to the repair strategies.

    Returns :class:`RepairSuccess` from the first attempt that parses
    (``"original"``, ``"basic"``, ``"advanced"``) or :class:`RepairFailure`
    carrying every parse error and ``text`` verbatim.
    """
    attempts: List[RepairAttempt] = []
    plain = original_text(text)
    try:
        value = json.loads(plain)
    except (ValueError, RecursionError) as exc:
        attempts.append(RepairAttempt("original", text, plain, str(exc)))
    else:
        attempts.append(RepairAttempt("original", text, plain))
        return RepairSuccess(value=value, strategy="original", attempts=tuple(attempts))

    for strategy in STRATEGIES:
        candidate = strategy.apply(text, profile)
        try:
            value = loads_lenient(candidate)
        except (ValueError, RecursionError) as exc:
            attempts.append(RepairAttempt(strategy.name, text, candidate, str(exc)))
            continue
        attempts.append(RepairAttempt(strategy.name, text, candidate))
        return RepairSuccess(value=value, strategy=strategy.name, attempts=tuple(attempts))

    errors = {attempt.strategy: attempt.error or "" for attempt in attempts}
    return RepairFailure(
        original_error=errors["original"],
        basic_error=errors["basic"],
        advanced_error=errors["advanced"],
        raw_text=text,
        attempts=tuple(attempts),
    )


__all__ = ["repair"]
