"""JSON repair: profiles, strategies and the ``repair`` pipeline."""

from .outcome import RepairAttempt, RepairFailure, RepairOutcome, RepairSuccess
from .pipeline import repair
from .profile import CODE_REVIEW_PROFILE, DEFAULT_PROFILE, RepairProfile
from .strategies import (
    ADVANCED,
    BASIC,
    STRATEGIES,
    RepairStrategy,
    advanced_repair,
    basic_repair,
)

__all__ = [
    "repair",
    "basic_repair",
    "advanced_repair",
    "RepairStrategy",
    "BASIC",
    "ADVANCED",
    "STRATEGIES",
    "RepairProfile",
    "DEFAULT_PROFILE",
    "CODE_REVIEW_PROFILE",
    "RepairAttempt",
    "RepairSuccess",
    "RepairFailure",
    "RepairOutcome",
]
