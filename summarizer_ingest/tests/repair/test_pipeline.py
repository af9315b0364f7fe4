"""Repair pipeline ordering, outcomes and determinism."""

from __future__ import annotations

import json

import pytest

from summarizer_ingest.base.repair import (
    CODE_REVIEW_PROFILE,
    RepairFailure,
    RepairSuccess,
    repair,
)

SAMPLES = [
    '{"a": 1}',
    '```json\n[{"a": 1}]\n```',
    '{"file" "test.rb", "severity": ""}',
    '[{"file": "a.rb", "current": "x" y "suggested": "z"}]',
    'Here: [{"a": 1}{"file": "a.rb", "current": }]',
    '[{"file": "a.rb", "current": "unterminated',
]


def test_plain_document_needs_no_strategy():
    outcome = repair('```json\n{"a": 1}\n```')
    assert isinstance(outcome, RepairSuccess)  # nosec B101
    assert outcome.strategy == "original" and not outcome.repaired  # nosec B101
    assert outcome.value == {"a": 1}  # nosec B101


def test_basic_literal_case():
    outcome = repair('{"file" "test.rb", "severity": ""}')
    assert outcome.strategy == "basic"  # nosec B101
    assert outcome.value == {"file": "test.rb", "severity": "Medium"}  # nosec B101
    assert [a.strategy for a in outcome.attempts] == ["original", "basic"]  # nosec B101
    assert outcome.attempts[0].error and outcome.attempts[1].ok  # nosec B101


def test_advanced_runs_when_basic_fails():
    outcome = repair('[{"file": "a.rb", "current": "x" y "suggested": "z"}]', CODE_REVIEW_PROFILE)
    assert outcome.strategy == "advanced"  # nosec B101
    assert outcome.value[0]["current"] == "x y"  # nosec B101
    assert not outcome.attempts[1].ok  # nosec B101


def test_strategies_run_on_the_original_text():
    raw = '[{"file": "a.rb", "current": "x" y "suggested": "z"}]'
    outcome = repair(raw, CODE_REVIEW_PROFILE)
    assert all(attempt.input == raw for attempt in outcome.attempts)  # nosec B101
    assert outcome.attempts[1].output == raw  # nosec B101
    assert outcome.attempts[2].output != raw  # nosec B101


def test_exhaustion_keeps_three_distinct_errors_and_raw_text():
    raw = 'Here: [{"a": 1}{"file": "a.rb", "current": }]'
    outcome = repair(raw)
    assert isinstance(outcome, RepairFailure)  # nosec B101
    errors = {outcome.original_error, outcome.basic_error, outcome.advanced_error}
    assert len(errors) == 3 and all(errors)  # nosec B101
    assert outcome.raw_text == raw  # nosec B101
    assert str(outcome) == (
        "JSON parsing failed after all repair attempts. "
        f"Original: {outcome.original_error}. "
        f"Basic repair: {outcome.basic_error}. "
        f"Advanced repair: {outcome.advanced_error}"
    )  # nosec B101


@pytest.mark.parametrize("raw", SAMPLES)
def test_repair_is_deterministic(raw):
    assert repair(raw, CODE_REVIEW_PROFILE) == repair(raw, CODE_REVIEW_PROFILE)  # nosec B101


@pytest.mark.parametrize("raw", SAMPLES[:4])
def test_repair_is_idempotent_on_its_own_output(raw):
    first = repair(raw, CODE_REVIEW_PROFILE)
    again = repair(json.dumps(first.value), CODE_REVIEW_PROFILE)
    assert again.strategy == "original" and again.value == first.value  # nosec B101
