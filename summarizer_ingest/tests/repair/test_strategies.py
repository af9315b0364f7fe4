"""Individual repair strategies on representative malformed documents."""

from __future__ import annotations

import json

import pytest

from summarizer_ingest.base.repair import CODE_REVIEW_PROFILE, advanced_repair, basic_repair


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"file" "test.rb", "severity": ""}', {"file": "test.rb", "severity": "Medium"}),
        ("{file: a.rb, line: 12, ok: true}", {"file": "a.rb", "line": 12, "ok": True}),
        ('{"id": 007, "delta": -0.5}', {"id": "007", "delta": -0.5}),
        ("{“file”: “a.rb”}", {"file": "a.rb"}),
        ('{"a": [1, 2,], }', {"a": [1, 2]}),
        ('Sure, here you go:\n```json\n{"a": 1}\n```', {"a": 1}),
        ('{"file": "a.rb", "line": "", "note": ""}', {"file": "a.rb", "line": 0}),
    ],
)
def test_basic_repairs(raw, expected):
    assert json.loads(basic_repair(raw)) == expected  # nosec B101


def test_basic_leaves_string_contents_alone():
    raw = '{"msg": "keep: this, as is", broken: yes}'
    assert json.loads(basic_repair(raw)) == {"msg": "keep: this, as is", "broken": "yes"}  # nosec B101


def test_advanced_closes_truncated_document():
    raw = '[{"file": "a.rb", "current": "x", "suggested": "y"}, {"file": "b.rb", "curr'
    value = json.loads(advanced_repair(raw))
    assert value == [{"file": "a.rb", "current": "x", "suggested": "y"}, {"file": "b.rb"}]  # nosec B101


def test_advanced_trims_trailing_commentary():
    raw = '{"a": 1} Let me know if you need anything else.'
    assert json.loads(advanced_repair(raw)) == {"a": 1}  # nosec B101


def test_advanced_separates_adjacent_objects_and_forces_array_root():
    raw = '{"file": "a.rb"} {"file": "b.rb"}'
    value = json.loads(advanced_repair(raw, CODE_REVIEW_PROFILE))
    assert value == [{"file": "a.rb"}, {"file": "b.rb"}]  # nosec B101


def test_advanced_title_cases_severity():
    raw = '[{"severity": "CRITICAL"}, {"severity": "low"}]'
    assert json.loads(advanced_repair(raw)) == [{"severity": "Critical"}, {"severity": "Low"}]  # nosec B101
