"""Cooperative cancellation token behaviour."""

from __future__ import annotations

import pytest

from summarizer_ingest.base.cancellation import CancellationToken, CancelledError


def test_cancel_cascades_and_is_idempotent():
    parent = CancellationToken()
    child = parent.child()
    grandchild = child.child()

    parent.cancel("user abort")
    parent.cancel("second call")

    assert parent.cancelled and child.cancelled and grandchild.cancelled  # nosec B101
    assert grandchild.reason == "user abort"  # nosec B101


def test_child_linked_after_cancel_is_cancelled_immediately():
    parent = CancellationToken()
    parent.cancel("late")
    late = CancellationToken(parent=parent)
    assert late.cancelled and late.reason == "late"  # nosec B101


def test_cancelling_child_leaves_parent_running():
    parent = CancellationToken()
    child = parent.child()
    child.cancel()
    assert child.cancelled and not parent.cancelled  # nosec B101


def test_raise_if_cancelled_uses_reason_or_default():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError, match="stream cancelled"):
        token.raise_if_cancelled()

    other = CancellationToken()
    other.cancel("shutdown")
    with pytest.raises(CancelledError, match="shutdown"):
        other.raise_if_cancelled()


def test_on_cancel_callbacks_run_once():
    token = CancellationToken()
    calls = []
    token.on_cancel(lambda: calls.append("registered"))
    token.cancel()
    token.cancel()
    token.on_cancel(lambda: calls.append("after"))
    assert calls == ["registered", "after"]  # nosec B101
