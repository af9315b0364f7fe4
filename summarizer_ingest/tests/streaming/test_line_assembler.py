"""LineAssembler keeps unterminated tails across chunks."""

from __future__ import annotations

from summarizer_ingest.base.streaming.line_assembler import LineAssembler


def test_feed_returns_only_complete_lines():
    assembler = LineAssembler()
    assert assembler.feed("a\nb") == ["a"]  # nosec B101
    assert assembler.pending == "b"  # nosec B101
    assert assembler.feed("c\r\nd\n") == ["bc", "d"]  # nosec B101
    assert assembler.flush() == []  # nosec B101


def test_flush_returns_unterminated_tail_once():
    assembler = LineAssembler()
    assembler.feed("tail\r")
    assert assembler.flush() == ["tail"]  # nosec B101
    assert assembler.flush() == []  # nosec B101


def test_empty_chunks_are_ignored():
    assembler = LineAssembler()
    assert assembler.feed("") == []  # nosec B101
    assert assembler.feed("\n\n") == ["", ""]  # nosec B101
