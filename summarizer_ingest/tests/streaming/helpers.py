"""Wire-format builders and a recording harness for aggregator tests."""

from __future__ import annotations

import json
from typing import Iterable, Iterator, List, Optional

from summarizer_ingest.base.results.emitter import ResultEmitter
from summarizer_ingest.base.results.partial_view import PartialView
from summarizer_ingest.base.results.structured_result import StructuredResult


def openai_line(content: str) -> str:
    payload = {"id": "chatcmpl-1", "object": "chat.completion.chunk", "choices": [{"index": 0, "delta": {"content": content}}]}
    return "data: " + json.dumps(payload)


def openai_body(*contents: str, done: bool = True) -> str:
    lines = [openai_line(c) + "\n\n" for c in contents]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines)


def claude_body(*texts: str) -> str:
    events = [
        ("message_start", {"type": "message_start", "message": {"id": "msg_1", "role": "assistant"}}),
        ("content_block_start", {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
        ("ping", {"type": "ping"}),
    ]
    for text in texts:
        events.append(
            (
                "content_block_delta",
                {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}},
            )
        )
    events += [
        ("content_block_stop", {"type": "content_block_stop", "index": 0}),
        ("message_delta", {"type": "message_delta", "delta": {"stop_reason": "end_turn"}}),
        ("message_stop", {"type": "message_stop"}),
    ]
    return "".join(f"event: {name}\ndata: {json.dumps(data)}\n\n" for name, data in events)


def ollama_body(*contents: str) -> str:
    lines = [
        json.dumps({"model": "llama3.1", "message": {"role": "assistant", "content": c}, "done": False})
        for c in contents
    ]
    lines.append(json.dumps({"model": "llama3.1", "message": {"role": "assistant", "content": ""}, "done": True}))
    return "\n".join(lines) + "\n"


def chunked(text: str, size: int) -> List[str]:
    """Split ``text`` into chunks of ``size`` characters."""
    return [text[i : i + size] for i in range(0, len(text), size)]


class Recorder:
    """Collect partial views and results delivered by a ``ResultEmitter``."""

    def __init__(self) -> None:
        self.partials: List[PartialView] = []
        self.results: List[StructuredResult] = []

    def on_partial(self, view: PartialView) -> None:
        self.partials.append(view)

    def on_result(self, result: StructuredResult) -> None:
        self.results.append(result)

    def emitter(self) -> ResultEmitter:
        return ResultEmitter(on_result=self.on_result, on_partial_update=self.on_partial)

    @property
    def result(self) -> Optional[StructuredResult]:
        return self.results[-1] if self.results else None


def failing_reader(chunks: Iterable[str], exc: BaseException) -> Iterator[str]:
    """Yield ``chunks`` then raise ``exc`` like a dropped connection."""
    yield from chunks
    raise exc
