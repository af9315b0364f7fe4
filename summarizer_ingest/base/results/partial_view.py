"""Progress snapshot handed to partial-update callbacks."""
from __future__ import annotations

from dataclasses import dataclass

from ..constants import PROGRESS_MESSAGE_TEMPLATE


@dataclass(frozen=True)
class PartialView:
    """Raw accumulated text at one throttle tick.

    ``status`` is ``"text"`` for text schemas, otherwise the completeness
    verdict observed at the tick (``"incomplete"`` or ``"complete_invalid"``).
    The text is never interpreted here.
    """

    text: str
    status: str = "incomplete"

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def progress_message(self) -> str:
        return PROGRESS_MESSAGE_TEMPLATE % self.length


__all__ = ["PartialView"]
