"""FIFO of upcoming prompts for chunk mode."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable

from .errors import Exhausted
from .words import Prompt


class PromptQueue:
    """Prompts consumed strictly front to back.

    The current prompt is whatever ``pop_current`` returned last; the queue
    itself only holds future prompts.
    """

    def __init__(self, prompts: Iterable[Prompt]) -> None:
        self._pending: Deque[Prompt] = deque(prompts)

    def __len__(self) -> int:
        return len(self._pending)

    def is_empty(self) -> bool:
        return not self._pending

    def pop_current(self) -> Prompt:
        if not self._pending:
            raise Exhausted("prompt queue is empty")
        return self._pending.popleft()

    def peek_next(self) -> str:
        """Text of the prompt after the current one, or "" if none remains."""
        if not self._pending:
            return ""
        return self._pending[0].text
