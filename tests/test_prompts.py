"""Tests for keyflow.prompts – the chunk-mode prompt queue."""

from __future__ import annotations

import pytest

from keyflow.errors import Exhausted, KeyflowError
from keyflow.prompts import PromptQueue
from keyflow.words import Prompt, WordSource


class TestPromptQueue:
    def test_pop_in_order_then_exhausted(self):
        queue = PromptQueue(WordSource(["cat", "dog", "bird"]).chunk(2))
        assert queue.pop_current() == Prompt("cat dog")
        assert queue.pop_current() == Prompt("bird")
        with pytest.raises(Exhausted):
            queue.pop_current()

    def test_peek_does_not_mutate(self):
        queue = PromptQueue([Prompt("one"), Prompt("two"), Prompt("three")])
        queue.pop_current()
        assert queue.peek_next() == "two"
        assert queue.peek_next() == "two"
        assert len(queue) == 2

    def test_peek_empty_returns_empty_string(self):
        queue = PromptQueue([Prompt("only")])
        queue.pop_current()
        assert queue.peek_next() == ""
        assert queue.is_empty()

    def test_exhausted_is_a_keyflow_error(self):
        with pytest.raises(KeyflowError):
            PromptQueue([]).pop_current()
