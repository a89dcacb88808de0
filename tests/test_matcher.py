"""Tests for keyflow.matcher – per-character verdicts."""

from __future__ import annotations

import pytest

from keyflow.matcher import Verdict, is_correct_prefix, match_input

C, I, U = Verdict.CORRECT, Verdict.INCORRECT, Verdict.UNTYPED


class TestMatchInput:
    def test_mixed_verdicts(self):
        assert match_input("cat", ["c", "x"]) == [("c", C), ("a", I), ("t", U)]

    def test_nothing_typed(self):
        assert match_input("dog", []) == [("d", U), ("o", U), ("g", U)]

    def test_empty_target(self):
        assert match_input("", ["a"]) == []

    @pytest.mark.parametrize("typed", ["", "h", "hx", "hel", "hello", "xxxxx"])
    def test_length_and_untyped_positions(self, typed):
        verdicts = match_input("hello", list(typed))
        assert len(verdicts) == 5
        for i, (char, verdict) in enumerate(verdicts):
            assert char == "hello"[i]
            assert (verdict is U) == (i >= len(typed))

    def test_typed_beyond_target_is_ignored(self):
        assert match_input("ab", "abc") == [("a", C), ("b", C)]

    def test_does_not_mutate_input(self):
        typed = ["a", "b"]
        first = match_input("abc", typed)
        assert match_input("abc", typed) == first
        assert typed == ["a", "b"]


class TestIsCorrectPrefix:
    def test_prefix(self):
        assert is_correct_prefix("cat", "ca")
        assert is_correct_prefix("cat", "")

    def test_wrong_char(self):
        assert not is_correct_prefix("cat", "cx")

    def test_longer_than_target(self):
        assert not is_correct_prefix("cat", "cats")
