"""Per-character comparison of typed input against target text."""

from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Tuple


class Verdict(Enum):
    UNTYPED = "untyped"
    CORRECT = "correct"
    INCORRECT = "incorrect"


def match_input(target: str, typed: Sequence[str]) -> List[Tuple[str, Verdict]]:
    """Pair every target character with its verdict.

    Positions past the typed prefix are UNTYPED; typed characters beyond the
    target length are ignored. Pure: neither argument is modified.
    """
    verdicts: List[Tuple[str, Verdict]] = []
    typed_len = len(typed)
    for i, expected in enumerate(target):
        if i >= typed_len:
            verdicts.append((expected, Verdict.UNTYPED))
        elif typed[i] == expected:
            verdicts.append((expected, Verdict.CORRECT))
        else:
            verdicts.append((expected, Verdict.INCORRECT))
    return verdicts


def is_correct_prefix(target: str, typed: Sequence[str]) -> bool:
    if len(typed) > len(target):
        return False
    return all(a == b for a, b in zip(typed, target))
