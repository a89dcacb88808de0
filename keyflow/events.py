"""Decoded input events consumed by the session controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CharTyped:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Cancel:
    pass


Event = Union[CharTyped, Backspace, Resize, Cancel]
EVENT_TYPES = (CharTyped, Backspace, Resize, Cancel)
