"""Continuous text buffer with a fixed-width visible slice for scroll mode."""

from __future__ import annotations


class SlidingWindow:
    def __init__(self, text: str, visible_width: int, offset: int = 0) -> None:
        if visible_width < 1:
            raise ValueError(f"visible width must be positive, got {visible_width}")
        self._text = text
        self._visible_width = visible_width
        self._offset = 0
        self.offset = offset

    @property
    def text(self) -> str:
        return self._text

    @property
    def visible_width(self) -> int:
        return self._visible_width

    @property
    def max_offset(self) -> int:
        return max(0, len(self._text) - self._visible_width)

    @property
    def offset(self) -> int:
        return self._offset

    @offset.setter
    def offset(self, value: int) -> None:
        self._offset = min(max(0, value), self.max_offset)

    def __len__(self) -> int:
        return len(self._text)

    def at_start(self) -> bool:
        return self._offset == 0

    def at_end(self) -> bool:
        return self._offset >= self.max_offset

    def shift_forward(self) -> bool:
        """Move one character ahead. Returns False when already at the end."""
        if self.at_end():
            return False
        self._offset += 1
        return True

    def shift_back(self) -> bool:
        """Move one character back. Returns False when already at the start."""
        if self.at_start():
            return False
        self._offset -= 1
        return True

    def visible_text(self) -> str:
        return self._text[self._offset:self._offset + self._visible_width]
