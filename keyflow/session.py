"""Practice-session state machine."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional, Sequence, Tuple, Union

from .config import POLICIES, SEGMENTATIONS, SessionConfig
from .errors import ConfigError, Exhausted
from .events import EVENT_TYPES, Backspace, Cancel, CharTyped, Event, Resize
from .matcher import Verdict, is_correct_prefix, match_input
from .prompts import PromptQueue
from .stats import SessionStats, StatsEvent, StatsSnapshot
from .window import SlidingWindow
from .words import Prompt, WordSource

logger = logging.getLogger(__name__)


class SessionState(Enum):
    LOADING = "loading"
    ACTIVE = "active"
    ADVANCING = "advancing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATES = (SessionState.COMPLETED, SessionState.CANCELLED)


# ---------------------------
# Windowing policies
# ---------------------------

class ChunkPolicy:
    """Discrete advancement through a queue of prompts."""

    name = "chunk"

    def __init__(self, prompts: Sequence[Prompt]) -> None:
        self._queue = PromptQueue(prompts)
        self._current: Optional[Prompt] = None

    @property
    def offset(self) -> int:
        return 0

    def current_text(self) -> str:
        return self._current.text if self._current is not None else ""

    def visible_width(self) -> int:
        return len(self.current_text())

    def preview(self) -> str:
        return self._queue.peek_next()

    def advance(self) -> bool:
        try:
            self._current = self._queue.pop_current()
        except Exhausted:
            self._current = None
            return False
        return True


class ScrollPolicy:
    """One long text viewed through a sliding window."""

    name = "scroll"

    def __init__(self, window: SlidingWindow) -> None:
        self._window = window

    @property
    def window(self) -> SlidingWindow:
        return self._window

    @property
    def offset(self) -> int:
        return self._window.offset

    def current_text(self) -> str:
        return self._window.visible_text()

    def visible_width(self) -> int:
        return self._window.visible_width

    def preview(self) -> str:
        return ""

    def advance(self) -> bool:
        return self._window.shift_forward()

    def retreat(self) -> bool:
        return self._window.shift_back()

    def exhausted(self) -> bool:
        return len(self._window) == 0


Policy = Union[ChunkPolicy, ScrollPolicy]


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame."""

    state: SessionState
    policy: str
    verdicts: List[Tuple[str, Verdict]]
    preview: str
    content_length: int
    offset: int
    cursor: int
    home_column: int
    viewport: Optional[Tuple[int, int]]
    relayout: bool
    stats: StatsSnapshot

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES


def validate_config(config: SessionConfig, words: Sequence[str]) -> None:
    if not words:
        raise ConfigError("word source is empty")
    if config.policy not in POLICIES:
        raise ConfigError(f"unknown policy {config.policy!r}")
    if config.segmentation not in SEGMENTATIONS:
        raise ConfigError(f"unknown segmentation {config.segmentation!r}")
    if config.policy == "chunk":
        if config.segmentation == "chunk" and config.chunk_size < 1:
            raise ConfigError(f"chunk size must be at least 1, got {config.chunk_size}")
        if config.segmentation == "wrap" and config.wrap_width < 1:
            raise ConfigError(f"wrap width must be at least 1, got {config.wrap_width}")
    else:
        if config.visible_width < 1:
            raise ConfigError(f"visible width must be at least 1, got {config.visible_width}")
        threshold = config.effective_threshold()
        if not 1 <= threshold <= config.visible_width:
            raise ConfigError(
                f"scroll threshold must be between 1 and {config.visible_width}, got {threshold}"
            )


# ---------------------------
# Controller
# ---------------------------

class SessionController:
    """Top-level state machine for one practice session.

    The host feeds decoded events to ``handle_event`` and pulls a
    ``Snapshot`` to render. Statistics are classified one event late: a
    keystroke is judged by the kind of event that came before it, so the very
    first keystroke, and the one after a resize, records nothing.

    In scroll mode the typed history is split between ``input_buffer`` (what
    lines up with the visible text) and ``hidden_prefix`` (characters that
    scrolled off the left edge, kept so backspace can bring them back).
    """

    def __init__(
        self,
        words: Sequence[str],
        config: Optional[SessionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or SessionConfig()
        validate_config(self._config, words)
        self._source = WordSource(words)
        self._clock = clock
        self._threshold = self._config.effective_threshold()
        self.viewport: Optional[Tuple[int, int]] = None
        self.reset()

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def reset(self) -> None:
        """Start a fresh session from the same words and configuration."""
        self.state = SessionState.LOADING
        self.stats = SessionStats(clock=self._clock)
        self.input_buffer: Deque[str] = deque()
        self.hidden_prefix: Deque[str] = deque()
        self.last_event: Optional[Event] = None
        self.home_column = 0
        self._layout_dirty = True
        self._policy = self._build_policy()
        self._start()

    def _build_policy(self) -> Policy:
        config = self._config
        if config.policy == "scroll":
            return ScrollPolicy(SlidingWindow(self._source.joined(), config.visible_width))
        if config.segmentation == "wrap":
            prompts = self._source.wrap(config.wrap_width)
        else:
            prompts = self._source.chunk(config.chunk_size)
        logger.debug("Segmented %d words into %d prompts", len(self._source), len(prompts))
        return ChunkPolicy(prompts)

    def _start(self) -> None:
        if isinstance(self._policy, ChunkPolicy):
            if not self._policy.advance():
                self._set_state(SessionState.COMPLETED)
                return
            self._set_state(SessionState.ACTIVE)
            self._advance_while_filled()
        else:
            if self._policy.exhausted():
                self._set_state(SessionState.COMPLETED)
                return
            self._set_state(SessionState.ACTIVE)

    def _set_state(self, state: SessionState) -> None:
        if state is not self.state:
            logger.debug("Session %s -> %s", self.state.value, state.value)
        self.state = state

    # -- events -----------------------------------------------------------

    def handle_event(self, event: Event) -> bool:
        """Apply one decoded event. Returns False if the session ignored it."""
        if not isinstance(event, EVENT_TYPES):
            raise TypeError(f"unsupported event: {event!r}")
        if isinstance(event, Cancel):
            self._set_state(SessionState.CANCELLED)
            self.last_event = event
            return True
        if self.finished:
            return False

        if isinstance(event, Resize):
            self.viewport = (event.width, event.height)
            self._layout_dirty = True
        elif isinstance(event, Backspace):
            self._delete()
        else:
            self._type(event.char)

        self.last_event = event
        return True

    def _type(self, char: str) -> None:
        self.input_buffer.append(char)
        if isinstance(self._policy, ScrollPolicy):
            self._scroll_forward_if_needed()
        self._classify()
        if isinstance(self._policy, ChunkPolicy):
            self._advance_while_filled()
        elif self._policy.window.at_end() and len(self.input_buffer) >= len(self._policy.current_text()):
            self._set_state(SessionState.COMPLETED)

    def _delete(self) -> None:
        if not self.input_buffer:
            return
        self.input_buffer.pop()
        if isinstance(self._policy, ScrollPolicy):
            self._scroll_back_if_needed()

    def _classify(self) -> None:
        previous = self.last_event
        if isinstance(previous, CharTyped):
            self.stats.record(StatsEvent.ENTRY)
            if not is_correct_prefix(self._policy.current_text(), self.input_buffer):
                self.stats.record(StatsEvent.MISTAKE)
        elif isinstance(previous, Backspace):
            self.stats.record(StatsEvent.CORRECTED_MISTAKE)

    def _advance_while_filled(self) -> None:
        # Overshooting keystrokes are dropped with the buffer, wrong or not.
        while self.state is SessionState.ACTIVE and len(self.input_buffer) >= self._policy.visible_width():
            self._set_state(SessionState.ADVANCING)
            self.input_buffer.clear()
            if self._policy.advance():
                self._set_state(SessionState.ACTIVE)
            else:
                self._set_state(SessionState.COMPLETED)

    # -- scrolling --------------------------------------------------------

    def cursor_column(self) -> int:
        return self.home_column + len(self.input_buffer)

    def _scroll_forward_if_needed(self) -> None:
        if self.cursor_column() > self.home_column + self._threshold and self._policy.advance():
            self.hidden_prefix.append(self.input_buffer.popleft())

    def _scroll_back_if_needed(self) -> None:
        if self.cursor_column() < self.home_column + self._threshold and self._policy.retreat():
            if self.hidden_prefix:
                self.input_buffer.appendleft(self.hidden_prefix.pop())

    def typed_history(self) -> str:
        return "".join(self.hidden_prefix) + "".join(self.input_buffer)

    # -- rendering --------------------------------------------------------

    def lay_out(self, home_column: int) -> None:
        """Record where the host painted the first visible character."""
        self.home_column = max(0, home_column)
        self._layout_dirty = False

    def snapshot(self) -> Snapshot:
        """Current frame. Reports a pending relayout once, then clears it."""
        snapshot = self.peek()
        self._layout_dirty = False
        return snapshot

    def peek(self) -> Snapshot:
        """Current frame without consuming a pending relayout."""
        target = self._policy.current_text()
        relayout = self._layout_dirty
        return Snapshot(
            state=self.state,
            policy=self._policy.name,
            verdicts=match_input(target, self.input_buffer),
            preview=self._policy.preview(),
            content_length=len(target),
            offset=self._policy.offset,
            cursor=len(self.input_buffer),
            home_column=self.home_column,
            viewport=self.viewport,
            relayout=relayout,
            stats=self.stats.snapshot(),
        )
