"""Terminal typing practice: session engine and textual front end."""

from __future__ import annotations

from .config import SessionConfig
from .errors import ConfigError, Exhausted, KeyflowError
from .events import Backspace, Cancel, CharTyped, Resize
from .matcher import Verdict, match_input
from .prompts import PromptQueue
from .session import SessionController, SessionState, Snapshot
from .stats import SessionStats, StatsEvent
from .window import SlidingWindow
from .words import Prompt, WordSource

__version__ = "0.1.0"

__all__ = [
    "Backspace",
    "Cancel",
    "CharTyped",
    "ConfigError",
    "Exhausted",
    "KeyflowError",
    "Prompt",
    "PromptQueue",
    "Resize",
    "SessionConfig",
    "SessionController",
    "SessionState",
    "SessionStats",
    "SlidingWindow",
    "Snapshot",
    "StatsEvent",
    "Verdict",
    "WordSource",
    "__version__",
    "match_input",
]
