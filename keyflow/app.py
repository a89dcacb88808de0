"""Textual front end: decodes key presses and paints session snapshots."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Static

from .config import SessionConfig
from .events import Backspace, Cancel, CharTyped, Event, Resize
from .matcher import Verdict
from .session import SessionController, SessionState, Snapshot
from .words import build_words

logger = logging.getLogger(__name__)

TICK_RATE = 0.5

THEMES: Dict[str, Dict[str, str]] = {
    "slate": {
        "stats_bg": "#0f172a",
        "prompt_bg": "#0b1220",
        "border": "#1f2937",
        "title": "#e5e7eb",
        "muted": "#64748b",
        "hint": "#93c5fd",
        "correct": "#86efac",
        "incorrect": "#fb7185",
        "untyped": "#cbd5e1",
        "preview": "#64748b",
    },
    "ember": {
        "stats_bg": "#21140e",
        "prompt_bg": "#1a1210",
        "border": "#3b1d14",
        "title": "#fef3c7",
        "muted": "#d6a08a",
        "hint": "#fbbf24",
        "correct": "#fde68a",
        "incorrect": "#f87171",
        "untyped": "#f3e8e1",
        "preview": "#d6a08a",
    },
    "mint": {
        "stats_bg": "#0b1c22",
        "prompt_bg": "#0a1b1f",
        "border": "#12323a",
        "title": "#d1fae5",
        "muted": "#7dd3c7",
        "hint": "#5eead4",
        "correct": "#5eead4",
        "incorrect": "#fb7185",
        "untyped": "#c7f9f1",
        "preview": "#7dd3c7",
    },
}


def decode_key(event: events.Key) -> Optional[Event]:
    """Map a textual key press to a session event, or None to drop it."""
    if event.key == "backspace":
        return Backspace()
    if event.key == "escape":
        return Cancel()
    if event.is_printable and event.character:
        return CharTyped(event.character)
    return None


# ---------------------------
# Rendering
# ---------------------------

def _metric(value: Optional[float], fmt: str) -> str:
    return "--" if value is None else format(value, fmt)


def render_prompt(snapshot: Snapshot, palette: Dict[str, str]) -> Text:
    styles = {
        Verdict.UNTYPED: palette["untyped"],
        Verdict.CORRECT: f"bold {palette['correct']}",
        Verdict.INCORRECT: f"bold {palette['incorrect']} underline",
    }
    text = Text()
    for i, (char, verdict) in enumerate(snapshot.verdicts):
        style = styles[verdict]
        if i == snapshot.cursor and not snapshot.finished:
            style = f"{style} reverse"
        text.append(char, style=style)
    if snapshot.preview:
        text.append("\n")
        text.append(snapshot.preview, style=palette["preview"])
    return text


def render_stats(snapshot: Snapshot, palette: Dict[str, str]) -> Text:
    stats = snapshot.stats
    text = Text()
    text.append("Time ", style=palette["muted"])
    text.append(f"{stats.minutes} min", style=f"bold {palette['title']}")
    text.append("   Mode ", style=palette["muted"])
    text.append(snapshot.policy, style=palette["title"])
    text.append("\n")
    for label, value in (
        ("Entries", str(stats.entries)),
        ("Mistakes", str(stats.mistakes)),
        ("Corrected", str(stats.corrected_mistakes)),
    ):
        text.append(f"{label} ", style=palette["muted"])
        text.append(value, style=f"bold {palette['title']}")
        text.append("   ")
    text.append("\n")
    text.append("Raw WPM ", style=palette["muted"])
    text.append(_metric(stats.raw_wpm, ">5.1f"), style=f"bold {palette['title']}")
    text.append("   Net WPM ", style=palette["muted"])
    text.append(_metric(stats.net_wpm, ">5.1f"), style=f"bold {palette['title']}")
    text.append("   Acc ", style=palette["muted"])
    acc = None if stats.accuracy is None else stats.accuracy * 100.0
    text.append(_metric(acc, ">5.1f") + ("%" if acc is not None else ""), style=f"bold {palette['title']}")
    return text


def render_help(state: SessionState, palette: Dict[str, str]) -> Text:
    text = Text()
    if state is SessionState.COMPLETED:
        text.append("Done. ", style=palette["hint"])
    elif state is SessionState.CANCELLED:
        text.append("Cancelled. ", style=palette["hint"])
    text.append("Esc cancel", style=palette["hint"])
    text.append("  ", style=palette["muted"])
    text.append("Ctrl+R restart", style=palette["hint"])
    text.append("  ", style=palette["muted"])
    text.append("Ctrl+T theme", style=palette["hint"])
    text.append("  ", style=palette["muted"])
    text.append("Ctrl+Q quit", style=palette["hint"])
    return text


# ---------------------------
# UI widgets
# ---------------------------

class StatsBar(Static):
    """Live stats."""
    pass


class PromptView(Static):
    """Target text with per-character verdicts."""
    pass


class HelpBar(Static):
    """Help / controls."""
    pass


# ---------------------------
# App
# ---------------------------

class TypingTUI(App):
    CSS = """
    #root {
        height: 100%;
        padding: 1 2;
    }

    StatsBar {
        border: round #1f2937;
        padding: 0 2;
        height: 5;
    }

    HelpBar {
        border: round #1f2937;
        padding: 0 2;
        height: 3;
    }

    PromptView {
        border: round #1f2937;
        padding: 1 2;
        height: 1fr;
    }
    """

    TITLE = "keyflow"
    SUB_TITLE = "typing practice"

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+r", "restart", "Restart"),
        ("ctrl+t", "cycle_theme", "Theme"),
    ]

    def __init__(self, word_pool: Sequence[str], config: Optional[SessionConfig] = None) -> None:
        super().__init__()
        self.session_config = config or SessionConfig()
        self.word_pool: List[str] = list(word_pool)
        self.theme_name = self.session_config.theme if self.session_config.theme in THEMES else "slate"
        self.palette = THEMES[self.theme_name]
        self._mounted = False
        # Built eagerly so configuration errors surface before the terminal is taken over.
        self.controller = self._new_controller()

    def _new_controller(self) -> SessionController:
        return SessionController(build_words(self.session_config, words=self.word_pool), self.session_config)

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.prompt_view = PromptView()
            self.help_bar = HelpBar()
            yield self.stats_bar
            yield self.prompt_view
            yield self.help_bar

    def on_mount(self) -> None:
        self.apply_theme()
        self._mounted = True
        self.controller.handle_event(Resize(self.size.width, self.size.height))
        self._render_all()
        self.set_interval(TICK_RATE, self._tick)

    def apply_theme(self) -> None:
        palette = self.palette
        border_def = ("round", palette["border"])
        self.stats_bar.styles.background = palette["stats_bg"]
        self.help_bar.styles.background = palette["stats_bg"]
        self.prompt_view.styles.background = palette["prompt_bg"]
        for widget in (self.stats_bar, self.help_bar, self.prompt_view):
            widget.styles.border = border_def

    def feed(self, event: Event) -> None:
        if self.controller.handle_event(event) and self._mounted:
            self._render_all()

    def on_key(self, event: events.Key) -> None:
        decoded = decode_key(event)
        if decoded is None:
            return
        event.stop()
        self.feed(decoded)

    def on_resize(self, event: events.Resize) -> None:
        self.feed(Resize(event.size.width, event.size.height))

    def _tick(self) -> None:
        if self.controller.finished:
            return
        self._render_stats(self.controller.peek())

    def action_restart(self) -> None:
        logger.info("Restarting session")
        self.controller = self._new_controller()
        self.controller.handle_event(Resize(self.size.width, self.size.height))
        self._render_all()

    def action_cycle_theme(self) -> None:
        names = list(THEMES)
        self.theme_name = names[(names.index(self.theme_name) + 1) % len(names)]
        self.palette = THEMES[self.theme_name]
        self.apply_theme()
        self._render_all()

    def _render_all(self) -> None:
        snapshot = self.controller.snapshot()
        self.prompt_view.update(render_prompt(snapshot, self.palette))
        self._render_stats(snapshot)
        self.help_bar.update(render_help(snapshot.state, self.palette))
        if snapshot.relayout:
            self.controller.lay_out(self.prompt_view.content_region.x)

    def _render_stats(self, snapshot: Snapshot) -> None:
        self.stats_bar.update(render_stats(snapshot, self.palette))
