from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict, List, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.widgets import Footer, Header, Static

from typespeed.config import MODES, TIME_LIMITS, WORD_COUNTS, TestConfig
from typespeed.corpus import list_available
from typespeed.engine import InputSession, WordSlot
from typespeed.layout import TapeWindow, layout_window
from typespeed.session import TypingTest
from typespeed.store import ScoreEntry, Store

logger = logging.getLogger(__name__)

THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "bg": "#323437",
        "text": "#d1d0c5",
        "text_dim": "#646669",
        "correct": "#d1d0c5",
        "incorrect": "#ca4754",
        "extra": "#7e2a33",
        "cursor": "#e2b714",
        "accent": "#e2b714",
        "stats": "#646669",
    },
    "light": {
        "bg": "#f3f2ee",
        "text": "#1f2328",
        "text_dim": "#6b7280",
        "correct": "#1f2328",
        "incorrect": "#d14343",
        "extra": "#8a3232",
        "cursor": "#c28e00",
        "accent": "#0f766e",
        "stats": "#6b7280",
    },
    "slate": {
        "bg": "#0b1220",
        "text": "#e5e7eb",
        "text_dim": "#64748b",
        "correct": "#a7f3d0",
        "incorrect": "#fca5a5",
        "extra": "#fb7185",
        "cursor": "#93c5fd",
        "accent": "#60a5fa",
        "stats": "#64748b",
    },
}

CTRL_BACKSPACE_KEYS = {"ctrl+backspace", "ctrl+w"}


# ---------------------------
# Rendering
# ---------------------------

def render_word(text: Text, slot: WordSlot, is_current: bool, cursor: int, theme: Dict[str, str]) -> None:
    word, typed = slot.word, slot.typed
    for i, ch in enumerate(word):
        if is_current and i == cursor:
            text.append(ch, style=f"reverse {theme['cursor']}")
        elif i >= len(typed):
            text.append(ch, style=theme["text_dim"])
        elif typed[i] == ch:
            text.append(ch, style=theme["correct"])
        else:
            text.append(ch, style=theme["incorrect"])

    # extra characters typed past the end of the word
    for i in range(len(word), len(typed)):
        if is_current and i == cursor:
            text.append(typed[i], style=f"reverse {theme['extra']}")
        else:
            text.append(typed[i], style=theme["extra"])

    if is_current and cursor >= max(len(word), len(typed)):
        text.append(" ", style=f"reverse {theme['cursor']}")
    else:
        text.append(" ")


def render_words(session: InputSession, terminal_width: int, one_line: bool, theme: Dict[str, str]) -> Text:
    window = layout_window(session, terminal_width, one_line)
    text = Text(no_wrap=True)

    def add_range(start: int, end: int) -> None:
        for i in range(start, end):
            render_word(
                text,
                session.slots[i],
                i == session.current_index,
                session.cursor_position,
                theme,
            )

    if isinstance(window, TapeWindow):
        text.append(" " * window.leading_pad)
        add_range(window.start, window.end)
        return text

    for n, row in enumerate(window.lines):
        if n:
            text.append("\n")
        if row is None:
            text.append(" ")
        else:
            add_range(row.start, row.end)
    return text


CHART_BLOCKS = "▁▂▃▄▅▆▇█"
CHART_HEIGHT = 8
CHART_MAX_WIDTH = 70


def render_wpm_chart(history: List[float], width: int, height: int, theme: Dict[str, str]) -> Text:
    """Bar chart of the per-second WPM samples, scaled from zero to the peak.

    Returns an empty Text when fewer than two samples exist.
    """
    text = Text(no_wrap=True)
    if len(history) < 2:
        return text

    width = max(1, width)
    peak = max(max(history), 1)
    samples = [history[i * len(history) // width] for i in range(width)]
    bars = [sample / peak * height for sample in samples]

    text.append("wpm over time\n", style=theme["text_dim"])
    for row in range(height - 1, -1, -1):
        line = ""
        for bar in bars:
            if bar >= row + 1:
                line += CHART_BLOCKS[-1]
            elif bar > row:
                idx = min(int((bar - row) * len(CHART_BLOCKS)), len(CHART_BLOCKS) - 1)
                line += CHART_BLOCKS[idx]
            else:
                line += " "
        text.append(line + "\n", style=theme["accent"])
    text.append("─" * width + "\n", style=theme["text_dim"])

    avg = sum(history) / len(history)
    text.append(
        f"max: {_round_half_up(peak)}  avg: {_round_half_up(avg)}  min: {_round_half_up(min(history))}",
        style=theme["text_dim"],
    )
    return text


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_clock(seconds: float) -> str:
    seconds = int(seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


# ---------------------------
# UI widgets
# ---------------------------

class StatsBar(Static):
    pass


class PromptView(Static):
    pass


class HelpBar(Static):
    pass


class ScoreBar(Static):
    pass


# ---------------------------
# App
# ---------------------------

class TypespeedApp(App):
    CSS = """
    #root {
        height: 100%;
        padding: 1 2;
    }

    StatsBar {
        border: round #1f2937;
        padding: 0 2;
        height: 4;
    }

    PromptView {
        border: round #1f2937;
        padding: 1 2;
        height: 7;
    }

    HelpBar {
        border: round #1f2937;
        padding: 0 2;
        height: 4;
    }

    ScoreBar {
        border: round #1f2937;
        padding: 0 2;
        height: 1fr;
    }
    """

    TITLE = "typespeed"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+r", "restart", "Restart", priority=True),
        Binding("ctrl+n", "cycle_mode", "Mode", priority=True),
        Binding("ctrl+d", "cycle_duration", "Length", priority=True),
        Binding("ctrl+l", "cycle_language", "Language", priority=True),
        Binding("ctrl+o", "toggle_one_line", "Tape", priority=True),
        Binding("ctrl+u", "toggle_punctuation", "Punctuation", priority=True),
        Binding("ctrl+e", "toggle_numbers", "Numbers", priority=True),
        Binding("ctrl+b", "toggle_backspace", "Backspace", priority=True),
        Binding("ctrl+t", "cycle_theme", "Theme", priority=True),
    ]

    def __init__(self, config: TestConfig, store: Optional[Store] = None) -> None:
        super().__init__()
        self.store = store or Store()
        self.languages = list_available()
        self.config = config
        self.test = TypingTest(config)

    @property
    def palette(self) -> Dict[str, str]:
        return THEMES.get(self.config.theme, THEMES["dark"])

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.prompt_view = PromptView()
            self.help_bar = HelpBar()
            self.score_bar = ScoreBar()
            yield self.stats_bar
            yield self.prompt_view
            yield self.help_bar
            yield self.score_bar
        yield Footer()

    def on_mount(self) -> None:
        self.apply_theme()
        self._render_all()
        self.set_interval(0.1, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        self._render_prompt()

    def apply_theme(self) -> None:
        palette = self.palette
        self.screen.styles.background = palette["bg"]
        for widget in (self.stats_bar, self.prompt_view, self.help_bar, self.score_bar):
            widget.styles.border = ("round", palette["text_dim"])

    # -- test lifecycle -----------------------------------------------------

    def _tick(self) -> None:
        if self.test.finished:
            return
        self.test.tick()
        self._render_stats()
        if self.test.finished:
            self._finish_run()

    def on_key(self, event: events.Key) -> None:
        if self.test.finished:
            return

        key = event.key
        if key in CTRL_BACKSPACE_KEYS:
            self.test.handle_key("", backspace=True, ctrl=True)
        elif key == "backspace":
            self.test.handle_key("", backspace=True)
        elif key == "space":
            self.test.handle_key(" ")
        elif event.is_printable and event.character:
            self.test.handle_key(event.character)
        else:
            return
        event.stop()

        self._render_prompt()
        self._render_stats()
        if self.test.finished:
            self._finish_run()

    def _finish_run(self) -> None:
        result = self.test.result
        if result is None:
            return
        if result.elapsed_seconds <= 0:
            logger.info("Run finished with no elapsed time, score not saved")
            scores = self.store.list_scores()
        else:
            scores = self.store.append_score(ScoreEntry.from_result(result))
            logger.debug("Saved score, %d on record", len(scores))
        self._render_stats()
        self._render_help()
        self._render_scorebar(scores)

    def _restart_with(self, config: TestConfig) -> None:
        self.config = config
        self.store.save_settings(config)
        self.test = TypingTest(config)
        self.apply_theme()
        self._render_all()

    # -- actions ------------------------------------------------------------

    def action_restart(self) -> None:
        self.test = self.test.restart()
        self._render_all()

    def action_cycle_mode(self) -> None:
        self._restart_with(replace(self.config, mode=self._cycle_value(self.config.mode, MODES)))

    def action_cycle_duration(self) -> None:
        if self.config.mode == "time":
            value = self._cycle_value(self.config.time_limit, TIME_LIMITS)
            self._restart_with(replace(self.config, time_limit=value))
        else:
            value = self._cycle_value(self.config.word_count, WORD_COUNTS)
            self._restart_with(replace(self.config, word_count=value))

    def action_cycle_language(self) -> None:
        self._restart_with(replace(self.config, language=self._cycle_value(self.config.language, self.languages)))

    def action_toggle_punctuation(self) -> None:
        self._restart_with(replace(self.config, punctuation=not self.config.punctuation))

    def action_toggle_numbers(self) -> None:
        self._restart_with(replace(self.config, numbers=not self.config.numbers))

    def action_toggle_backspace(self) -> None:
        self._restart_with(replace(self.config, backspace=not self.config.backspace))

    def action_toggle_one_line(self) -> None:
        self.config = replace(self.config, one_line=not self.config.one_line)
        self.store.save_settings(self.config)
        self.test.config = self.config
        self._render_all()

    def action_cycle_theme(self) -> None:
        self.config = replace(self.config, theme=self._cycle_value(self.config.theme, list(THEMES)))
        self.store.save_settings(self.config)
        self.apply_theme()
        self._render_all()

    def _cycle_value(self, current, options: List):
        if current not in options:
            return options[0]
        idx = options.index(current)
        return options[(idx + 1) % len(options)]

    # -- rendering ----------------------------------------------------------

    def _render_all(self) -> None:
        self._render_stats()
        self._render_prompt()
        self._render_help()
        self._render_scorebar(self.store.list_scores())

    def _render_prompt(self) -> None:
        width = self.prompt_view.size.width or self.size.width
        self.prompt_view.update(
            render_words(self.test.input, width, self.config.one_line, self.palette)
        )

    def _render_stats(self) -> None:
        theme = self.palette
        test = self.test
        stats = test.current_stats
        text = Text()

        if test.config.mode == "time":
            text.append("Time ", style=theme["stats"])
            text.append(format_clock(test.remaining_seconds), style=f"bold {theme['accent']}")
        else:
            done = sum(1 for s in test.input.slots if s.completed)
            text.append("Words ", style=theme["stats"])
            text.append(f"{done}/{len(test.input.slots)}", style=f"bold {theme['accent']}")
            text.append("  ", style=theme["stats"])
            text.append(format_clock(test.elapsed_seconds), style=theme["stats"])
        text.append("   ", style="")
        text.append(f"{test.config.mode} • {test.config.duration} • {test.config.language}", style=theme["stats"])
        text.append("\n", style="")

        result = test.result
        if result is not None:
            text.append("WPM ", style=theme["stats"])
            text.append(f"{result.wpm:.0f}", style=f"bold {theme['text']}")
            text.append("   Raw ", style=theme["stats"])
            text.append(f"{result.raw_wpm:.0f}", style=f"bold {theme['text']}")
            text.append("   Acc ", style=theme["stats"])
            text.append(f"{result.accuracy:.2f}%", style=f"bold {theme['text']}")
            text.append("   Consistency ", style=theme["stats"])
            text.append(f"{result.consistency:.2f}%", style=f"bold {theme['text']}")
            text.append("   Chars ", style=theme["stats"])
            text.append(
                f"{result.correct_chars}/{result.incorrect_chars}/{result.extra_chars}/{result.missed_chars}",
                style=theme["text"],
            )
        else:
            text.append("WPM ", style=theme["stats"])
            text.append(f"{stats.wpm:>5.1f}", style=f"bold {theme['text']}")
            text.append("   Acc ", style=theme["stats"])
            text.append(f"{stats.accuracy:>5.1f}%", style=f"bold {theme['text']}")
        self.stats_bar.update(text)

    def _render_help(self) -> None:
        theme = self.palette
        text = Text()
        if self.test.finished:
            text.append("Done. ", style=theme["accent"])
        elif self.test.phase == "idle":
            text.append("Start typing to begin. ", style=theme["accent"])
        text.append(
            "Ctrl+R restart  Ctrl+N mode  Ctrl+D length  Ctrl+L language  Ctrl+O tape  "
            "Ctrl+U punctuation  Ctrl+E numbers  Ctrl+B backspace  Ctrl+T theme  Ctrl+Q quit",
            style=theme["stats"],
        )
        self.help_bar.update(text)

    def _render_scorebar(self, scores: List[ScoreEntry]) -> None:
        theme = self.palette
        scoped = [
            s for s in scores
            if s.mode == self.config.mode and s.language == self.config.language
        ]
        text = Text()
        if self.test.result is not None:
            width = min((self.score_bar.size.width or self.size.width) - 10, CHART_MAX_WIDTH)
            chart = render_wpm_chart(self.test.wpm_history, width, CHART_HEIGHT, theme)
            if chart:
                text.append_text(chart)
                text.append("\n\n")
        text.append("Recent runs", style=f"bold {theme['text']}")
        text.append(f"  |  {self.config.mode} • {self.config.language}\n", style=theme["stats"])
        if not scoped:
            text.append("No saved runs yet.\n", style=theme["stats"])
        for s in scoped[:5]:
            text.append(f"{s.wpm:>5.0f} wpm", style=f"bold {theme['text']}")
            text.append(f"  {s.raw_wpm:>5.0f} raw", style=theme["stats"])
            text.append(f"  {s.accuracy:>6.2f}% acc", style=theme["text"])
            text.append(f"  {s.consistency:>6.2f}% con", style=theme["stats"])
            text.append(f"  {s.duration}", style=theme["stats"])
            text.append(f"  {s.timestamp}\n", style=theme["stats"])
        self.score_bar.update(text)
