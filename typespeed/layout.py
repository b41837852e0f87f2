"""Which words are on screen.

Two display modes are supported. Wrap mode packs the words into lines and
shows three of them with the active line second, so there is always one
line of context above. Tape mode keeps the cursor at a fixed column and
slides a single row of words underneath it.

Nothing here keeps state between calls; every window is recomputed from
the current :class:`~typespeed.engine.InputSession`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from typespeed.engine import InputSession, WordSlot

VISIBLE_LINES = 3
MAX_LINE_WIDTH = 120
TAPE_ANCHOR = 0.35


@dataclass(frozen=True)
class LineRange:
    start: int
    end: int


@dataclass(frozen=True)
class WrapWindow:
    lines: Tuple[Optional[LineRange], ...]  # None is a blank row
    active_line: int
    first_line: int


@dataclass(frozen=True)
class TapeWindow:
    start: int
    end: int
    leading_pad: int


LayoutWindow = Union[WrapWindow, TapeWindow]


def display_width(terminal_width: int) -> int:
    return max(1, min(terminal_width - 4, MAX_LINE_WIDTH))


def compute_lines(slots: Sequence[WordSlot], max_width: int) -> List[LineRange]:
    # Target length only, so lines never reflow while extra chars are typed.
    lines: List[LineRange] = []
    line_start = 0
    width = 0
    for i, slot in enumerate(slots):
        word_width = len(slot.word) + 1
        if width + word_width > max_width and width > 0:
            lines.append(LineRange(line_start, i))
            line_start = i
            width = 0
        width += word_width

    if line_start < len(slots):
        lines.append(LineRange(line_start, len(slots)))
    return lines


def wrap_window(
    session: InputSession, max_width: int, visible: int = VISIBLE_LINES
) -> WrapWindow:
    lines = compute_lines(session.slots, max_width)

    current_line = 0
    for i, line in enumerate(lines):
        if line.start <= session.current_index < line.end:
            current_line = i
            break

    first = max(0, current_line - 1)
    rows = tuple(
        lines[first + i] if first + i < len(lines) else None for i in range(visible)
    )
    return WrapWindow(lines=rows, active_line=current_line - first, first_line=first)


def tape_window(session: InputSession, max_width: int) -> TapeWindow:
    slots = session.slots
    idx = session.current_index
    anchor = math.floor(max_width * TAPE_ANCHOR)

    current = slots[idx]
    display_len = max(len(current.word), len(current.typed))
    cursor_col = min(session.cursor_position, display_len)

    # Past words fill the columns left of the anchor.
    left_budget = anchor - cursor_col
    start = idx
    i = idx - 1
    while i >= 0 and left_budget > 0:
        width = max(len(slots[i].word), len(slots[i].typed)) + 1
        if width > left_budget:
            break
        left_budget -= width
        start = i
        i -= 1

    # Upcoming words fill what is left after the active word.
    right_budget = (max_width - anchor + cursor_col) - (display_len + 1)
    end = idx + 1
    i = idx + 1
    while i < len(slots) and right_budget > 0:
        width = len(slots[i].word) + 1
        if width > right_budget:
            break
        right_budget -= width
        end = i + 1
        i += 1

    return TapeWindow(start=start, end=end, leading_pad=max(0, left_budget))


def layout_window(session: InputSession, terminal_width: int, one_line: bool) -> LayoutWindow:
    width = display_width(terminal_width)
    if one_line:
        return tape_window(session, width)
    return wrap_window(session, width)
