"""Speed, accuracy and consistency scoring.

WPM uses the usual five-characters-per-word convention:

  * **Net WPM** – characters of completed words typed exactly right, plus
    one space for each, / 5 / minutes. One wrong or extra character zeroes
    that word's contribution.
  * **Raw WPM** – every character keystroke plus one space per completed
    word, / 5 / minutes, regardless of correctness.
  * **Accuracy** – correct keypresses / all keypresses over the whole
    session, including corrected mistakes and spaces.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from typespeed.config import TestConfig
from typespeed.engine import InputSession


@dataclass(frozen=True)
class StatsSnapshot:
    wpm: float = 0.0
    raw_wpm: float = 0.0
    accuracy: float = 0.0
    correct_chars: int = 0
    incorrect_chars: int = 0
    extra_chars: int = 0
    missed_chars: int = 0
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class TestResult:
    wpm: float
    raw_wpm: float
    accuracy: float
    consistency: float
    correct_chars: int
    incorrect_chars: int
    extra_chars: int
    missed_chars: int
    total_words: int
    correct_words: int
    elapsed_seconds: float
    config: Optional[TestConfig] = None


def round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def calculate_stats(session: InputSession, elapsed_seconds: float) -> StatsSnapshot:
    if elapsed_seconds <= 0:
        return StatsSnapshot()

    correct_word_chars = 0
    correct_spaces = 0
    correct = incorrect = extra = missed = 0
    spaces = 0

    for slot in session.slots[: session.current_index + 1]:
        for record in slot.keystrokes:
            if record.extra:
                extra += 1
            elif record.correct:
                correct += 1
            else:
                incorrect += 1

        if not slot.completed:
            continue
        if len(slot.typed) < len(slot.word):
            missed += len(slot.word) - len(slot.typed)
        spaces += 1
        if slot.typed == slot.word:
            correct_word_chars += len(slot.word)
            correct_spaces += 1

    minutes = elapsed_seconds / 60.0
    wpm = round2((correct_word_chars + correct_spaces) / 5.0 / minutes)
    raw_wpm = round2((correct + incorrect + extra + spaces) / 5.0 / minutes)

    total = session.keypress_correct + session.keypress_incorrect
    accuracy = round2(session.keypress_correct / total * 100.0) if total else 100.0

    return StatsSnapshot(
        wpm=max(0.0, wpm),
        raw_wpm=max(0.0, raw_wpm),
        accuracy=accuracy,
        correct_chars=correct,
        incorrect_chars=incorrect,
        extra_chars=extra,
        missed_chars=missed,
        elapsed_seconds=elapsed_seconds,
    )


def kogasa(cov: float) -> float:
    """Map a coefficient of variation in [0, inf) onto a 100..0 score."""
    return 100.0 * (1.0 - math.tanh(cov + cov ** 3 / 3.0 + cov ** 5 / 5.0))


def calculate_consistency(history: Sequence[float]) -> float:
    if len(history) < 2:
        return 100.0

    mean = sum(history) / len(history)
    if mean == 0:
        return 0.0

    variance = sum((v - mean) ** 2 for v in history) / len(history)
    cov = math.sqrt(variance) / mean
    return min(100.0, max(0.0, round2(kogasa(cov))))


def build_result(
    session: InputSession,
    elapsed_seconds: float,
    history: Sequence[float],
    config: Optional[TestConfig] = None,
) -> TestResult:
    stats = calculate_stats(session, elapsed_seconds)
    completed = [s for s in session.slots if s.completed]
    return TestResult(
        wpm=float(math.floor(stats.wpm + 0.5)),
        raw_wpm=float(math.floor(stats.raw_wpm + 0.5)),
        accuracy=stats.accuracy,
        consistency=calculate_consistency(history),
        correct_chars=stats.correct_chars,
        incorrect_chars=stats.incorrect_chars,
        extra_chars=stats.extra_chars,
        missed_chars=stats.missed_chars,
        total_words=len(completed),
        correct_words=sum(1 for s in completed if s.typed == s.word),
        elapsed_seconds=elapsed_seconds,
        config=config,
    )
