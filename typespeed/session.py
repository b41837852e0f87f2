from __future__ import annotations

import logging
from typing import List, Optional

from typespeed import engine, timer
from typespeed.config import TestConfig
from typespeed.corpus import Corpus, resolve
from typespeed.engine import InputSession
from typespeed.stats import StatsSnapshot, TestResult, build_result, calculate_stats
from typespeed.words import generate_words

logger = logging.getLogger(__name__)

IDLE = "idle"
ACTIVE = "active"
FINISHED = "finished"

SAMPLE_INTERVAL_MS = 1000.0


class TypingTest:
    """One run of the test: words, keystrokes, timer and speed samples.

    The owner feeds key events through :meth:`handle_key` in arrival order and
    calls :meth:`tick` periodically. Stats are sampled from the timer's elapsed
    time at the tick instant, once per second, and the raw WPM of each sample
    goes into ``wpm_history`` for the consistency score and the results chart.
    """

    def __init__(
        self,
        config: TestConfig,
        corpus: Optional[Corpus] = None,
        clock=timer.DEFAULT_CLOCK,
        rng=None,
        words: Optional[List[str]] = None,
    ) -> None:
        self.config = config
        self.clock = clock
        self._rng = rng
        self._corpus = corpus
        if words is None:
            words = generate_words(
                corpus or resolve(config.language),
                config.target_words,
                punctuation=config.punctuation,
                numbers=config.numbers,
                rng=rng,
            )
        self.words = list(words)
        self.phase = IDLE
        self.input: InputSession = engine.create_session(self.words)
        self.timer = timer.create_timer(config.limit_seconds)
        self.current_stats = StatsSnapshot()
        self.wpm_history: List[float] = []
        self.result: Optional[TestResult] = None
        self._next_sample_ms = SAMPLE_INTERVAL_MS

    @property
    def elapsed_seconds(self) -> float:
        return timer.elapsed_seconds(self.timer)

    @property
    def remaining_seconds(self) -> float:
        return timer.remaining_seconds(self.timer)

    @property
    def finished(self) -> bool:
        return self.phase == FINISHED

    def restart(self) -> "TypingTest":
        """A fresh run with the same config; nothing carries over."""
        return TypingTest(self.config, corpus=self._corpus, clock=self.clock, rng=self._rng)

    def handle_key(self, text: str, backspace: bool = False, ctrl: bool = False) -> bool:
        """Apply one key event. Returns True if the typing state changed."""
        if self.phase == FINISHED:
            return False
        if backspace and not self.config.backspace:
            return False

        if self.phase == IDLE:
            self.phase = ACTIVE
            self.timer = timer.start_timer(self.timer, self.clock)
            logger.debug("Test started (%s mode)", self.config.mode)

        before = self.input
        self.input = engine.process_keystroke(
            self.input, text, backspace_key=backspace, ctrl=ctrl, clock=self.clock
        )
        if self.input.finished:
            # Words ran out: the end of words mode, or an early end in time mode.
            self.timer = timer.tick_timer(self.timer, self.clock)
            self._finish()
        return self.input is not before

    def tick(self) -> None:
        if self.phase != ACTIVE:
            return

        self.timer = timer.tick_timer(self.timer, self.clock)
        if self.timer.elapsed_ms >= self._next_sample_ms:
            self.current_stats = calculate_stats(self.input, self.elapsed_seconds)
            self.wpm_history.append(self.current_stats.raw_wpm)
            while self._next_sample_ms <= self.timer.elapsed_ms:
                self._next_sample_ms += SAMPLE_INTERVAL_MS

        if self.timer.expired:
            self._finish()

    def _finish(self) -> None:
        if self.phase == FINISHED:
            return
        if self.config.limit_seconds and self.timer.expired:
            elapsed = float(self.config.limit_seconds)
        else:
            elapsed = self.elapsed_seconds
        self.current_stats = calculate_stats(self.input, elapsed)
        self.result = build_result(self.input, elapsed, self.wpm_history, self.config)
        self.phase = FINISHED
        logger.info(
            "Test finished: %.0f wpm, %.2f%% accuracy, %.2f%% consistency",
            self.result.wpm,
            self.result.accuracy,
            self.result.consistency,
        )
