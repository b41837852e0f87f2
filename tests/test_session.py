"""Tests for typespeed.session – running a whole test."""

from __future__ import annotations

import pytest

from conftest import FakeClock
from typespeed.config import TestConfig as Config
from typespeed.session import ACTIVE, FINISHED, IDLE, TypingTest


def type_text(test: TypingTest, text: str, clock: FakeClock = None, step_ms: float = 0) -> None:
    for ch in text:
        if clock is not None:
            clock.advance(step_ms)
        test.handle_key(ch)


@pytest.fixture()
def words_test(clock: FakeClock) -> TypingTest:
    return TypingTest(Config(mode="words", word_count=2), clock=clock, words=["hello", "world"])


@pytest.fixture()
def time_test(clock: FakeClock) -> TypingTest:
    return TypingTest(Config(mode="time", time_limit=5), clock=clock, words=["aa"] * 50)


# ---------------------------------------------------------------------------
# setup
# ---------------------------------------------------------------------------

class TestSetup:
    def test_generates_words_for_mode(self, clock):
        t = TypingTest(Config(mode="words", word_count=7), clock=clock)
        assert len(t.words) == 7
        t = TypingTest(Config(mode="time"), clock=clock)
        assert len(t.words) == 100

    def test_starts_idle(self, words_test):
        assert words_test.phase == IDLE
        assert not words_test.timer.running
        assert words_test.remaining_seconds == float("inf")

    def test_time_mode_limit(self, time_test):
        assert time_test.remaining_seconds == 5


# ---------------------------------------------------------------------------
# keystrokes
# ---------------------------------------------------------------------------

class TestHandleKey:
    def test_first_key_starts_timer(self, words_test, clock):
        clock.advance(1000)
        assert words_test.handle_key("h")
        assert words_test.phase == ACTIVE
        assert words_test.timer.start_time == 1000

    def test_ignored_key_reports_no_change(self, words_test):
        assert not words_test.handle_key("\x1b")

    def test_backspace_blocked_when_disabled(self, clock):
        t = TypingTest(Config(mode="words", backspace=False), clock=clock, words=["ab"])
        t.handle_key("x")
        assert not t.handle_key("", backspace=True)
        assert t.input.current.typed == "x"

    def test_words_mode_finishes_on_last_space(self, words_test, clock):
        type_text(words_test, "hello world ", clock, step_ms=1000)
        assert words_test.phase == FINISHED
        result = words_test.result
        assert result is not None
        assert result.total_words == 2
        assert result.correct_words == 2
        # first key starts the clock, eleven more keys at one second each
        assert result.elapsed_seconds == 11
        assert result.accuracy == 100

    def test_no_input_after_finish(self, words_test):
        type_text(words_test, "hello world ")
        assert not words_test.handle_key("x")


# ---------------------------------------------------------------------------
# ticks
# ---------------------------------------------------------------------------

class TestTick:
    def test_idle_tick_does_nothing(self, time_test, clock):
        clock.advance(5000)
        time_test.tick()
        assert time_test.phase == IDLE
        assert time_test.wpm_history == []

    def test_samples_once_per_second(self, time_test, clock):
        time_test.handle_key("a")
        for _ in range(25):
            clock.advance(100)
            time_test.tick()
        assert len(time_test.wpm_history) == 2
        assert time_test.current_stats.elapsed_seconds == 2.0

    def test_reads_elapsed_at_tick(self, time_test, clock):
        type_text(time_test, "aa aa ")
        clock.advance(1500)
        time_test.tick()
        # 4 chars + 2 spaces in 1.5 s
        assert time_test.current_stats.raw_wpm == pytest.approx(48)

    def test_time_mode_expires(self, time_test, clock):
        time_test.handle_key("a")
        clock.advance(5200)
        time_test.tick()
        assert time_test.phase == FINISHED
        assert time_test.result.elapsed_seconds == 5

    def test_history_feeds_consistency(self, time_test, clock):
        time_test.handle_key("a")
        for _ in range(5):
            type_text(time_test, "a aa ")
            clock.advance(1000)
            time_test.tick()
        assert time_test.phase == FINISHED
        assert 0 <= time_test.result.consistency <= 100
        assert len(time_test.wpm_history) == 5


class TestRestart:
    def test_fresh_state(self, time_test, clock):
        type_text(time_test, "aa a")
        clock.advance(2000)
        time_test.tick()
        fresh = time_test.restart()
        assert fresh is not time_test
        assert fresh.phase == IDLE
        assert fresh.wpm_history == []
        assert fresh.input.current_index == 0
        assert fresh.timer.start_time is None
        assert fresh.config == time_test.config
