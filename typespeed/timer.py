from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from typing import Optional


class MonotonicClock:
    """Milliseconds from ``time.monotonic()``."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


DEFAULT_CLOCK = MonotonicClock()


@dataclass(frozen=True)
class TimerState:
    start_time: Optional[float] = None
    elapsed_ms: float = 0.0
    limit_ms: Optional[float] = None  # None counts up (words mode)
    running: bool = False
    expired: bool = False


def create_timer(limit_seconds: Optional[float]) -> TimerState:
    return TimerState(limit_ms=limit_seconds * 1000.0 if limit_seconds else None)


def reset_timer(limit_seconds: Optional[float]) -> TimerState:
    return create_timer(limit_seconds)


def start_timer(state: TimerState, clock=DEFAULT_CLOCK) -> TimerState:
    return replace(state, start_time=clock.now(), running=True)


def tick_timer(state: TimerState, clock=DEFAULT_CLOCK) -> TimerState:
    if not state.running or state.start_time is None:
        return state

    elapsed = clock.now() - state.start_time
    expired = state.limit_ms is not None and elapsed >= state.limit_ms
    return replace(state, elapsed_ms=elapsed, expired=expired, running=not expired)


def elapsed_seconds(state: TimerState) -> float:
    return state.elapsed_ms / 1000.0


def remaining_seconds(state: TimerState) -> float:
    if state.limit_ms is None:
        return math.inf
    return max(0.0, (state.limit_ms - state.elapsed_ms) / 1000.0)
