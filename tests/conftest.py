"""Shared fixtures: a hand-driven clock and a scripted random source."""

from __future__ import annotations

from typing import Iterable, List

import pytest


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.ms = start

    def now(self) -> float:
        return self.ms

    def advance(self, ms: float) -> None:
        self.ms += ms


class ScriptedRandom:
    """Returns the given values in order, then repeats the last one."""

    def __init__(self, values: Iterable[float]) -> None:
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
