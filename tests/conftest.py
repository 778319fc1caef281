"""Shared fixtures: a hand-driven clock and timer sets built on it."""

from datetime import datetime, timedelta

import pytest

from ethotimer.config import TimerSettings
from ethotimer.coordinator import TimerSet

START = datetime(2024, 5, 1, 10, 0, 0)


class FakeClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, start: datetime = START):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 0.0, milliseconds: float = 0.0) -> datetime:
        self.current += timedelta(seconds=seconds, milliseconds=milliseconds)
        return self.current

    def at(self, seconds: float) -> datetime:
        """Jump to ``seconds`` after the start time."""
        self.current = START + timedelta(seconds=seconds)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers(clock):
    return TimerSet(TimerSettings(), clock=clock)
