"""Start/stop accumulator for a single activity."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from .clock import Clock, SystemClock


class Timer:
    """Accumulates elapsed time across any number of start/stop runs.

    Starting a running timer and stopping a stopped one are no-ops, so every
    method is safe to call from any state.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self.accumulated = timedelta(0)
        self.running_since: Optional[datetime] = None

    def start(self) -> bool:
        """Start the timer; return False if it was already running."""
        if self.running_since is not None:
            return False
        self.running_since = self._clock.now()
        return True

    def stop(self) -> None:
        if self.running_since is None:
            return
        self.accumulated += self._running_for(self.running_since)
        self.running_since = None

    def clear(self) -> None:
        """Reset to zero, discarding any run in progress."""
        self.accumulated = timedelta(0)
        self.running_since = None

    def total_elapsed(self) -> timedelta:
        if self.running_since is None:
            return self.accumulated
        return self.accumulated + self._running_for(self.running_since)

    def is_active(self) -> bool:
        return self.running_since is not None

    def _running_for(self, since: datetime) -> timedelta:
        # Wall-clock adjustments must not make the total go backwards.
        return max(self._clock.now() - since, timedelta(0))

    def __repr__(self) -> str:
        return (
            f"Timer(accumulated={self.accumulated!r}, "
            f"running_since={self.running_since!r})"
        )
