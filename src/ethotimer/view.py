"""Routing state between the live timers and the recorded data."""

from __future__ import annotations

import logging

from .coordinator import TimerSet
from .models import HistoryRow

logger = logging.getLogger(__name__)


class ViewState:
    """Tracks whether the user is looking at exported data or live timers."""

    def __init__(self, timers: TimerSet) -> None:
        self._timers = timers
        self.viewing_data = False

    def view_data(self) -> list[HistoryRow]:
        """Stop all timers, switch to the data view and return the history.

        The rows are read once so every rendering of the view agrees.
        """
        self._timers.stop_all()
        self.viewing_data = True
        logger.debug("Switched to data view.")
        return self._timers.history_rows()

    def view_timers(self) -> None:
        self.viewing_data = False
        logger.debug("Switched to timers view.")
