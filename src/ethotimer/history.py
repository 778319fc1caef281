"""Append-only ledger of activity transitions."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator, Optional

from .models import HistoryEvent, HistoryRow

_ONE_MILLISECOND = timedelta(milliseconds=1)


class HistoryLedger:
    """Ordered record of every activity start and stop.

    The ledger appends what it is given; deciding whether a transition is
    worth recording belongs to the caller. The first event is the time
    origin for exported durations.
    """

    def __init__(self) -> None:
        self._events: list[HistoryEvent] = []

    def record_transition(
        self, activity_id: int, is_start: bool, at: datetime
    ) -> HistoryEvent:
        event = HistoryEvent(activity_id=activity_id, timestamp=at, is_start=is_start)
        self._events.append(event)
        return event

    def last_event(self) -> Optional[HistoryEvent]:
        return self._events[-1] if self._events else None

    def clear(self) -> None:
        self._events.clear()

    def to_rows(self) -> list[HistoryRow]:
        """Return ``(seconds since first event, activity id, 0/1)`` per event."""
        if not self._events:
            return []
        origin = self._events[0].timestamp
        return [
            HistoryRow(
                duration_from_start_seconds=(
                    (event.timestamp - origin) // _ONE_MILLISECOND
                )
                / 1000.0,
                activity_id=event.activity_id,
                is_active=1 if event.is_start else 0,
            )
            for event in self._events
        ]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[HistoryEvent]:
        return iter(tuple(self._events))
