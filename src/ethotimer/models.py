"""Domain models for recorded activity transitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

IDLE_ACTIVITY_ID = 0


@dataclass(slots=True, frozen=True)
class HistoryEvent:
    """A single timestamped start or stop of an activity."""

    activity_id: int
    timestamp: datetime
    is_start: bool


class HistoryRow(NamedTuple):
    duration_from_start_seconds: float
    activity_id: int
    is_active: int


@dataclass(slots=True, frozen=True)
class CsvExport:
    """Payload and proposed filename for a downloadable CSV file."""

    payload: bytes
    filename: str
    media_type: str = "application/octet-stream"


@dataclass(slots=True, frozen=True)
class SlotStatus:
    slot_id: int
    label: str
    elapsed: timedelta
    is_active: bool

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed.total_seconds()


@dataclass(slots=True, frozen=True)
class TimerSnapshot:
    """Point-in-time view of every timer, read under a single lock."""

    slots: tuple[SlotStatus, ...]
    master_label: str
    master_elapsed: timedelta

    @property
    def active_slot(self) -> Optional[SlotStatus]:
        for slot in self.slots:
            if slot.is_active:
                return slot
        return None
