"""Mutually-exclusive activity timers and their transition history."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Optional

from .clock import Clock, SystemClock
from .config import TimerSettings
from .export import build_export, render
from .history import HistoryLedger
from .models import IDLE_ACTIVITY_ID, CsvExport, HistoryRow, SlotStatus, TimerSnapshot
from .timer import Timer

logger = logging.getLogger(__name__)


class TimerSet:
    """Owns every activity timer, the master timer and the history ledger.

    At most one activity slot runs at a time. The master timer runs exactly
    while some slot is running and measures the total session duration.
    Callers only read state and dispatch intents (``activate``, ``stop_all``,
    ``reset``); all mutation happens here, under a single lock.
    """

    def __init__(
        self,
        settings: Optional[TimerSettings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings or TimerSettings()
        self._clock = clock or SystemClock()
        self._slots: dict[int, Timer] = {
            slot_id: Timer(self._clock) for slot_id in self.settings.slot_ids
        }
        self._labels = dict(zip(self.settings.slot_ids, self.settings.slot_labels))
        self._master = Timer(self._clock)
        self._history = HistoryLedger()
        self._lock = threading.Lock()

    @property
    def slot_ids(self) -> tuple[int, ...]:
        return tuple(self._slots)

    def label(self, slot_id: int) -> str:
        self._timer(slot_id)
        return self._labels[slot_id]

    def activate(self, slot_id: int) -> bool:
        """Make ``slot_id`` the running activity, stopping any other.

        Returns True when the slot went from inactive to active. Activating the
        slot that is already running changes nothing and records nothing.
        """
        with self._lock:
            target = self._timer(slot_id)
            changed = not target.is_active()
            if changed:
                self._record_transition(slot_id, is_start=True)
                self._master.start()
            for other_id, timer in self._slots.items():
                if other_id != slot_id:
                    timer.stop()
            target.start()
        if changed:
            logger.info("Activity %d started (%s).", slot_id, self._labels[slot_id])
        else:
            logger.debug("Activity %d already running.", slot_id)
        return changed

    def stop_all(self) -> bool:
        """Stop every timer; return True if an idle marker was recorded."""
        with self._lock:
            last = self._history.last_event()
            recorded = last is not None and last.is_start
            if recorded:
                self._record_transition(IDLE_ACTIVITY_ID, is_start=False)
            for timer in self._slots.values():
                timer.stop()
            self._master.stop()
        if recorded:
            logger.info("All activities stopped.")
        return recorded

    def reset(self) -> None:
        """Zero every timer and discard the history."""
        with self._lock:
            for timer in self._slots.values():
                timer.clear()
            self._master.clear()
            self._history.clear()
        logger.info("Timers and history cleared.")

    def total_elapsed(self, slot_id: int) -> timedelta:
        with self._lock:
            return self._timer(slot_id).total_elapsed()

    def is_active(self, slot_id: int) -> bool:
        with self._lock:
            return self._timer(slot_id).is_active()

    def master_elapsed(self) -> timedelta:
        with self._lock:
            return self._master.total_elapsed()

    def any_active(self) -> bool:
        with self._lock:
            return any(timer.is_active() for timer in self._slots.values())

    def history_rows(self) -> list[HistoryRow]:
        with self._lock:
            return self._history.to_rows()

    def history_csv(self) -> str:
        return render(self.history_rows())

    def export_csv(self, when: Optional[datetime] = None) -> CsvExport:
        """Build the downloadable CSV; the filename is stamped with ``when``."""
        export = build_export(self.history_rows(), when or self._clock.now())
        logger.debug("Prepared export %s (%d bytes).", export.filename, len(export.payload))
        return export

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return TimerSnapshot(
                slots=tuple(
                    SlotStatus(
                        slot_id=slot_id,
                        label=self._labels[slot_id],
                        elapsed=timer.total_elapsed(),
                        is_active=timer.is_active(),
                    )
                    for slot_id, timer in self._slots.items()
                ),
                master_label=self.settings.master_label,
                master_elapsed=self._master.total_elapsed(),
            )

    def _timer(self, slot_id: int) -> Timer:
        try:
            return self._slots[slot_id]
        except KeyError:
            raise ValueError(f"Unknown activity slot: {slot_id}") from None

    def _record_transition(self, activity_id: int, is_start: bool) -> None:
        # Closes for the slots being replaced share the timestamp of the new
        # event and precede it.
        at = self._clock.now()
        last = self._history.last_event()
        if last is not None and at < last.timestamp:
            at = last.timestamp
        for slot_id, timer in self._slots.items():
            if slot_id != activity_id and timer.is_active():
                self._history.record_transition(slot_id, is_start=False, at=at)
        self._history.record_transition(activity_id, is_start=is_start, at=at)
