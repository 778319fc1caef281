"""Periodic read-only refresh while any timer is running."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RefreshTicker:
    """Call ``on_tick`` every ``interval`` until ``is_active`` turns False.

    The activity check runs on every firing, before the callback, so the
    ticker cancels itself on the first tick after the last timer stops.
    Each ``ensure_running`` after a cancellation starts a fresh worker.
    """

    def __init__(
        self,
        is_active: Callable[[], bool],
        on_tick: Callable[[], None],
        interval: timedelta = timedelta(milliseconds=100),
        on_idle: Optional[Callable[[], None]] = None,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("Refresh interval must be positive.")
        self._is_active = is_active
        self._on_tick = on_tick
        self._on_idle = on_idle
        self._interval = interval.total_seconds()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    def ensure_running(self) -> bool:
        """Schedule the ticker unless it is already running."""
        with self._lock:
            if self._thread and self._thread.is_alive():
                return False
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run, args=(stop_event,), name="refresh-ticker", daemon=True
            )
            self._thread = thread
            self._stop_event = stop_event
            thread.start()
        logger.debug("Refresh ticker started.")
        return True

    def stop(self) -> None:
        thread: Optional[threading.Thread] = None
        with self._lock:
            if self._stop_event:
                self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._stop_event = None
        if thread and thread is not threading.current_thread():
            thread.join(timeout=5)

    def is_running(self) -> bool:
        with self._lock:
            return bool(self._thread and self._thread.is_alive())

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            if not self._is_active() and self._release(stop_event):
                logger.debug("No timer active; refresh ticker cancelled.")
                if self._on_idle is not None:
                    self._on_idle()
                return
            try:
                self._on_tick()
            except Exception:
                logger.exception("Refresh callback failed; stopping ticker.")
                with self._lock:
                    self._forget(stop_event)
                return

    def _release(self, stop_event: threading.Event) -> bool:
        """Give up the worker slot unless a timer started since the last check.

        Runs under the same lock as ``ensure_running``, so a timer started
        concurrently either finds the slot free or keeps this worker alive.
        """
        with self._lock:
            if self._is_active():
                return False
            self._forget(stop_event)
            return True

    def _forget(self, stop_event: threading.Event) -> None:
        if self._stop_event is stop_event:
            self._thread = None
            self._stop_event = None
