"""Interactive terminal front end for the activity timers."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

import typer

from .coordinator import TimerSet
from .export import render
from .models import CsvExport
from .reporting import history_table, status_line
from .ticker import RefreshTicker
from .view import ViewState

logger = logging.getLogger(__name__)

STOP_KEY = "s"
CLEAR_KEY = "c"
VIEW_DATA_KEY = "v"
VIEW_TIMERS_KEY = "t"
DOWNLOAD_KEY = "d"
QUIT_KEYS = ("q", "\x03", "\x04")


class TerminalSession:
    """Maps single keypresses to timer intents and keeps a live status line."""

    def __init__(
        self,
        timers: TimerSet,
        export_dir: Callable[[], Path],
        echo: Callable[..., None] = typer.echo,
    ) -> None:
        self.timers = timers
        self.view = ViewState(timers)
        self._export_dir = export_dir
        self._echo = echo
        self._output_lock = threading.Lock()
        self.ticker = RefreshTicker(
            is_active=timers.any_active,
            on_tick=self.redraw,
            interval=timers.settings.refresh_interval,
        )

    def help_text(self) -> str:
        slots = ", ".join(
            f"{slot_id}={self.timers.label(slot_id)}" for slot_id in self.timers.slot_ids
        )
        return (
            f"Keys: {slots} | {STOP_KEY}=stop {CLEAR_KEY}=clear "
            f"{VIEW_DATA_KEY}=stop and view data {VIEW_TIMERS_KEY}=timers "
            f"{DOWNLOAD_KEY}=download .csv q=quit"
        )

    def run(self, read_key: Callable[[], str] = typer.getchar) -> None:
        self._echo(self.help_text())
        self.redraw()
        try:
            while self.handle_key(read_key()):
                pass
        except (KeyboardInterrupt, EOFError):
            self.handle_key("q")
        finally:
            self.ticker.stop()

    def handle_key(self, key: str) -> bool:
        """Dispatch one keypress; return False when the session should end."""
        if key in QUIT_KEYS:
            self.timers.stop_all()
            self.ticker.stop()
            self._line("")
            return False
        if key.isdigit() and int(key) in self.timers.slot_ids:
            if self.view.viewing_data:
                self.view.view_timers()
            if self.timers.activate(int(key)):
                self.ticker.ensure_running()
            self.redraw()
        elif key == STOP_KEY:
            self.timers.stop_all()
            self.redraw()
        elif key == CLEAR_KEY:
            self.timers.reset()
            self.redraw()
        elif key == VIEW_DATA_KEY:
            self.show_data()
        elif key == VIEW_TIMERS_KEY:
            self.view.view_timers()
            self._line(self.help_text())
            self.redraw()
        elif key == DOWNLOAD_KEY:
            self.download()
        else:
            logger.debug("Ignoring key %r.", key)
        return True

    def redraw(self) -> None:
        if self.view.viewing_data:
            return
        line = status_line(self.timers.snapshot())
        with self._output_lock:
            self._echo(f"\r{line}", nl=False)

    def show_data(self) -> None:
        rows = self.view.view_data()
        labels = {slot_id: self.timers.label(slot_id) for slot_id in self.timers.slot_ids}
        self._line("")
        for line in history_table(rows, labels):
            self._line(line)
        self._line("")
        self._line(render(rows))

    def download(self) -> Path:
        export: CsvExport = self.timers.export_csv()
        path = self._export_dir() / export.filename
        path.write_bytes(export.payload)
        logger.info("Wrote %d bytes to %s", len(export.payload), path)
        self._line("")
        self._line(f"Saved {path}")
        self.redraw()
        return path

    def _line(self, text: str) -> None:
        with self._output_lock:
            self._echo(text)
