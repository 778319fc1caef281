"""Human-readable rendering of timers and history for the console."""

from __future__ import annotations

from datetime import timedelta

from .models import IDLE_ACTIVITY_ID, HistoryRow, TimerSnapshot


def format_elapsed(elapsed: timedelta) -> str:
    """Seconds with one decimal, right-aligned like a stopwatch readout."""
    millis = elapsed // timedelta(milliseconds=1)
    return f"{millis / 1000.0:6.1f}"


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def status_line(snapshot: TimerSnapshot) -> str:
    """One-line summary of every timer; the running slot is starred."""
    parts = []
    for slot in snapshot.slots:
        marker = "*" if slot.is_active else " "
        parts.append(f"{marker}[{slot.slot_id}] {slot.label}: {format_elapsed(slot.elapsed)}")
    parts.append(f"{snapshot.master_label}: {format_elapsed(snapshot.master_elapsed)}")
    return "  ".join(parts)


def history_table(rows: list[HistoryRow], labels: dict[int, str]) -> list[str]:
    """Describe each transition, e.g. ``00:00:05  Activity 1 stopped``."""
    if not rows:
        return ["No activity recorded yet."]
    lines = []
    for row in rows:
        if row.activity_id == IDLE_ACTIVITY_ID:
            description = "idle"
        else:
            name = labels.get(row.activity_id, f"Activity {row.activity_id}")
            description = f"{name} {'started' if row.is_active else 'stopped'}"
        lines.append(f"{format_duration(row.duration_from_start_seconds)}  {description}")
    return lines
