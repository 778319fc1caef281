"""Configuration models and helpers for the activity timers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Optional, Sequence

DEFAULT_SLOT_LABELS: tuple[str, ...] = ("Activity 1", "Activity 2", "Activity 3")


@dataclass(slots=True)
class TimerSettings:
    """Runtime configuration for a timer session."""

    slot_labels: tuple[str, ...] = field(default=DEFAULT_SLOT_LABELS)
    master_label: str = "Duration since start"
    refresh_interval: timedelta = timedelta(milliseconds=100)
    export_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.slot_labels:
            raise ValueError("At least one activity slot is required.")
        if self.refresh_interval <= timedelta(0):
            raise ValueError("Refresh interval must be positive.")

    @property
    def slot_ids(self) -> tuple[int, ...]:
        # 0 is reserved for the idle marker.
        return tuple(range(1, len(self.slot_labels) + 1))

    @classmethod
    def from_options(
        cls,
        activities: int = len(DEFAULT_SLOT_LABELS),
        labels: Optional[Sequence[str]] = None,
        refresh_ms: float = 100.0,
        export_dir: Optional[Path] = None,
    ) -> "TimerSettings":
        names = [name.strip() for name in labels or []]
        names.extend([""] * (activities - len(names)))
        return cls(
            slot_labels=tuple(
                name or f"Activity {index}" for index, name in enumerate(names, start=1)
            ),
            refresh_interval=timedelta(milliseconds=refresh_ms),
            export_dir=Path(export_dir) if export_dir is not None else None,
        )
