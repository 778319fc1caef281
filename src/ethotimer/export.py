"""CSV rendering of the transition history."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .models import CsvExport, HistoryRow

CSV_HEADER = "duration_from_start_seconds,activity_id,is_active"
FILENAME_TEMPLATE = "ethotimer_%Y%m%d_%H%M%S_%f.csv"


def render(rows: Iterable[HistoryRow]) -> str:
    """Render rows as CSV text: header first, no trailing newline."""
    lines = [CSV_HEADER]
    for row in rows:
        lines.append(
            f"{format_seconds(row.duration_from_start_seconds)},"
            f"{int(row.activity_id)},{int(row.is_active)}"
        )
    return "\n".join(lines)


def format_seconds(value: float) -> str:
    """Shortest exact float text, with whole numbers written as integers."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


def export_filename(when: datetime) -> str:
    return when.strftime(FILENAME_TEMPLATE)


def build_export(rows: Iterable[HistoryRow], when: datetime) -> CsvExport:
    return CsvExport(
        payload=render(rows).encode("utf-8"),
        filename=export_filename(when),
    )
