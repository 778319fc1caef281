"""Tests for CSV rendering and the export artifact."""

from datetime import datetime

from ethotimer.export import CSV_HEADER, build_export, export_filename, format_seconds, render
from ethotimer.models import HistoryRow


class TestRender:
    def test_empty_rows_yield_header_only(self):
        assert render([]) == "duration_from_start_seconds,activity_id,is_active"

    def test_rows_follow_header_without_trailing_newline(self):
        text = render(
            [HistoryRow(0.0, 1, 1), HistoryRow(5.0, 1, 0), HistoryRow(5.0, 2, 1)]
        )
        assert text.split("\n") == [CSV_HEADER, "0,1,1", "5,1,0", "5,2,1"]
        assert not text.endswith("\n")

    def test_fractional_seconds_keep_full_precision(self):
        assert format_seconds(1.234) == "1.234"
        assert format_seconds(0.001) == "0.001"
        assert format_seconds(3601.5) == "3601.5"
        assert format_seconds(12.0) == "12"


class TestExportArtifact:
    def test_filename_is_timestamped(self):
        when = datetime(2024, 5, 1, 9, 3, 7, 42)
        assert export_filename(when) == "ethotimer_20240501_090307_000042.csv"

    def test_build_export(self):
        when = datetime(2024, 5, 1, 9, 3, 7, 500000)
        export = build_export([HistoryRow(0.0, 2, 1)], when)
        assert export.payload == b"duration_from_start_seconds,activity_id,is_active\n0,2,1"
        assert export.filename == "ethotimer_20240501_090307_500000.csv"
        assert export.media_type == "application/octet-stream"
