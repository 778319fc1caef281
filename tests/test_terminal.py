"""Tests for keypress handling in the terminal front end."""

import pytest

from ethotimer.terminal import TerminalSession


class Output:
    def __init__(self):
        self.lines = []

    def __call__(self, message="", nl=True):
        self.lines.append(message)

    @property
    def text(self):
        return "\n".join(self.lines)


@pytest.fixture
def output():
    return Output()


@pytest.fixture
def session(timers, tmp_path, output):
    session = TerminalSession(timers, export_dir=lambda: tmp_path, echo=output)
    yield session
    session.ticker.stop()


class TestHandleKey:
    def test_digit_activates_slot_and_starts_ticker(self, session, timers):
        assert session.handle_key("2") is True
        assert timers.is_active(2)
        assert session.ticker.is_running()

    def test_unknown_digit_is_ignored(self, session, timers):
        assert session.handle_key("7") is True
        assert session.handle_key("0") is True
        assert not timers.any_active()

    def test_stop_and_clear(self, session, timers, clock):
        session.handle_key("1")
        clock.advance(2)
        session.handle_key("s")
        assert not timers.any_active()
        assert len(timers.history_rows()) == 3
        session.handle_key("c")
        assert timers.history_rows() == []

    def test_view_data_prints_csv(self, session, timers, clock, output):
        session.handle_key("1")
        clock.advance(3)
        session.handle_key("v")
        assert session.view.viewing_data
        assert not timers.any_active()
        assert "0,1,1\n3,1,0\n3,0,0" in output.text
        assert "Activity 1 started" in output.text

    def test_activity_key_leaves_data_view(self, session):
        session.handle_key("v")
        session.handle_key("3")
        assert not session.view.viewing_data

    def test_download_writes_csv(self, session, tmp_path, clock):
        session.handle_key("1")
        clock.advance(1)
        session.handle_key("s")
        session.handle_key("d")
        files = list(tmp_path.glob("ethotimer_*.csv"))
        assert len(files) == 1
        assert files[0].read_text().startswith("duration_from_start_seconds,activity_id,is_active\n0,1,1")

    def test_quit_stops_timers(self, session, timers):
        session.handle_key("1")
        assert session.handle_key("q") is False
        assert not timers.any_active()
        assert not session.ticker.is_running()


class TestRun:
    def test_run_consumes_keys_until_quit(self, session, timers, output):
        keys = iter(["1", "2", "s", "q", "1"])
        session.run(read_key=lambda: next(keys))
        assert [row.activity_id for row in timers.history_rows()] == [1, 1, 2, 2, 0]
        assert "1=Activity 1" in output.lines[0]

    def test_interrupt_ends_session(self, session, timers):
        def interrupted():
            raise KeyboardInterrupt

        session.handle_key("1")
        session.run(read_key=interrupted)
        assert not timers.any_active()
