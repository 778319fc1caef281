"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from ethotimer.webapp import create_app


@pytest.fixture
def client(clock):
    return TestClient(create_app(clock=clock))


class TestTimersEndpoints:
    def test_initial_state(self, client):
        response = client.get("/api/timers")
        assert response.status_code == 200
        payload = response.json()
        assert [slot["label"] for slot in payload["slots"]] == [
            "Activity 1",
            "Activity 2",
            "Activity 3",
        ]
        assert payload["any_active"] is False
        assert payload["viewing_data"] is False

    def test_start_and_switch(self, client, clock):
        assert client.post("/api/timers/1/start").json()["changed"] is True
        clock.advance(2)
        payload = client.post("/api/timers/2/start").json()
        assert payload["changed"] is True
        slots = {slot["slot_id"]: slot for slot in payload["timers"]["slots"]}
        assert slots[1]["elapsed_seconds"] == 2.0
        assert slots[1]["is_active"] is False
        assert slots[2]["is_active"] is True

    def test_start_running_slot_reports_no_change(self, client):
        client.post("/api/timers/3/start")
        assert client.post("/api/timers/3/start").json()["changed"] is False

    def test_unknown_slot_is_404(self, client):
        response = client.post("/api/timers/9/start")
        assert response.status_code == 404

    def test_stop_twice(self, client):
        client.post("/api/timers/1/start")
        assert client.post("/api/stop").json()["changed"] is True
        assert client.post("/api/stop").json()["changed"] is False

    def test_clear(self, client, clock):
        client.post("/api/timers/1/start")
        clock.advance(3)
        payload = client.post("/api/clear").json()
        assert all(slot["elapsed_seconds"] == 0 for slot in payload["slots"])
        assert client.get("/api/history").json() == []


class TestDataEndpoints:
    def test_view_data_stops_timers(self, client, clock):
        client.post("/api/timers/1/start")
        clock.advance(5)
        client.post("/api/timers/2/start")
        clock.advance(3)
        payload = client.post("/api/view/data").json()
        assert payload["csv"].split("\n")[1:] == ["0,1,1", "5,1,0", "5,2,1", "8,2,0", "8,0,0"]
        assert len(payload["rows"]) == len(payload["csv"].split("\n")) - 1
        assert payload["rows"][-1] == {
            "duration_from_start_seconds": 8.0,
            "activity_id": 0,
            "is_active": 0,
        }
        timers = client.get("/api/timers").json()
        assert timers["viewing_data"] is True
        assert timers["any_active"] is False
        assert client.post("/api/view/timers").json()["viewing_data"] is False

    def test_history_csv(self, client):
        response = client.get("/api/history.csv")
        assert response.status_code == 200
        assert response.text == "duration_from_start_seconds,activity_id,is_active"

    def test_export_is_attachment(self, client):
        client.post("/api/timers/1/start")
        response = client.get("/api/export")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/octet-stream"
        assert (
            'filename="ethotimer_20240501_100000_000000.csv"'
            in response.headers["content-disposition"]
        )
        assert response.content.endswith(b"\n0,1,1")
