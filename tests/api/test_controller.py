from __future__ import annotations

from datetime import datetime

import pytest

from src.time_tracker.time_tracker.main import create_app

HOUR = 3_600_000

NOW = datetime(2025, 11, 13, 15, 0)

ENTRIES = [
    {"id": "e1", "type": "clock-in", "timestamp": "2025-11-13T09:00:00"},
    {"id": "e2", "type": "break-start", "timestamp": "2025-11-13T12:30:00"},
    {"id": "e3", "type": "break-end", "timestamp": "2025-11-13T13:30:00"},
]
SESSIONS = [
    {"id": "s1", "project_id": "a", "start_time": "2025-11-13T09:00:00", "end_time": "2025-11-13T11:00:00"},
    {"id": "s2", "project_id": "b", "start_time": "2025-11-13T10:00:00", "end_time": "2025-11-13T12:00:00"},
]
PROJECTS = [{"id": "a", "name": "Alpha", "color": "#ff0000"}, {"id": "b", "name": "Beta"}]


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(clock=lambda: NOW)
    return app.test_client()


def test_health(client):
    res = client.get("/api/health")

    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_presence_for_an_afternoon(client):
    res = client.post("/api/presence", json={"entries": ENTRIES, "sessions": SESSIONS, "projects": PROJECTS})

    body = res.get_json()
    assert res.status_code == 200
    assert body["status"] == "afternoon"
    assert body["next_expected_entry"] == "clock-out"
    assert body["presence_time"] == 5 * HOUR
    assert body["break_time"] == HOUR
    assert body["remaining_time"] == 3 * HOUR
    assert body["completion_percentage"] == 63
    assert body["is_complete"] is False
    assert body["project_time"] == 4 * HOUR
    assert [p["percentage"] for p in body["project_stats"]] == [50, 50]


def test_presence_without_entries(client):
    body = client.post("/api/presence", json={}).get_json()

    assert body["status"] == "not-started"
    assert body["next_expected_entry"] == "clock-in"
    assert body["presence_time"] == 0


def test_future_entry_is_a_bad_request(client):
    entries = [{"type": "clock-in", "timestamp": "2025-11-13T16:00:00"}]

    res = client.post("/api/presence", json={"entries": entries})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_non_json_body_is_a_bad_request(client):
    res = client.post("/api/presence", data="nope", content_type="text/plain")

    assert res.status_code == 400


def test_period_report(client):
    res = client.post(
        "/api/reports/period",
        json={
            "start_date": "2025-11-10",
            "end_date": "2025-11-13",
            "entries": ENTRIES,
            "sessions": SESSIONS,
            "projects": PROJECTS,
        },
    )

    body = res.get_json()
    assert res.status_code == 200
    assert body["period"]["total_days"] == 4
    assert body["period"]["worked_days"] == 1
    assert body["incomplete_days_list"] == [{"date": "2025-11-13", "presence_time": 5 * HOUR, "missing_time": 3 * HOUR}]
    assert body["charts"]["daily"]["labels"] == ["Mon 10", "Tue 11", "Wed 12", "Thu 13"]
    assert body["project_stats"][0]["daily_durations"] == {"2025-11-13": 2 * HOUR}


def test_period_report_requires_bounds(client):
    res = client.post("/api/reports/period", json={"start_date": "2025-11-10"})

    assert res.status_code == 400
    assert "end_date" in res.get_json()["message"]


def test_week_and_month_reports(client):
    week = client.post("/api/reports/week", json={"date": "2025-11-13", "entries": ENTRIES}).get_json()
    month = client.post("/api/reports/month", json={"date": "2025-11-13"}).get_json()

    assert week["period"]["start_date"] == "2025-11-10"
    assert week["period"]["total_days"] == 7
    assert month["period"]["total_days"] == 30


def test_timeline(client):
    res = client.post("/api/timeline", json={"entries": ENTRIES, "sessions": SESSIONS, "projects": PROJECTS})

    body = res.get_json()
    assert res.status_code == 200
    assert body["overlap_time"] == HOUR
    assert [s["type"] for s in body["segments"]] == ["project", "multi-project", "project", "idle", "break", "idle"]


def test_week_report_at_the_calendar_end_is_a_bad_request(client):
    res = client.post("/api/reports/week", json={"date": "9999-12-31"})

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_app_takes_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(clock=lambda: NOW)

    assert app.config["TESTING"] is True
    assert app.secret_key is None
