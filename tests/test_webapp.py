"""Tests for the read-only history API."""

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sleep_tracker.config import EngineSettings
from sleep_tracker.webapp import create_app

NOW = datetime(2024, 1, 3, 8, 0)


@pytest.fixture
def client(log_csv: Path) -> TestClient:
    return TestClient(create_app(log_path=log_csv, clock=lambda: NOW))


class TestHistoryEndpoints:
    """Tests for /api/history and /api/days."""

    def test_status(self, client: TestClient, log_csv: Path) -> None:
        response = client.get("/api/status")
        assert response.status_code == 200
        data = response.json()
        assert data["log_path"] == str(log_csv)
        assert data["log_exists"] is True
        assert data["capped_duration_hours"] == 16.0

    def test_history(self, client: TestClient) -> None:
        response = client.get("/api/history")
        assert response.status_code == 200
        data = response.json()

        assert data["skipped_rows"] == [4]
        assert [day["logical_date"] for day in data["days"]] == [
            "2024-01-01",
            "2024-01-02",
            "2024-01-03",
        ]
        latest = data["days"][-1]
        assert latest["has_active_sleep"] is True
        assert latest["awake_minutes_so_far"] == 30
        assert latest["sessions"][0]["is_active"] is True
        assert latest["sessions"][0]["end_time"] is None
        assert latest["sessions"][0]["sheet_row_index"] == 8
        assert data["days"][0]["awake_minutes_so_far"] is None

    def test_history_limit(self, client: TestClient) -> None:
        data = client.get("/api/history", params={"days": 2}).json()
        assert [day["logical_date"] for day in data["days"]] == ["2024-01-02", "2024-01-03"]

    def test_history_limit_must_be_positive(self, client: TestClient) -> None:
        assert client.get("/api/history", params={"days": 0}).status_code == 422

    def test_logical_day(self, client: TestClient) -> None:
        response = client.get("/api/days/2024-01-02")
        assert response.status_code == 200
        (day,) = response.json()
        assert day["start_datetime"] == "2024-01-02T06:30:00"
        assert day["awake_minutes"] == 680
        assert [session["end_time"] for session in day["sessions"]] == [
            "10:15",
            "14:30",
            "02:00",
            "07:00",
        ]

    def test_logical_day_not_found(self, client: TestClient) -> None:
        assert client.get("/api/days/2023-12-31").status_code == 404

    def test_logical_day_bad_date(self, client: TestClient) -> None:
        assert client.get("/api/days/yesterday").status_code == 400

    def test_missing_log(self, tmp_path: Path) -> None:
        client = TestClient(create_app(log_path=tmp_path / "missing.csv", clock=lambda: NOW))
        assert client.get("/api/history").status_code == 503

    def test_settings_are_read_from_app_state(self, log_csv: Path) -> None:
        """Test that every endpoint follows settings swapped in after start-up."""
        app = create_app(log_path=log_csv, clock=lambda: NOW)
        app.state.settings = EngineSettings.from_hours(12, 8)
        client = TestClient(app)

        status = client.get("/api/status").json()
        assert status["max_active_hours"] == 12.0
        assert status["capped_duration_hours"] == 8.0
        # The open nap started 30 minutes before NOW, well inside 12 hours.
        latest = client.get("/api/history").json()["days"][-1]
        assert latest["sessions"][0]["is_active"] is True
