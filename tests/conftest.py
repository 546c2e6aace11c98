"""Shared test fixtures."""

import csv
from datetime import date, datetime
from pathlib import Path

import pytest

from tests.fixtures import HEADER, sleep_row

JAN_1 = date(2024, 1, 1)
JAN_2 = date(2024, 1, 2)
JAN_3 = date(2024, 1, 3)


@pytest.fixture
def now() -> datetime:
    """Fixed reading instant, shortly after the last logged entry."""
    return datetime(2024, 1, 3, 8, 0)


@pytest.fixture
def log_rows() -> list[list[object]]:
    """Two nights and the day between them, plus one unreadable row."""
    return [
        HEADER,
        sleep_row(JAN_1, "20:00", "06:30", "Night"),
        sleep_row(JAN_2, "09:30", "10:15", "Day"),
        ["garbage", "not-a-date", 0.5, "", "Day", ""],
        sleep_row(JAN_2, "13:00", "14:30", "Day"),
        sleep_row(JAN_2, "19:45", "02:00", "Night"),
        sleep_row(JAN_2, "02:20", "07:00", "Night"),
        sleep_row(JAN_3, "07:30", None, "Day"),
    ]


@pytest.fixture
def log_csv(tmp_path: Path, log_rows: list[list[object]]) -> Path:
    """Write ``log_rows`` as a CSV export of the sheet."""
    path = tmp_path / "sleep_log.csv"
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        for row in log_rows:
            writer.writerow(["" if cell is None else cell for cell in row])
    return path
