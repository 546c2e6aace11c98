"""Tests for spreadsheet serial-number conversions."""

import math
from datetime import date, datetime

from sleep_tracker.serial import (
    datetime_to_serial,
    is_serial,
    serial_to_date,
    serial_to_datetime,
    serial_to_minutes,
)


class TestSerialConversion:
    """Tests for serial date and time decoding."""

    def test_integer_part_is_calendar_date(self) -> None:
        """Test that the day count starts at 1899-12-30."""
        assert serial_to_date(0) == date(1899, 12, 30)
        assert serial_to_date(45292) == date(2024, 1, 1)
        assert serial_to_date(45292.99) == date(2024, 1, 1)

    def test_fraction_is_time_of_day(self) -> None:
        """Test that the fraction maps to minutes since midnight."""
        assert serial_to_minutes(0.5) == 720
        assert serial_to_minutes(0.25) == 360
        assert serial_to_minutes(45292.75) == 1080

    def test_minutes_round_to_second_then_truncate(self) -> None:
        """Test that sub-second noise never shifts a minute downwards."""
        # 08:00 minus a hair of floating point error
        assert serial_to_minutes(480 / 1440 - 1e-9) == 480
        # 08:00:59 stays in minute 480
        assert serial_to_minutes((480 * 60 + 59) / 86400) == 480

    def test_datetime_round_trip(self) -> None:
        """Test converting an instant to a serial and back."""
        moment = datetime(2024, 3, 5, 21, 15)
        assert serial_to_datetime(datetime_to_serial(moment)) == moment

    def test_is_serial_rejects_non_numbers(self) -> None:
        """Test values that must not be treated as serials."""
        assert is_serial(45292)
        assert is_serial(0.5)
        assert not is_serial(True)
        assert not is_serial("45292")
        assert not is_serial(None)
        assert not is_serial(math.nan)
        assert not is_serial(math.inf)
