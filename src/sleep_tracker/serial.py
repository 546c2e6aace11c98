"""Conversions for spreadsheet serial numbers.

A serial number counts days since 1899-12-30; its fractional part is the
fraction of a 24 hour day.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta

SERIAL_EPOCH = datetime(1899, 12, 30)
SECONDS_PER_DAY = 24 * 60 * 60


def is_serial(value: object) -> bool:
    """True for finite real numbers; ``bool`` does not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def serial_to_date(serial: float) -> date:
    return (SERIAL_EPOCH + timedelta(days=math.floor(serial))).date()


def serial_to_seconds(serial: float) -> int:
    """Seconds since midnight encoded by the fractional part, rounded half-up."""
    fraction = serial - math.floor(serial)
    return math.floor(fraction * SECONDS_PER_DAY + 0.5)


def serial_to_minutes(serial: float) -> int:
    return serial_to_seconds(serial) // 60


def serial_to_datetime(serial: float) -> datetime:
    day = serial_to_date(serial)
    return datetime.combine(day, time.min) + timedelta(seconds=serial_to_seconds(serial))


def datetime_to_serial(value: datetime | date) -> float:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    return (value - SERIAL_EPOCH).total_seconds() / SECONDS_PER_DAY
