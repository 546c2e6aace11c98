"""Minute arithmetic shared by the aggregation pipeline.

Times of day are plain ``int`` minutes since midnight; absolute instants are
naive ``datetime`` values in the log's wall-clock time.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

MINUTES_PER_DAY = 24 * 60
NIGHT_ROLLOVER_MINUTE = 6 * 60


def at_minute(day: date, minute: int) -> datetime:
    """Combine a calendar date with a minute-of-day offset."""
    return datetime.combine(day, time.min) + timedelta(minutes=minute)


def duration_minutes(start: int, end: int) -> int:
    """Minutes slept from ``start`` to ``end``; sleep crossing midnight wraps forward."""
    return (end - start) % MINUTES_PER_DAY


def minutes_between(start: datetime, end: datetime) -> int:
    # Whole minutes, truncated toward zero.
    return int((end - start).total_seconds() / 60)


def awake_minutes(start: datetime, end: datetime, total_sleep_minutes: int) -> int:
    """Awake time in a logical day: elapsed minutes not spent sleeping, never negative."""
    return max(0, minutes_between(start, end) - total_sleep_minutes)
