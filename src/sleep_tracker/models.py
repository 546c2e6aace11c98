"""Domain models for the sleep log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Union

from .durations import NIGHT_ROLLOVER_MINUTE, at_minute


class Cycle(str, Enum):
    """Which period of the day a sleep session belongs to."""

    DAY = "Day"
    NIGHT = "Night"


def anchor_datetime(day: date, minute: int, cycle: Cycle) -> datetime:
    """Return the instant a logged time of day refers to.

    Night sessions logged with an early-morning clock time belong to the
    night that started the evening before, so they land on the next day.
    """
    instant = at_minute(day, minute)
    if cycle is Cycle.NIGHT and minute < NIGHT_ROLLOVER_MINUTE:
        instant += timedelta(days=1)
    return instant


@dataclass(slots=True, frozen=True, kw_only=True)
class _LoggedSleep:
    added_date: Optional[datetime]
    date: date
    start_time: int
    cycle: Cycle
    sheet_row_index: Optional[int] = None
    real_datetime: datetime = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "real_datetime", anchor_datetime(self.date, self.start_time, self.cycle)
        )


@dataclass(slots=True, frozen=True, kw_only=True)
class ClosedEntry(_LoggedSleep):
    """A finished sleep period with a recorded end time.

    ``end_datetime`` is the instant the sleep ended: the clock time on the
    date of ``real_datetime``, or on the following day when the period
    wraps past midnight.
    """

    end_time: int
    end_datetime: datetime = field(init=False, compare=False)

    def __post_init__(self) -> None:
        _LoggedSleep.__post_init__(self)
        end = at_minute(self.real_datetime.date(), self.end_time)
        if self.end_time < self.start_time:
            end += timedelta(days=1)
        object.__setattr__(self, "end_datetime", end)


@dataclass(slots=True, frozen=True, kw_only=True)
class OpenEntry(_LoggedSleep):
    """A sleep period that is still going on (no end time recorded yet)."""


SleepEntry = Union[ClosedEntry, OpenEntry]


@dataclass(slots=True, frozen=True)
class ActiveSleepResolution:
    """Effective end of an open session as seen from a given instant."""

    end_datetime: datetime
    duration_minutes: int
    is_active: bool
    was_capped: bool


@dataclass(slots=True, frozen=True)
class SleepSession:
    """An entry together with its resolved end instant and duration."""

    entry: SleepEntry
    end_datetime: datetime
    duration_minutes: int
    is_active: bool = False
    was_capped: bool = False


@dataclass(slots=True, frozen=True)
class DailyStat:
    """Aggregated sleep for one logical day, from one wake-up to the next."""

    start_datetime: datetime
    end_datetime: datetime
    total_sleep_minutes: int
    day_sleep_minutes: int
    night_sleep_minutes: int
    session_count: int
    has_active_sleep: bool
    entries: tuple[SleepEntry, ...]
    awake_minutes: int = 0

    @property
    def logical_date(self) -> date:
        return self.start_datetime.date()
