"""Split a sorted sleep log into logical (wake-to-wake) days."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from .active import resolve_active_sleep_end
from .config import EngineSettings
from .durations import awake_minutes, duration_minutes, minutes_between
from .models import ClosedEntry, Cycle, DailyStat, SleepEntry, SleepSession

logger = logging.getLogger(__name__)


def resolve_session(
    entry: SleepEntry,
    now: datetime,
    settings: Optional[EngineSettings] = None,
) -> SleepSession:
    """Resolve the effective end instant and length of a single entry."""
    if isinstance(entry, ClosedEntry):
        return SleepSession(
            entry=entry,
            end_datetime=entry.end_datetime,
            duration_minutes=duration_minutes(entry.start_time, entry.end_time),
        )

    resolution = resolve_active_sleep_end(entry.real_datetime, now, settings)
    if resolution.was_capped:
        logger.info(
            "Open sleep entry from %s (row %s) exceeded the active window; capped at %d minutes.",
            entry.real_datetime.isoformat(),
            entry.sheet_row_index,
            resolution.duration_minutes,
        )
    return SleepSession(
        entry=entry,
        end_datetime=resolution.end_datetime,
        duration_minutes=resolution.duration_minutes,
        is_active=resolution.is_active,
        was_capped=resolution.was_capped,
    )


def segment_days(
    entries: Iterable[SleepEntry],
    now: datetime,
    settings: Optional[EngineSettings] = None,
) -> list[DailyStat]:
    """Group entries, already sorted by ``real_datetime``, into logical days.

    A new day starts on a Night to Day transition, or when two consecutive
    entries are more than ``settings.day_gap`` apart and fall on different
    calendar dates. Every finished day has its awake time computed once,
    against its own end instant.
    """
    settings = settings or EngineSettings()
    stats: list[DailyStat] = []
    current: Optional[DailyStat] = None
    previous: Optional[SleepSession] = None

    for entry in entries:
        session = resolve_session(entry, now, settings)
        if current is None or previous is None:
            current = _open_day(session, entry.real_datetime)
        elif _starts_new_day(previous, session, settings):
            stats.append(_finalize(current))
            current = _open_day(session, _day_start(previous, session))
        else:
            current = _accumulate(current, session)
        previous = session

    if current is not None:
        stats.append(_finalize(current))
    return stats


def _starts_new_day(
    previous: SleepSession, session: SleepSession, settings: EngineSettings
) -> bool:
    if _is_wake_transition(previous, session):
        return True
    before = previous.entry.real_datetime
    after = session.entry.real_datetime
    gap = minutes_between(before, after)
    return gap > settings.day_gap_minutes and before.date() != after.date()


def _is_wake_transition(previous: SleepSession, session: SleepSession) -> bool:
    return previous.entry.cycle is Cycle.NIGHT and session.entry.cycle is Cycle.DAY


def _day_start(previous: SleepSession, session: SleepSession) -> datetime:
    # A day that follows a finished night starts at the moment of waking up.
    if _is_wake_transition(previous, session) and isinstance(previous.entry, ClosedEntry):
        return previous.end_datetime
    return session.entry.real_datetime


def _open_day(session: SleepSession, start_datetime: datetime) -> DailyStat:
    is_day = session.entry.cycle is Cycle.DAY
    return DailyStat(
        start_datetime=start_datetime,
        end_datetime=session.end_datetime,
        total_sleep_minutes=session.duration_minutes,
        day_sleep_minutes=session.duration_minutes if is_day else 0,
        night_sleep_minutes=0 if is_day else session.duration_minutes,
        session_count=1,
        has_active_sleep=session.is_active,
        entries=(session.entry,),
    )


def _accumulate(stat: DailyStat, session: SleepSession) -> DailyStat:
    minutes = session.duration_minutes
    is_day = session.entry.cycle is Cycle.DAY
    return replace(
        stat,
        end_datetime=session.end_datetime,
        total_sleep_minutes=stat.total_sleep_minutes + minutes,
        day_sleep_minutes=stat.day_sleep_minutes + (minutes if is_day else 0),
        night_sleep_minutes=stat.night_sleep_minutes + (0 if is_day else minutes),
        session_count=stat.session_count + 1,
        has_active_sleep=session.is_active,
        entries=stat.entries + (session.entry,),
    )


def _finalize(stat: DailyStat) -> DailyStat:
    return replace(
        stat,
        awake_minutes=awake_minutes(
            stat.start_datetime, stat.end_datetime, stat.total_sleep_minutes
        ),
    )
