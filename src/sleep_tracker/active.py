"""Resolution of sleep sessions that have no recorded end time."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .config import EngineSettings
from .durations import minutes_between
from .models import ActiveSleepResolution


def resolve_active_sleep_end(
    start_datetime: datetime,
    now: datetime,
    settings: Optional[EngineSettings] = None,
) -> ActiveSleepResolution:
    """Work out where an open session effectively ends as of ``now``.

    A session open for up to ``max_active`` is still going on and runs until
    ``now``. Anything older is treated as a forgotten toggle: it is cut off at
    ``capped_duration`` and flagged with ``was_capped`` so callers can ask for
    the record to be corrected.
    """
    settings = settings or EngineSettings()
    elapsed = minutes_between(start_datetime, now)

    if elapsed > settings.max_active_minutes:
        end_datetime = start_datetime + settings.capped_duration
        return ActiveSleepResolution(
            end_datetime=end_datetime,
            duration_minutes=settings.capped_duration_minutes,
            is_active=False,
            was_capped=True,
        )

    # A start logged slightly in the future still counts as an ongoing session.
    if elapsed < 0:
        return ActiveSleepResolution(
            end_datetime=start_datetime,
            duration_minutes=0,
            is_active=True,
            was_capped=False,
        )

    return ActiveSleepResolution(
        end_datetime=now,
        duration_minutes=elapsed,
        is_active=True,
        was_capped=False,
    )
