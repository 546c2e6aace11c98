"""End-to-end aggregation of a raw sleep log into logical days."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from .config import EngineSettings
from .durations import awake_minutes
from .models import DailyStat
from .parser import parse_rows
from .segmenter import segment_days

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class History:
    stats: tuple[DailyStat, ...]
    skipped_rows: tuple[int, ...] = field(default=())

    @property
    def latest(self) -> Optional[DailyStat]:
        return self.stats[-1] if self.stats else None

    def days_on(self, logical_date: date) -> tuple[DailyStat, ...]:
        # More than one logical day can start on the same calendar date.
        return tuple(stat for stat in self.stats if stat.logical_date == logical_date)


def build_history(
    rows: Iterable[Sequence[object]],
    now: datetime,
    *,
    settings: Optional[EngineSettings] = None,
    has_header: bool = True,
) -> History:
    """Parse, order and segment raw log rows as of ``now``."""
    parsed = parse_rows(rows, has_header=has_header)
    if parsed.skipped_count:
        logger.warning(
            "Skipped %d unparseable sleep row(s): %s",
            parsed.skipped_count,
            ", ".join(str(row) for row in parsed.skipped_rows),
        )
    # sorted() is stable, so entries sharing an instant keep their sheet order.
    entries = sorted(parsed.entries, key=lambda entry: entry.real_datetime)
    stats = segment_days(entries, now, settings)
    logger.debug("Built %d logical day(s) from %d entries.", len(stats), len(entries))
    return History(stats=tuple(stats), skipped_rows=tuple(parsed.skipped_rows))


def live_awake_minutes(stat: DailyStat, now: datetime) -> int:
    """Awake time of a logical day that is still in progress, measured up to ``now``."""
    return awake_minutes(stat.start_datetime, now, stat.total_sleep_minutes)
