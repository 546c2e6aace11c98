"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .config import EngineSettings
from .history import History, live_awake_minutes
from .models import ClosedEntry, DailyStat
from .segmenter import resolve_session


class HistoryPrinter:
    """Render human-readable logical-day summaries in the console."""

    def __init__(
        self, history: History, now: datetime, settings: Optional[EngineSettings] = None
    ) -> None:
        self.history = history
        self.now = now
        self.settings = settings

    def print_days(self, limit: Optional[int] = None) -> None:
        stats = list(self.history.stats)
        if limit is not None:
            stats = stats[-limit:]
        if not stats:
            print("No sleep recorded yet.")
            return

        print(f"{'Day':<12} {'Sleep':>8} {'Day':>8} {'Night':>8} {'Awake':>8} {'Naps':>5}")
        print("-" * 54)
        for stat in stats:
            marker = " *" if stat.has_active_sleep else ""
            print(
                f"{stat.logical_date.isoformat():<12}"
                f" {format_duration(stat.total_sleep_minutes):>8}"
                f" {format_duration(stat.day_sleep_minutes):>8}"
                f" {format_duration(stat.night_sleep_minutes):>8}"
                f" {format_duration(stat.awake_minutes):>8}"
                f" {stat.session_count:>5}{marker}"
            )
        if self.history.skipped_rows:
            print()
            print(f"{len(self.history.skipped_rows)} row(s) could not be read and were skipped.")

    def print_day(self, stat: DailyStat) -> None:
        print(
            f"Logical day {stat.logical_date.isoformat()}"
            f" ({stat.start_datetime:%Y-%m-%d %H:%M} -> {stat.end_datetime:%Y-%m-%d %H:%M})"
        )
        print("-" * 40)
        print(f"Sleep: {format_duration(stat.total_sleep_minutes)}"
              f" (day {format_duration(stat.day_sleep_minutes)},"
              f" night {format_duration(stat.night_sleep_minutes)})")
        print(f"Awake: {format_duration(stat.awake_minutes)}")
        if stat is self.history.latest:
            print(f"Awake so far: {format_duration(live_awake_minutes(stat, self.now))}")
        print()
        for line in session_lines(stat, self.now, self.settings):
            print(f"  {line}")


def session_lines(
    stat: DailyStat, now: datetime, settings: Optional[EngineSettings] = None
) -> Iterable[str]:
    for entry in stat.entries:
        session = resolve_session(entry, now, settings)
        start = format_clock(entry.start_time)
        if isinstance(entry, ClosedEntry):
            span = f"{start} -> {format_clock(entry.end_time)}"
        elif session.is_active:
            span = f"{start} -> now"
        else:
            span = f"{start} -> ?"
        note = "  (capped, needs an end time)" if session.was_capped else ""
        yield (
            f"{entry.cycle.value:<6} {span:<15}"
            f" {format_duration(session.duration_minutes):>8}{note}"
        )


def format_duration(minutes: int) -> str:
    if minutes < 0:
        return "0m"
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_clock(minute: int) -> str:
    hours, mins = divmod(minute % (24 * 60), 60)
    return f"{hours:02d}:{mins:02d}"
