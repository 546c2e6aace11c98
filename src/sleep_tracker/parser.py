"""Turn raw sleep-log rows into validated entries.

Rows follow the log sheet's column order::

    A added date (serial)   B date (serial)   C start time (serial fraction)
    D end time (serial fraction, empty while still sleeping)
    E cycle ("Day" / "Night")   F legacy length (ignored)

A row that cannot be parsed is skipped rather than failing the whole log.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .models import ClosedEntry, Cycle, OpenEntry, SleepEntry
from .serial import is_serial, serial_to_date, serial_to_datetime, serial_to_minutes

logger = logging.getLogger(__name__)

# The sheet's first data row sits under a header row, and sheet rows are 1-based.
FIRST_DATA_ROW = 2

_CYCLES = {cycle.value: cycle for cycle in Cycle}


@dataclass(slots=True)
class ParsedLog:
    """Entries that parsed cleanly plus the sheet rows that were skipped."""

    entries: list[SleepEntry] = field(default_factory=list)
    skipped_rows: list[int] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)


def parse_row(row: Sequence[object], sheet_row_index: Optional[int] = None) -> Optional[SleepEntry]:
    """Parse one row into an entry, or return ``None`` when a required field is invalid."""
    if not row or len(row) < 5:
        return None

    added_raw, date_raw, start_raw, end_raw, cycle_raw = row[:5]
    if not is_serial(date_raw) or not is_serial(start_raw):
        return None
    cycle = _parse_cycle(cycle_raw)
    if cycle is None:
        return None

    # Absence, not zero, marks a session that is still going on.
    is_open = _is_blank(end_raw)
    if not is_open and not is_serial(end_raw):
        return None

    # Dates at the edge of the calendar can overflow once the night or
    # midnight rollover is applied while the entry is built.
    try:
        common = dict(
            added_date=serial_to_datetime(added_raw) if is_serial(added_raw) else None,
            date=serial_to_date(date_raw),
            start_time=serial_to_minutes(start_raw),
            cycle=cycle,
            sheet_row_index=sheet_row_index,
        )
        if is_open:
            return OpenEntry(**common)
        return ClosedEntry(end_time=serial_to_minutes(end_raw), **common)
    except (OverflowError, ValueError):
        return None


def parse_rows(rows: Iterable[Sequence[object]], *, has_header: bool = True) -> ParsedLog:
    """Parse every data row, remembering each entry's sheet row for write-back."""
    parsed = ParsedLog()
    iterator = iter(rows)
    first_row = FIRST_DATA_ROW
    if has_header:
        next(iterator, None)
    else:
        first_row = 1

    for sheet_row, row in enumerate(iterator, start=first_row):
        entry = parse_row(row, sheet_row_index=sheet_row)
        if entry is None:
            if _is_blank_row(row):
                continue
            logger.debug("Skipping unparseable sleep row %d: %r", sheet_row, row)
            parsed.skipped_rows.append(sheet_row)
            continue
        parsed.entries.append(entry)
    return parsed


def _parse_cycle(value: object) -> Optional[Cycle]:
    if not isinstance(value, str):
        return None
    return _CYCLES.get(value.strip())


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_blank_row(row: Sequence[object]) -> bool:
    return all(_is_blank(value) for value in row)
