"""Read boundary for raw sleep-log rows."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class RowSource(Protocol):
    """Anything that yields the log sheet's rows, header row first."""

    def rows(self) -> Iterator[Sequence[object]]:
        ...


class CsvRowSource:
    """Rows from a CSV export of the log sheet.

    The export must keep unformatted serial values. Numeric cells become
    floats, blank cells become ``None`` and anything else stays text, which
    mirrors what the spreadsheet API returns for the same sheet.
    """

    def __init__(self, path: Path, *, encoding: str = "utf-8-sig") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def rows(self) -> Iterator[list[object]]:
        if not self.path.exists():
            raise FileNotFoundError(f"Sleep log export not found: {self.path}")
        logger.debug("Reading sleep log rows from %s", self.path)
        with self.path.open(newline="", encoding=self.encoding) as handle:
            for raw in csv.reader(handle):
                yield [_coerce_cell(cell) for cell in raw]


def _coerce_cell(cell: str) -> Optional[object]:
    value = cell.strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return value
