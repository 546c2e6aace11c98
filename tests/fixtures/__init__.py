"""Test fixtures for sleep-tracker."""

from tests.fixtures.sleep_log import HEADER, closed_entry, open_entry, sleep_row

__all__ = [
    "HEADER",
    "closed_entry",
    "open_entry",
    "sleep_row",
]
