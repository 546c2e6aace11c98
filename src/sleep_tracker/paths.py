"""Where the sleep log export is looked up by default."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_path

APP_NAME = "SleepTracker"
LOG_PATH_ENV = "SLEEP_TRACKER_LOG"
LOG_FILENAME = "sleep_log.csv"


def get_data_dir() -> Path:
    # Only read from here, so the directory is not created on lookup.
    return user_data_path(appname=APP_NAME, appauthor=False, roaming=True)


def get_log_path() -> Path:
    """Return the sleep log export to read.

    ``SLEEP_TRACKER_LOG`` points at an export kept elsewhere, e.g. a synced
    folder the sheet is downloaded into; otherwise the per-user data
    directory is used.
    """
    override = os.environ.get(LOG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return get_data_dir() / LOG_FILENAME
