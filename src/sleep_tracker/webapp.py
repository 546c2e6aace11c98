"""FastAPI application exposing the aggregated sleep history as a read-only API."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

from .config import EngineSettings
from .history import History, build_history, live_awake_minutes
from .models import ClosedEntry, DailyStat, SleepEntry
from .paths import get_log_path
from .reporting import format_clock
from .segmenter import resolve_session
from .sources import CsvRowSource

logger = logging.getLogger(__name__)


class SessionPayload(BaseModel):
    sheet_row_index: Optional[int]
    cycle: str
    entry_date: date
    start_datetime: datetime
    end_datetime: datetime
    end_time: Optional[str]
    duration_minutes: int
    is_active: bool
    was_capped: bool

    model_config = ConfigDict(extra="forbid")


class DailyStatPayload(BaseModel):
    logical_date: date
    start_datetime: datetime
    end_datetime: datetime
    total_sleep_minutes: int
    day_sleep_minutes: int
    night_sleep_minutes: int
    awake_minutes: int
    awake_minutes_so_far: Optional[int] = None
    session_count: int
    has_active_sleep: bool
    sessions: list[SessionPayload]

    model_config = ConfigDict(extra="forbid")


class HistoryPayload(BaseModel):
    generated_at: datetime
    skipped_rows: list[int]
    days: list[DailyStatPayload]


def create_app(
    *,
    log_path: Optional[Path] = None,
    settings: Optional[EngineSettings] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_log_path = Path(log_path or get_log_path())
    resolved_settings = settings or EngineSettings()

    app = FastAPI(title="Sleep Tracker", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.log_path = resolved_log_path
    app.state.settings = resolved_settings
    app.state.clock = clock

    @app.get("/api/status")
    def status(request: Request) -> dict:
        settings: EngineSettings = request.app.state.settings
        return {
            "log_path": str(request.app.state.log_path),
            "log_exists": request.app.state.log_path.exists(),
            "max_active_hours": settings.max_active.total_seconds() / 3600.0,
            "capped_duration_hours": settings.capped_duration.total_seconds() / 3600.0,
        }

    @app.get("/api/history", response_model=HistoryPayload)
    def history(
        request: Request,
        days: Optional[int] = Query(
            default=None,
            ge=1,
            description="Only return this many of the most recent logical days.",
        ),
    ) -> HistoryPayload:
        now = request.app.state.clock()
        loaded = _load_history(request, now)
        stats = loaded.stats[-days:] if days else loaded.stats
        return HistoryPayload(
            generated_at=now,
            skipped_rows=list(loaded.skipped_rows),
            days=[_stat_payload(stat, loaded, now, request.app.state.settings) for stat in stats],
        )

    @app.get("/api/days/{logical_date}", response_model=list[DailyStatPayload])
    def logical_day(logical_date: str, request: Request) -> list[DailyStatPayload]:
        target = _parse_date(logical_date)
        now = request.app.state.clock()
        loaded = _load_history(request, now)
        stats = loaded.days_on(target)
        if not stats:
            raise HTTPException(status_code=404, detail="No logical day starts on that date")
        return [_stat_payload(stat, loaded, now, request.app.state.settings) for stat in stats]

    return app


def _load_history(request: Request, now: datetime) -> History:
    source = CsvRowSource(request.app.state.log_path)
    try:
        return build_history(source.rows(), now, settings=request.app.state.settings)
    except FileNotFoundError as exc:
        logger.error("Sleep log unavailable: %s", exc)
        raise HTTPException(status_code=503, detail="Sleep log is not available") from exc


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc


def _stat_payload(
    stat: DailyStat, history: History, now: datetime, settings: EngineSettings
) -> DailyStatPayload:
    # Only the latest logical day is still running.
    so_far = live_awake_minutes(stat, now) if stat is history.latest else None
    return DailyStatPayload(
        logical_date=stat.logical_date,
        start_datetime=stat.start_datetime,
        end_datetime=stat.end_datetime,
        total_sleep_minutes=stat.total_sleep_minutes,
        day_sleep_minutes=stat.day_sleep_minutes,
        night_sleep_minutes=stat.night_sleep_minutes,
        awake_minutes=stat.awake_minutes,
        awake_minutes_so_far=so_far,
        session_count=stat.session_count,
        has_active_sleep=stat.has_active_sleep,
        sessions=[_session_payload(entry, now, settings) for entry in stat.entries],
    )


def _session_payload(entry: SleepEntry, now: datetime, settings: EngineSettings) -> SessionPayload:
    session = resolve_session(entry, now, settings)
    end_time = format_clock(entry.end_time) if isinstance(entry, ClosedEntry) else None
    return SessionPayload(
        sheet_row_index=entry.sheet_row_index,
        cycle=entry.cycle.value,
        entry_date=entry.date,
        start_datetime=entry.real_datetime,
        end_datetime=session.end_datetime,
        end_time=end_time,
        duration_minutes=session.duration_minutes,
        is_active=session.is_active,
        was_capped=session.was_capped,
    )
