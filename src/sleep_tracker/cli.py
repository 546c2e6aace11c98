"""Command-line interface for the sleep tracker."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from .config import EngineSettings
from .history import History, build_history
from .paths import get_log_path
from .sources import CsvRowSource, RowSource

logger = logging.getLogger(__name__)

app = typer.Typer(help="Aggregate a family sleep log into wake-to-wake days.")

LOG_OPTION = typer.Option(
    None,
    "--log",
    path_type=Path,
    help="CSV export of the sleep log sheet (serial values, header row first).",
)
MAX_ACTIVE_OPTION = typer.Option(
    24.0,
    "--max-active-hours",
    min=1.0,
    help="Hours an open sleep entry may run before it is treated as forgotten.",
)
CAPPED_OPTION = typer.Option(
    16.0,
    "--capped-hours",
    min=1.0,
    help="Length given to a forgotten open sleep entry.",
)


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def summary(
    log_path: Optional[Path] = LOG_OPTION,
    days: int = typer.Option(14, "--days", min=1, help="Number of most recent logical days to show."),
    max_active_hours: float = MAX_ACTIVE_OPTION,
    capped_hours: float = CAPPED_OPTION,
) -> None:
    """Print sleep totals for the most recent logical days."""
    from .reporting import HistoryPrinter

    settings = EngineSettings.from_hours(max_active_hours, capped_hours)
    now = datetime.now()
    history = _load_history(log_path, now, settings)
    HistoryPrinter(history, now, settings).print_days(limit=days)


@app.command()
def day(
    date: Optional[str] = typer.Argument(
        None, help="Logical day (YYYY-MM-DD) to show. Defaults to the latest one."
    ),
    log_path: Optional[Path] = LOG_OPTION,
    max_active_hours: float = MAX_ACTIVE_OPTION,
    capped_hours: float = CAPPED_OPTION,
) -> None:
    """Print every sleep session of one logical day."""
    from .reporting import HistoryPrinter

    settings = EngineSettings.from_hours(max_active_hours, capped_hours)
    now = datetime.now()
    history = _load_history(log_path, now, settings)

    if date:
        try:
            target = datetime.strptime(date, "%Y-%m-%d").date()
        except ValueError as exc:
            raise typer.BadParameter("Expected YYYY-MM-DD", param_hint="DATE") from exc
        stats = history.days_on(target)
    else:
        stats = history.stats[-1:]

    if not stats:
        typer.echo("No sleep recorded for the selected day.")
        raise typer.Exit(code=1)

    printer = HistoryPrinter(history, now, settings)
    for index, stat in enumerate(stats):
        if index:
            typer.echo()
        printer.print_day(stat)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(
        8765, "--port", min=1, max=65535, help="TCP port for the API."
    ),
    log_path: Optional[Path] = LOG_OPTION,
    max_active_hours: float = MAX_ACTIVE_OPTION,
    capped_hours: float = CAPPED_OPTION,
    open_browser: bool = typer.Option(
        False,
        "--open-browser/--no-open-browser",
        help="Open the history endpoint in your default browser.",
    ),
) -> None:
    """Serve the read-only sleep history API."""
    import uvicorn

    from .webapp import create_app

    log_path = log_path or get_log_path()
    settings = EngineSettings.from_hours(max_active_hours, capped_hours)
    if log_path.exists():
        logger.info("Serving sleep history from %s", log_path)
    else:
        # The export may be downloaded after start-up; the API answers 503 until then.
        logger.warning("Sleep log export %s does not exist yet", log_path)

    if open_browser:
        url = f"http://{host}:{port}/api/history"
        threading.Timer(1.0, typer.launch, args=(url,)).start()

    uvicorn.run(create_app(log_path=log_path, settings=settings), host=host, port=port)


def _load_history(
    log_path: Optional[Path], now: datetime, settings: EngineSettings
) -> History:
    source: RowSource = CsvRowSource(log_path or get_log_path())
    try:
        return build_history(source.rows(), now, settings=settings)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log") from exc
