"""
Watchlist Radar — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate input files.
  4. Run the pure ranking / schedule computation.
  5. Report result to stdout (and optionally export JSON).

Install and run::

    pip install -e .
    watchlist-radar --help
    watchlist-radar validate-config
    watchlist-radar rank watchlist.json
    watchlist-radar infer-schedule ko_dividends.csv --symbol KO
    watchlist-radar calendar watchlist.json --output data/calendar.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="watchlist-radar",
    help="Dividend watchlist ranking and dividend-schedule inference.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from watchlist_radar.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from watchlist_radar.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_or_exit(loader, path: str):
    """Run a file loader, turning its errors into a clean CLI exit."""
    try:
        return loader(Path(path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _export(data, output: Optional[str]) -> None:
    if not output:
        return
    from watchlist_radar.reporting.export import export_to_json

    written = export_to_json(data, Path(output))
    typer.echo(f"  Exported: {written}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values."""
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Above-target offset:  {config.ranking.above_target_offset}")
    typer.echo(f"  No-target priority:   {config.ranking.no_target_priority}")
    typer.echo(f"  Regular threshold:    {config.schedule.regular_month_threshold}")
    typer.echo(f"  Fallback frequency:   {config.schedule.fallback_frequency.value}")
    typer.echo(f"  Cache:                {'on' if config.cache.enabled else 'off'}"
               f" (ttl {config.cache.ttl_seconds}s)")
    typer.echo(f"  Log level:            {config.logging.level}")
    typer.echo(f"  Debug mode:           {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    watchlist_file: str = typer.Argument(..., help="JSON array of tracked stocks."),
    output: Optional[str] = typer.Option(
        None, "--output", help="Also write the ranked records to this JSON file."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file."
    ),
) -> None:
    """Rank a watchlist: furthest below target first, biggest overshoot last."""
    from watchlist_radar.ingestion.loaders import load_watchlist
    from watchlist_radar.ranking.ranker import rank_watchlist
    from watchlist_radar.reporting.export import ranked_watchlist_records
    from watchlist_radar.reporting.formatters import format_ranked_watchlist

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    stocks = _load_or_exit(load_watchlist, watchlist_file)
    ranked = rank_watchlist(
        stocks,
        above_target_offset=config.ranking.above_target_offset,
        no_target_priority=config.ranking.no_target_priority,
    )

    typer.echo(format_ranked_watchlist(ranked))
    _export(ranked_watchlist_records(ranked), output)


@app.command("infer-schedule")
def infer_schedule_cmd(
    history_file: str = typer.Argument(..., help="CSV (date,amount) or JSON dividend history."),
    symbol: str = typer.Option("", "--symbol", help="Ticker shown in the output header."),
    output: Optional[str] = typer.Option(
        None, "--output", help="Also write the schedule record to this JSON file."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file."
    ),
) -> None:
    """Infer payment frequency, payment months and shifted months from history."""
    from watchlist_radar.ingestion.loaders import load_dividend_history
    from watchlist_radar.reporting.formatters import format_schedule
    from watchlist_radar.schedule.inferencer import infer_schedule

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    events = _load_or_exit(load_dividend_history, history_file)
    schedule = infer_schedule(events, config.schedule.regular_month_threshold)

    typer.echo(format_schedule(schedule, symbol=symbol.upper()))
    _export(schedule.to_record(), output)


@app.command("calendar")
def calendar(
    watchlist_file: str = typer.Argument(
        ..., help="JSON array of tracked stocks with 'dividend' and 'dividends' history."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", help="Also write the calendar to this JSON file."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file."
    ),
) -> None:
    """Build the 12-month dividend calendar for a watchlist."""
    from watchlist_radar.cache import build_cache
    from watchlist_radar.ingestion.loaders import load_watchlist
    from watchlist_radar.reporting.calendar import build_dividend_calendar, entries_for_stocks
    from watchlist_radar.reporting.export import calendar_records
    from watchlist_radar.reporting.formatters import format_calendar_table
    from watchlist_radar.schedule.resolver import resolve_stock_schedule

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    stocks = _load_or_exit(load_watchlist, watchlist_file)
    cache = build_cache(config.cache)
    schedules = [
        resolve_stock_schedule(
            stock,
            cache=cache,
            regular_month_threshold=config.schedule.regular_month_threshold,
            fallback_frequency=config.schedule.fallback_frequency,
        )
        for stock in stocks
    ]
    cal = build_dividend_calendar(entries_for_stocks(stocks, schedules))

    typer.echo(format_calendar_table(cal))
    _export(calendar_records(cal), output)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
