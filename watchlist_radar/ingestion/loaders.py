"""
Watchlist and dividend-history file loaders.

Watchlist (JSON array)::

    [
      {"symbol": "KO", "price": "61.20", "target_price": "58.00",
       "dividend": "2.04",
       "dividends": [{"date": "2025-03-13", "amount": "0.51"}, ...]},
      {"symbol": "MSFT", "price": 410.5, "target_price": null}
    ]

Dividend history — CSV with a header row (``date,amount``) or a JSON array
of ``{"date": ..., "amount": ...}`` objects. Dates are ``YYYY-MM-DD``.

Error policy:
  - Missing file                      -> FileNotFoundError
  - Unreadable structure / columns    -> ValueError
  - Invalid watchlist stock rows      -> one ValueError listing the first 10
  - Unparseable dividend rows         -> skipped with a warning; the schedule
                                         core only ever sees well-typed events
  - Empty date/amount fields          -> kept as ``None`` (dropped later by
                                         schedule inference)
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from watchlist_radar.models.dividend import DividendEvent
from watchlist_radar.models.stock import TrackedStock

logger = logging.getLogger(__name__)

REQUIRED_HISTORY_COLUMNS = frozenset({"date", "amount"})


def load_watchlist(path: Path) -> list[TrackedStock]:
    """Parse a JSON watchlist file into :class:`TrackedStock` objects.

    All stocks are validated before any are returned.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On invalid JSON, a non-array document, or invalid stocks.
    """
    data = _read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"Watchlist file must contain a JSON array: {path}")

    stocks: list[TrackedStock] = []
    errors: list[tuple[int, str]] = []

    for idx, raw in enumerate(data):
        try:
            stocks.append(_to_tracked_stock(raw))
        except (ValueError, ValidationError) as exc:
            errors.append((idx, str(exc)))

    if errors:
        _raise_row_errors(errors, path, label="Stock")

    logger.info("Loaded %d watchlist stock(s) from %s", len(stocks), path.name)
    return stocks


def load_dividend_history(path: Path) -> list[DividendEvent]:
    """Parse a CSV or JSON dividend history file.

    The format is chosen by file suffix (``.json`` -> JSON, otherwise CSV).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On missing columns or a non-array JSON document.
    """
    if path.suffix.lower() == ".json":
        data = _read_json(path)
        if not isinstance(data, list):
            raise ValueError(f"Dividend history JSON must contain an array: {path}")
        rows = data
    else:
        rows = _read_history_csv(path)

    events = parse_dividend_rows(rows, source=path.name)
    logger.info("Loaded %d dividend event(s) from %s", len(events), path.name)
    return events


def parse_dividend_rows(rows: list[Any], source: str = "<input>") -> list[DividendEvent]:
    """Convert raw ``{date, amount}`` rows into events, skipping unparseable ones."""
    events: list[DividendEvent] = []
    for idx, row in enumerate(rows):
        event = parse_dividend_row(row)
        if event is None:
            logger.warning(
                "Skipping unparseable dividend row %d in %s: %r", idx, source, row,
                extra={"source": source},
            )
            continue
        events.append(event)
    return events


def parse_dividend_row(row: Any) -> Optional[DividendEvent]:
    """Parse one ``{date, amount}`` mapping; ``None`` if it cannot be parsed.

    Blank or null fields become ``None`` on the event rather than failing.
    """
    if not isinstance(row, dict):
        return None
    try:
        return DividendEvent(
            date=_parse_date(row.get("date")),
            amount=_parse_decimal(row.get("amount")),
        )
    except (ValueError, InvalidOperation, ValidationError):
        return None


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _read_history_csv(path: Path) -> list[dict[str, str]]:
    if not path.exists():
        raise FileNotFoundError(f"Dividend history file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_HISTORY_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )
        return [{k.strip(): v for k, v in row.items() if k is not None} for row in reader]


def _to_tracked_stock(raw: Any) -> TrackedStock:
    if not isinstance(raw, dict):
        raise ValueError(f"Expected an object, got {type(raw).__name__}.")
    fields = dict(raw)
    history = fields.pop("dividends", None) or []
    if not isinstance(history, list):
        raise ValueError("'dividends' must be an array.")
    return TrackedStock(
        **fields,
        dividends=tuple(parse_dividend_rows(history, source=str(fields.get("symbol")))),
    )


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    return date.fromisoformat(text[:10])


def _parse_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    parsed = Decimal(text)
    if not parsed.is_finite():
        raise ValueError(f"Amount must be finite, got {text!r}.")
    return parsed


def _raise_row_errors(errors: list[tuple[int, str]], path: Path, label: str) -> None:
    max_shown = 10
    detail = "\n".join(f"  {label} #{idx}: {msg}" for idx, msg in errors[:max_shown])
    suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
    raise ValueError(
        f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
    )
