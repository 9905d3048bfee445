"""
Record builders and JSON export for ranking, schedule and calendar output.

Record builders return plain ``dict``/``list`` structures with JSON-safe
values (``Decimal`` -> ``str``, enums -> their value) so an API serializer or
``export_to_json()`` can emit them unchanged. Field names follow the stock
record columns (``payment_frequency``, ``payment_months``,
``shifted_payment_months``).
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from watchlist_radar.models.schedule import SchedulePresent, ScheduleResult
from watchlist_radar.models.stock import TrackedStock
from watchlist_radar.ranking.ranker import (
    distance_from_target,
    percentage_difference,
    target_status,
)
from watchlist_radar.reporting.calendar import DividendCalendar


def _dec(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def ranked_watchlist_records(ranked: list[TrackedStock]) -> list[dict[str, Any]]:
    """One record per stock in ranked order, with 1-based ``rank``."""
    records: list[dict[str, Any]] = []
    for rank, stock in enumerate(ranked, start=1):
        diff = percentage_difference(stock)
        distance = distance_from_target(stock)
        records.append(
            {
                "rank":               rank,
                "symbol":             stock.symbol,
                "price":              _dec(stock.price),
                "target_price":       _dec(stock.target_price),
                "target_status":      target_status(stock).value,
                "diff_pct":           None if diff is None else round(diff, 4),
                "distance_pct":       None if distance is None else round(distance, 4),
            }
        )
    return records


def schedule_record(result: ScheduleResult) -> Optional[dict[str, Any]]:
    """Persistence columns for a resolved schedule; ``None`` when absent."""
    if not isinstance(result, SchedulePresent):
        return None
    record = result.schedule.to_record()
    record["is_fallback"] = result.schedule.is_fallback
    return record


def calendar_records(calendar: DividendCalendar) -> dict[str, Any]:
    """Serialise a :class:`DividendCalendar` into nested plain dicts."""
    return {
        "rows": [
            {
                "symbol":               row.symbol,
                "payment_frequency":    row.schedule.frequency.value,
                "dividend_per_payment": _dec(row.dividend_per_payment),
                "cells": [
                    {"month": c.month, "kind": c.kind.value, "amount": _dec(c.amount)}
                    for c in row.cells
                ],
            }
            for row in calendar.rows
        ],
        "monthly_totals":      {str(m): str(t) for m, t in calendar.monthly_totals.items()},
        "annual_total":        str(calendar.annual_total),
        "gap_months":          list(calendar.gap_months),
        "unknown_symbols":     list(calendar.unknown_symbols),
        "no_dividend_symbols": list(calendar.no_dividend_symbols),
    }
