"""
ASCII terminal formatters for CLI commands.

All formatters accept domain objects and return plain multi-line strings
suitable for ``typer.echo()``. This is the only place prices and
percentages are turned into display strings.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from watchlist_radar.models.schedule import InferredSchedule
from watchlist_radar.models.stock import TrackedStock
from watchlist_radar.ranking.ranker import percentage_difference, target_status
from watchlist_radar.reporting.calendar import CellKind, DividendCalendar
from watchlist_radar.utils.time_utils import MONTH_NAMES, month_name


def format_money(value: Optional[Decimal]) -> str:
    """``$150.00`` style, or ``N/A``."""
    if value is None:
        return "N/A"
    return f"${value:.2f}"


def format_pct(value: Optional[float]) -> str:
    """Signed percentage with two decimals, or ``N/A``."""
    if value is None:
        return "N/A"
    return f"{value:+.2f}%"


# ── Ranked watchlist ──────────────────────────────────────────────────────────


def format_ranked_watchlist(ranked: list[TrackedStock]) -> str:
    """Format a ranked watchlist as an ASCII table, best deal first."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Watchlist (best deals first) ===")

    if not ranked:
        lines.append("")
        lines.append("  (watchlist is empty)")
        return "\n".join(lines)

    header = (
        f"  {'Rank':>4}  {'Symbol':<8}  {'Price':>10}  {'Target':>10}  "
        f"{'vs Target':>10}  {'Status':<13}"
    )
    lines.append("")
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for rank, stock in enumerate(ranked, start=1):
        lines.append(
            f"  {rank:>4}  {(stock.symbol or '?'):<8}  {format_money(stock.price):>10}  "
            f"{format_money(stock.target_price):>10}  "
            f"{format_pct(percentage_difference(stock)):>10}  "
            f"{target_status(stock).value:<13}"
        )
    return "\n".join(lines)


# ── Schedule ──────────────────────────────────────────────────────────────────


def format_month_list(months: tuple[int, ...]) -> str:
    if not months:
        return "-"
    return ", ".join(month_name(m) for m in months)


def format_schedule(schedule: InferredSchedule, symbol: str = "") -> str:
    """Multi-line summary of an inferred schedule."""
    title = f"=== Dividend schedule{' for ' + symbol if symbol else ''} ==="
    lines = [
        "",
        title,
        f"  Frequency:       {schedule.frequency.value}"
        + (" (fallback)" if schedule.is_fallback else ""),
        f"  Payment months:  {format_month_list(schedule.payment_months)}",
        f"  Shifted months:  {format_month_list(schedule.shifted_payment_months)}",
    ]
    return "\n".join(lines)


# ── Calendar ──────────────────────────────────────────────────────────────────


def format_calendar_table(calendar: DividendCalendar) -> str:
    """Render the 12-month dividend grid.

    Primary cells show the per-payment amount; shifted cells are prefixed
    with ``~``; empty cells show ``-``. The footer row shows monthly totals
    with ``GAP`` for months without any primary payment.
    """
    lines: list[str] = ["", "=== Dividend calendar ==="]

    if not calendar.rows:
        lines.append("")
        lines.append("  (no dividend schedule data available)")
    else:
        header = f"  {'Stock':<8}" + "".join(f"{m:>8}" for m in MONTH_NAMES)
        lines.append("")
        lines.append(header)
        lines.append("  " + "-" * (len(header) - 2))
        for row in calendar.rows:
            cells = []
            for cell in row.cells:
                if cell.kind is CellKind.NONE or cell.amount is None:
                    text = "-" if cell.kind is CellKind.NONE else "?"
                elif cell.kind is CellKind.SHIFTED:
                    text = f"~{cell.amount:.2f}"
                else:
                    text = f"{cell.amount:.2f}"
                cells.append(f"{text:>8}")
            lines.append(f"  {row.symbol:<8}" + "".join(cells))
        lines.append("  " + "-" * (len(header) - 2))
        totals = []
        for month in range(1, 13):
            total = calendar.monthly_totals.get(month, Decimal(0))
            text = "GAP" if month in calendar.gap_months else f"{total:.2f}"
            totals.append(f"{text:>8}")
        lines.append(f"  {'Total':<8}" + "".join(totals))

    if calendar.unknown_symbols:
        lines.append("")
        lines.append(f"  Unknown schedule: {', '.join(calendar.unknown_symbols)}")
    if calendar.no_dividend_symbols:
        lines.append(f"  No dividend:      {', '.join(calendar.no_dividend_symbols)}")
    return "\n".join(lines)
