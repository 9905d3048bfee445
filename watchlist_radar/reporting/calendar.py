"""
Dividend calendar: 12-month payment grid data for a watchlist.

Input is one ``CalendarEntry`` per stock (symbol, annual dividend, resolved
``ScheduleResult``). Output is a ``DividendCalendar``:

  rows                 one ``CalendarRow`` per stock with a known schedule,
                       12 cells each (``primary`` / ``shifted`` / ``none``)
  monthly_totals       sum of per-payment amounts in primary cells, by month
  gap_months           months whose total is zero
  unknown_symbols      dividend payers without usable payment months
                       (fallback or ``unknown`` schedules)
  no_dividend_symbols  stocks whose schedule is absent

Shifted cells show the per-payment amount but never count toward the
monthly totals: a shifted month is an occasional landing spot, not an
expected payment.

No formatting happens here; amounts stay ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Iterable, Optional

from watchlist_radar.models.schedule import InferredSchedule, SchedulePresent, ScheduleResult
from watchlist_radar.models.stock import TrackedStock
from watchlist_radar.schedule.projection import dividend_per_payment

MONTHS: tuple[int, ...] = tuple(range(1, 13))


class CellKind(StrEnum):
    """What a calendar cell shows for one stock in one month."""

    PRIMARY = "primary"
    SHIFTED = "shifted"
    NONE = "none"


@dataclass(frozen=True)
class CalendarEntry:
    """One watchlist stock as seen by the calendar builder."""

    symbol:   str
    dividend: Optional[Decimal]
    schedule: ScheduleResult


@dataclass(frozen=True)
class CalendarCell:
    month:  int
    kind:   CellKind
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class CalendarRow:
    """One stock's 12 cells plus the schedule they were built from."""

    symbol:               str
    schedule:             InferredSchedule
    dividend_per_payment: Optional[Decimal]
    cells:                tuple[CalendarCell, ...]

    def cell(self, month: int) -> CalendarCell:
        return self.cells[month - 1]


@dataclass
class DividendCalendar:
    rows:                list[CalendarRow] = field(default_factory=list)
    monthly_totals:      dict[int, Decimal] = field(default_factory=dict)
    gap_months:          list[int] = field(default_factory=list)
    unknown_symbols:     list[str] = field(default_factory=list)
    no_dividend_symbols: list[str] = field(default_factory=list)

    @property
    def annual_total(self) -> Decimal:
        return sum(self.monthly_totals.values(), Decimal(0))


def build_calendar_row(
    symbol: str,
    schedule: InferredSchedule,
    dividend: Optional[Decimal],
) -> CalendarRow:
    """Lay one schedule out over the 12 months."""
    per_payment = dividend_per_payment(dividend, schedule.frequency)
    primary = set(schedule.payment_months)
    shifted = set(schedule.shifted_payment_months)

    cells: list[CalendarCell] = []
    for month in MONTHS:
        if month in primary:
            cells.append(CalendarCell(month, CellKind.PRIMARY, per_payment))
        elif month in shifted:
            cells.append(CalendarCell(month, CellKind.SHIFTED, per_payment))
        else:
            cells.append(CalendarCell(month, CellKind.NONE))

    return CalendarRow(
        symbol=symbol,
        schedule=schedule,
        dividend_per_payment=per_payment,
        cells=tuple(cells),
    )


def build_dividend_calendar(entries: Iterable[CalendarEntry]) -> DividendCalendar:
    """Build the 12-month dividend calendar for a watchlist.

    Args:
        entries: Stocks in display order; row order follows input order.

    Returns:
        Populated :class:`DividendCalendar`.
    """
    calendar = DividendCalendar()
    totals: dict[int, Decimal] = {m: Decimal(0) for m in MONTHS}

    for entry in entries:
        if not isinstance(entry.schedule, SchedulePresent):
            calendar.no_dividend_symbols.append(entry.symbol)
            continue

        schedule = entry.schedule.schedule
        if not schedule.payment_months:
            calendar.unknown_symbols.append(entry.symbol)
            continue

        row = build_calendar_row(entry.symbol, schedule, entry.dividend)
        calendar.rows.append(row)

        if row.dividend_per_payment is None:
            continue
        for month in schedule.payment_months:
            totals[month] += row.dividend_per_payment

    calendar.monthly_totals = totals
    calendar.gap_months = [m for m in MONTHS if totals[m] == 0]
    return calendar


def entries_for_stocks(
    stocks: Iterable[TrackedStock],
    schedules: Iterable[ScheduleResult],
) -> list[CalendarEntry]:
    """Pair stocks with their resolved schedules (same order, same length)."""
    return [
        CalendarEntry(symbol=stock.symbol or "?", dividend=stock.dividend, schedule=result)
        for stock, result in zip(stocks, schedules, strict=True)
    ]
