"""
Dividend schedule inference: payment history -> recurring schedule.

Algorithm
---------
1. Drop unusable events (missing date, missing or non-positive amount).
2. Group the remaining payments by calendar month (1..12), counting the
   distinct years each month was paid in. ``years_spanned`` runs from the
   earliest to the latest payment year, inclusive.
3. A month is *regular* when

       years_paid / years_spanned >= regular_month_threshold     (default 0.5)

   A trailing twelve months of monthly payments that crosses a year
   boundary spans two years with every month paid in one of them, so
   every month is regular.
4. Frequency comes from the regular-month count:

       12 -> monthly,  4 -> quarterly,  2 -> semi_annual,  1 -> annual,
       0  -> unknown

   Other counts take the nearest bucket. Equal distances go to the bucket
   whose payments-per-year is nearest the observed average payments per
   spanned year, then to the more frequent bucket (3 regular months with
   ~4 payments a year -> quarterly).
5. ``payment_months``: the ``payments_per_year`` best observed months,
   ranked by (years paid desc, distance to the cadence grid anchored on the
   most regular month asc, month asc). For a March/June/September payer
   whose fourth payment landed once in November and once in December, the
   December slot wins (on the grid) and November becomes a shifted month.
6. ``shifted_payment_months``: every observed month not chosen in step 5.

Grouping is strictly by month-of-year, so December 2024 and January 2025
are simply months 12 and 1.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional

from watchlist_radar.models.dividend import DividendEvent
from watchlist_radar.models.schedule import InferredSchedule
from watchlist_radar.taxonomy.frequency import FREQUENCY_BUCKETS, PaymentFrequency
from watchlist_radar.utils.time_utils import (
    cadence_months,
    circular_month_distance,
    years_spanned,
)

logger = logging.getLogger(__name__)

DEFAULT_REGULAR_MONTH_THRESHOLD: float = 0.5

UNKNOWN_SCHEDULE = InferredSchedule(frequency=PaymentFrequency.UNKNOWN)


def usable_events(events: Iterable[Optional[DividendEvent]]) -> list[DividendEvent]:
    """Return the usable events from ``events`` sorted oldest first.

    ``None`` entries and events without a date or a positive amount are
    dropped.
    """
    kept: list[DividendEvent] = []
    dropped = 0
    for event in events:
        if event is not None and event.is_usable:
            kept.append(event)
        else:
            dropped += 1
    if dropped:
        logger.debug("Dropped %d unusable dividend event(s)", dropped)
    kept.sort(key=lambda e: e.date)
    return kept


def years_paid_by_month(events: list[DividendEvent]) -> dict[int, int]:
    """Map month-of-year -> number of distinct years with a payment in it."""
    years: dict[int, set[int]] = defaultdict(set)
    for event in events:
        years[event.date.month].add(event.date.year)
    return {month: len(ys) for month, ys in years.items()}


def regular_months(
    month_counts: dict[int, int],
    spanned: int,
    threshold: float = DEFAULT_REGULAR_MONTH_THRESHOLD,
) -> list[int]:
    """Months paid in at least ``threshold`` of the ``spanned`` years."""
    if spanned <= 0:
        return []
    return sorted(
        month
        for month, count in month_counts.items()
        if count / spanned >= threshold
    )


def classify_frequency(
    regular_count: int,
    avg_payments_per_year: float,
) -> PaymentFrequency:
    """Pick the frequency bucket for a regular-month count.

    Args:
        regular_count:         Number of regular months (0..12).
        avg_payments_per_year: Usable payments divided by years spanned;
                               resolves ties between equidistant buckets.

    Returns:
        ``UNKNOWN`` for zero regular months, else the nearest bucket.
    """
    if regular_count <= 0:
        return PaymentFrequency.UNKNOWN
    return min(
        FREQUENCY_BUCKETS,
        key=lambda f: (
            abs(f.payments_per_year - regular_count),
            abs(f.payments_per_year - avg_payments_per_year),
            -f.payments_per_year,
        ),
    )


def select_payment_months(
    month_counts: dict[int, int],
    frequency: PaymentFrequency,
) -> list[int]:
    """Choose up to ``frequency.payments_per_year`` observed months.

    Ranking: years paid (desc), circular distance to the cadence grid through
    the most regular month (asc), month number (asc).
    """
    interval = frequency.month_interval
    if interval is None or not month_counts:
        return []

    anchor = min(month_counts, key=lambda m: (-month_counts[m], m))
    grid = cadence_months(anchor, interval)

    def rank_key(month: int) -> tuple[int, int, int]:
        off_grid = min(circular_month_distance(month, g) for g in grid)
        return (-month_counts[month], off_grid, month)

    chosen = sorted(month_counts, key=rank_key)[: frequency.payments_per_year]
    return sorted(chosen)


def infer_schedule(
    events: Iterable[Optional[DividendEvent]],
    regular_month_threshold: float = DEFAULT_REGULAR_MONTH_THRESHOLD,
) -> InferredSchedule:
    """Infer a recurring dividend schedule from payment history.

    Pure and total: never raises on empty or malformed input.

    Args:
        events:                  Historical payments in any order; ``None``
                                 entries and unusable events are skipped.
        regular_month_threshold: Share of spanned years (0, 1] a month must
                                 be paid in to count as regular.

    Returns:
        The inferred :class:`InferredSchedule`; ``unknown`` with no months
        when there is no usable history.
    """
    history = usable_events(events)
    if not history:
        return UNKNOWN_SCHEDULE

    spanned = years_spanned(e.date for e in history)
    month_counts = years_paid_by_month(history)
    regular = regular_months(month_counts, spanned, regular_month_threshold)

    frequency = classify_frequency(len(regular), len(history) / spanned)
    payment_months = select_payment_months(month_counts, frequency)
    shifted = sorted(set(month_counts) - set(payment_months))

    logger.debug(
        "Inferred %s schedule from %d payment(s) over %d year(s): "
        "regular=%s payment=%s shifted=%s",
        frequency.value, len(history), spanned, regular, payment_months, shifted,
        extra={"frequency": frequency.value},
    )

    return InferredSchedule(
        frequency=frequency,
        payment_months=tuple(payment_months),
        shifted_payment_months=tuple(shifted),
    )
