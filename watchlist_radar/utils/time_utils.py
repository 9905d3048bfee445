"""
Calendar-month helpers for dividend schedules.

Months are 1-indexed (January = 1) throughout. Month arithmetic wraps
around the year boundary: December and January are one month apart.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

MONTH_NAMES: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_name(month: int) -> str:
    """Return the three-letter English abbreviation for ``month`` (1..12).

    Raises:
        ValueError: If ``month`` is outside 1..12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}.")
    return MONTH_NAMES[month - 1]


def shift_month(month: int, offset: int) -> int:
    """Return the month ``offset`` months after ``month``, wrapping at year end.

    >>> shift_month(11, 3)
    2
    """
    return (month - 1 + offset) % 12 + 1


def circular_month_distance(a: int, b: int) -> int:
    """Number of months between ``a`` and ``b`` going the short way round (0..6)."""
    diff = abs(a - b) % 12
    return min(diff, 12 - diff)


def cadence_months(anchor: int, interval: int) -> list[int]:
    """Months hit by a cadence of ``interval`` months passing through ``anchor``.

    Args:
        anchor: Any month on the cadence (1..12).
        interval: Months between payments; must divide 12.

    Returns:
        Sorted list of months, e.g. ``cadence_months(2, 3) == [2, 5, 8, 11]``.

    Raises:
        ValueError: If ``interval`` does not divide 12.
    """
    if interval < 1 or 12 % interval:
        raise ValueError(f"interval must divide 12, got {interval}.")
    return sorted(shift_month(anchor, k * interval) for k in range(12 // interval))


def years_spanned(dates: Iterable[date]) -> int:
    """Number of calendar years from the earliest to the latest date, inclusive.

    Returns 0 for an empty iterable.
    """
    years = [d.year for d in dates]
    if not years:
        return 0
    return max(years) - min(years) + 1
