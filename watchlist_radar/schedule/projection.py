"""
Schedule projection: frequency + anchor date -> calendar months and amounts.

Used when a data provider reports a payment frequency and the latest
ex-dividend date instead of a full payment history, and to split an annual
dividend into per-payment amounts for the dividend calendar.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from watchlist_radar.taxonomy.frequency import PaymentFrequency
from watchlist_radar.utils.time_utils import cadence_months

_PER_PAYMENT_QUANT = Decimal("0.0001")


def project_payment_months(
    frequency: Optional[PaymentFrequency],
    ex_dividend_date: Optional[date],
) -> list[int]:
    """Months a payer of ``frequency`` pays in, stepping from the ex-dividend month.

    Args:
        frequency:        Payment frequency; ``None``/``UNKNOWN`` yields ``[]``.
        ex_dividend_date: Any recent ex-dividend date on the cadence.

    Returns:
        Sorted months, e.g. quarterly from 2024-03-14 -> ``[3, 6, 9, 12]``.
    """
    if frequency is None or ex_dividend_date is None:
        return []
    interval = frequency.month_interval
    if interval is None:
        return []
    return cadence_months(ex_dividend_date.month, interval)


def dividend_per_payment(
    annual_dividend: Optional[Decimal],
    frequency: Optional[PaymentFrequency],
) -> Optional[Decimal]:
    """Split an annual dividend evenly over the payments in a year.

    Returns:
        ``annual_dividend / payments_per_year`` rounded to 4 places, or
        ``None`` when the dividend is missing or the frequency is unknown.
    """
    if annual_dividend is None or frequency is None:
        return None
    per_year = frequency.payments_per_year
    if not per_year:
        return None
    return (Decimal(annual_dividend) / per_year).quantize(
        _PER_PAYMENT_QUANT, rounding=ROUND_HALF_UP
    )
