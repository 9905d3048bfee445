"""
Dividend payment taxonomy.

Two enums describe the dividend side of a tracked stock:
  - ``PaymentFrequency`` — the inferred cadence class of dividend payments.
  - ``TargetStatus``     — where the current price sits relative to the
                           user's target price.

``FREQUENCY_BUCKETS`` lists the concrete (non-``unknown``) frequencies from
most to least frequent; schedule inference classifies regular-month counts
against it.

Usage example::

    from watchlist_radar.taxonomy.frequency import PaymentFrequency

    freq = PaymentFrequency.QUARTERLY
    freq.payments_per_year   # 4
    freq.month_interval      # 3

This module has NO imports from any other ``watchlist_radar`` package.
"""

from enum import StrEnum
from typing import Optional


class PaymentFrequency(StrEnum):
    """Cadence class of a stock's dividend payments."""

    MONTHLY = "monthly"
    """Twelve payments a year, one per calendar month."""

    QUARTERLY = "quarterly"
    """Four payments a year, roughly three months apart."""

    SEMI_ANNUAL = "semi_annual"
    """Two payments a year, roughly six months apart."""

    ANNUAL = "annual"
    """One payment a year."""

    UNKNOWN = "unknown"
    """No stable pattern could be inferred from the payment history."""

    @property
    def payments_per_year(self) -> int:
        """Expected number of payments per year; 0 for ``UNKNOWN``."""
        return _PAYMENTS_PER_YEAR[self]

    @property
    def month_interval(self) -> Optional[int]:
        """Months between consecutive payments, or ``None`` for ``UNKNOWN``."""
        per_year = self.payments_per_year
        return 12 // per_year if per_year else None


_PAYMENTS_PER_YEAR: dict[PaymentFrequency, int] = {
    PaymentFrequency.MONTHLY:     12,
    PaymentFrequency.QUARTERLY:    4,
    PaymentFrequency.SEMI_ANNUAL:  2,
    PaymentFrequency.ANNUAL:       1,
    PaymentFrequency.UNKNOWN:      0,
}

FREQUENCY_BUCKETS: tuple[PaymentFrequency, ...] = (
    PaymentFrequency.MONTHLY,
    PaymentFrequency.QUARTERLY,
    PaymentFrequency.SEMI_ANNUAL,
    PaymentFrequency.ANNUAL,
)


class TargetStatus(StrEnum):
    """Current price relative to the user's target price."""

    BELOW_TARGET = "below_target"
    """Price is under the target: a candidate entry point."""

    AT_TARGET = "at_target"
    """Price equals the target exactly."""

    ABOVE_TARGET = "above_target"
    """Price is over the target."""

    NO_TARGET = "no_target"
    """Target price or current price is missing."""
