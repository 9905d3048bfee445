"""
Dividend history evidence.

``DividendEvent`` is one historical dividend payment as handed over by a
financial data feed. Both fields are nullable because real-world feeds
occasionally emit rows without a date or amount; such events are kept
representable here and dropped by schedule inference instead of raising.

The model is frozen: payment history is read-only evidence.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DividendEvent(BaseModel):
    """A single historical dividend payment.

    Attributes:
        date: Payment (or ex-dividend) date, or ``None`` if the feed omitted it.
        amount: Cash amount per share, or ``None`` if the feed omitted it.
    """

    model_config = ConfigDict(frozen=True)

    date: Optional[Date] = None
    amount: Optional[Decimal] = None

    @property
    def is_usable(self) -> bool:
        """``True`` when the event has a date and a strictly positive amount."""
        return self.date is not None and self.amount is not None and self.amount > 0
