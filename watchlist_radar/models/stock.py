"""
Tracked stock model — one stock on a user's watchlist.

``TrackedStock`` is constructed fresh for every ranking or calendar request
from the persisted stock record plus the watchlist membership (which
carries the user's target price). It is frozen; the ranker reorders
references and never mutates them.

Monetary values are ``Decimal`` so that percentage arithmetic on prices is
exact. Floats and numeric strings are accepted and coerced by pydantic.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from watchlist_radar.models.dividend import DividendEvent


class TrackedStock(BaseModel):
    """A stock on a watchlist with its current price and optional target.

    Attributes:
        symbol: Ticker symbol, upper-cased on construction.
        name: Company name, if known.
        price: Latest quoted price, or ``None`` if no quote is available.
        target_price: User-set entry price, or ``None`` if not set.
        dividend: Annual dividend per share, or ``None`` for non-payers.
        ex_dividend_date: Most recent ex-dividend date, if known.
        dividends: Historical dividend payments (any order).
    """

    model_config = ConfigDict(frozen=True)

    symbol: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Decimal] = None
    target_price: Optional[Decimal] = None
    dividend: Optional[Decimal] = None
    ex_dividend_date: Optional[date] = None
    dividends: tuple[DividendEvent, ...] = ()

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().upper()
        if not v:
            raise ValueError("symbol must not be blank.")
        return v

    @field_validator("price", "target_price", "dividend")
    @classmethod
    def validate_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v < 0:
            raise ValueError("Prices and dividend amounts must be non-negative.")
        return v

    @property
    def pays_dividend(self) -> bool:
        """``True`` when the stock has a non-zero annual dividend."""
        return self.dividend is not None and self.dividend != 0
