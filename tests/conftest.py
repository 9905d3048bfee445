"""
Shared pytest fixtures for the Watchlist Radar test suite.

Provides:
  - ``make_stock``: factory for ``TrackedStock`` objects.
  - ``make_history``: factory turning ``(year, month, day, amount)`` tuples
    into ``DividendEvent`` lists.
  - Sample dividend histories (quarterly, monthly, month-shifting).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest

from watchlist_radar.models.dividend import DividendEvent
from watchlist_radar.models.stock import TrackedStock


def stock(
    price: Optional[float | str] = None,
    target_price: Optional[float | str] = None,
    symbol: Optional[str] = None,
    **kwargs,
) -> TrackedStock:
    return TrackedStock(symbol=symbol, price=price, target_price=target_price, **kwargs)


def history(*rows: tuple[int, int, int, float | str]) -> list[DividendEvent]:
    return [
        DividendEvent(date=date(y, m, d), amount=Decimal(str(amount)))
        for y, m, d, amount in rows
    ]


@pytest.fixture
def make_stock() -> Callable[..., TrackedStock]:
    return stock


@pytest.fixture
def make_history() -> Callable[..., list[DividendEvent]]:
    return history


# ── Sample dividend histories ─────────────────────────────────────────────────

@pytest.fixture
def quarterly_history() -> list[DividendEvent]:
    """Feb/May/Aug/Nov payer over 2024–2025."""
    return history(
        (2024, 2, 9, "0.24"), (2024, 5, 10, "0.25"),
        (2024, 8, 9, "0.25"), (2024, 11, 8, "0.25"),
        (2025, 2, 7, "0.25"), (2025, 5, 9, "0.25"),
        (2025, 8, 8, "0.25"), (2025, 11, 7, "0.25"),
    )


@pytest.fixture
def monthly_history() -> list[DividendEvent]:
    """24 consecutive monthly payments, Jan 2024 – Dec 2025."""
    return [
        DividendEvent(date=date(2024 + i // 12, i % 12 + 1, 15), amount=Decimal("0.25"))
        for i in range(24)
    ]


@pytest.fixture
def shifting_history() -> list[DividendEvent]:
    """Mar/Jun/Sep/Dec payer whose fourth payment once landed in late November."""
    return history(
        (2024, 3, 14, "0.485"), (2024, 6, 13, "0.485"),
        (2024, 9, 12, "0.485"), (2024, 11, 29, "0.485"),
        (2025, 3, 13, "0.51"), (2025, 6, 12, "0.51"),
        (2025, 9, 11, "0.51"), (2025, 12, 12, "0.51"),
    )
