"""
Watchlist ranker: orders tracked stocks by "deal quality" against target price.

Priority key (sorted ascending, stable)
---------------------------------------
    diff = (price - target_price) / target_price * 100     # signed percent

    target or price missing  ->  NO_TARGET_PRIORITY (1)
    diff <= 0 (at/below)     ->  -abs(diff)                # deeper discount first
    diff >  0 (above)        ->  diff + ABOVE_TARGET_OFFSET

Resulting tiers
---------------
1. Below or at target, furthest below first (priorities <= 0).
2. No usable target or price (priority exactly 1).
3. Above target, smallest overshoot first (priorities > offset).

ABOVE_TARGET_OFFSET is a sentinel, not a tuning knob. Overshoot ``diff`` is
strictly positive, so ``diff + offset > offset >= NO_TARGET_PRIORITY >= any
below-target priority`` holds for every offset at least as large as
NO_TARGET_PRIORITY, however large the overshoot. ``rank_watchlist`` rejects
offsets below the no-target priority.

A zero target price yields ``diff = 0`` (ranked as "at target").
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from watchlist_radar.models.stock import TrackedStock
from watchlist_radar.taxonomy.frequency import TargetStatus

logger = logging.getLogger(__name__)

NO_TARGET_PRIORITY: float = 1.0
ABOVE_TARGET_OFFSET: float = 1000.0


def percentage_difference(stock: TrackedStock) -> Optional[float]:
    """Signed percentage by which ``price`` exceeds ``target_price``.

    Returns:
        ``None`` if either price is missing; ``0.0`` if the target is zero;
        otherwise ``(price - target) / target * 100`` (negative below target).
    """
    if stock.price is None or stock.target_price is None:
        return None
    if stock.target_price == 0:
        return 0.0
    return float((stock.price - stock.target_price) / stock.target_price * Decimal(100))


def sort_priority(
    stock: TrackedStock,
    above_target_offset: float = ABOVE_TARGET_OFFSET,
    no_target_priority: float = NO_TARGET_PRIORITY,
) -> float:
    """Numeric sort key for one stock; lower sorts earlier.

    Args:
        stock:               The tracked stock.
        above_target_offset: Sentinel added to above-target overshoot.
        no_target_priority:  Fixed key for stocks without target or price.

    Returns:
        The priority as a float. Never raises.
    """
    diff = percentage_difference(stock)
    if diff is None:
        return no_target_priority
    if diff <= 0:
        return -abs(diff)
    return diff + above_target_offset


def rank_watchlist(
    stocks: Iterable[TrackedStock],
    above_target_offset: float = ABOVE_TARGET_OFFSET,
    no_target_priority: float = NO_TARGET_PRIORITY,
) -> list[TrackedStock]:
    """Return ``stocks`` ordered best deal first.

    The sort is stable: stocks with equal priority keep their input order.
    The returned list holds the same objects as the input (no copies), with
    the same length.

    Args:
        stocks:              Tracked stocks in any order.
        above_target_offset: Sentinel for the above-target tier; must be
                             ``>= no_target_priority``.
        no_target_priority:  Key for the no-target tier; must be ``> 0``.

    Returns:
        New list sorted ascending by :func:`sort_priority`.

    Raises:
        ValueError: If the offset would not separate the tiers.
    """
    if no_target_priority <= 0 or above_target_offset < no_target_priority:
        raise ValueError(
            f"above_target_offset ({above_target_offset}) must be >= "
            f"no_target_priority ({no_target_priority}) > 0."
        )
    items = list(stocks)
    ranked = sorted(
        items,
        key=lambda s: sort_priority(s, above_target_offset, no_target_priority),
    )
    logger.debug("Ranked %d watchlist stocks", len(ranked))
    return ranked


def target_status(stock: TrackedStock) -> TargetStatus:
    """Classify the current price relative to the target price."""
    if stock.price is None or stock.target_price is None:
        return TargetStatus.NO_TARGET
    if stock.price < stock.target_price:
        return TargetStatus.BELOW_TARGET
    if stock.price > stock.target_price:
        return TargetStatus.ABOVE_TARGET
    return TargetStatus.AT_TARGET


def distance_from_target(stock: TrackedStock) -> Optional[float]:
    """Absolute percentage distance between price and target, or ``None``.

    ``None`` also covers a zero target, where no percentage is defined.
    """
    if stock.price is None or not stock.target_price:
        return None
    return abs(percentage_difference(stock))
