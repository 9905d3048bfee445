"""
Call-site schedule resolution for a single stock.

Three branches, decided once here and never inside the inferencer:

  dividend null or zero           -> ScheduleAbsent()   (inferencer not called)
  dividend payer, no usable data  -> SchedulePresent(dividend_payer_fallback())
  dividend payer with history     -> SchedulePresent(infer_schedule(events))

The fallback is a product policy for incomplete data: a stock known to pay a
dividend is shown as ``quarterly`` with no months until history arrives.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from watchlist_radar.cache import ScheduleCache, schedule_cache_key
from watchlist_radar.models.dividend import DividendEvent
from watchlist_radar.models.schedule import (
    InferredSchedule,
    ScheduleAbsent,
    SchedulePresent,
    ScheduleResult,
)
from watchlist_radar.models.stock import TrackedStock
from watchlist_radar.schedule.inferencer import (
    DEFAULT_REGULAR_MONTH_THRESHOLD,
    infer_schedule,
    usable_events,
)
from watchlist_radar.taxonomy.frequency import PaymentFrequency

logger = logging.getLogger(__name__)


def dividend_payer_fallback(
    frequency: PaymentFrequency = PaymentFrequency.QUARTERLY,
) -> InferredSchedule:
    """Schedule assumed for a dividend payer with no usable payment history."""
    return InferredSchedule(frequency=frequency, is_fallback=True)


def resolve_schedule(
    dividend: Optional[Decimal],
    events: Iterable[Optional[DividendEvent]],
    *,
    cache: Optional[ScheduleCache] = None,
    cache_key: Optional[str] = None,
    regular_month_threshold: float = DEFAULT_REGULAR_MONTH_THRESHOLD,
    fallback_frequency: PaymentFrequency = PaymentFrequency.QUARTERLY,
) -> ScheduleResult:
    """Decide whether a stock has a schedule and compute it.

    Args:
        dividend:                Annual dividend per share; null/zero means
                                 the stock pays no dividend.
        events:                  Dividend history in any order.
        cache:                   Optional get-or-compute cache for inferred
                                 schedules.
        cache_key:               Key for ``cache``; derived from the history
                                 and threshold when omitted.
        regular_month_threshold: Passed through to :func:`infer_schedule`.
        fallback_frequency:      Frequency of the dividend-payer fallback.

    Returns:
        ``ScheduleAbsent()`` or ``SchedulePresent(schedule)``.
    """
    if dividend is None or dividend == 0:
        return ScheduleAbsent()

    history = usable_events(events)
    if not history:
        logger.debug("Dividend payer without usable history; using fallback schedule")
        return SchedulePresent(dividend_payer_fallback(fallback_frequency))

    def _produce() -> InferredSchedule:
        return infer_schedule(history, regular_month_threshold)

    if cache is None:
        return SchedulePresent(_produce())

    key = cache_key or schedule_cache_key(None, history, regular_month_threshold)
    return SchedulePresent(cache.get_or_compute(key, _produce))


def resolve_stock_schedule(
    stock: TrackedStock,
    *,
    cache: Optional[ScheduleCache] = None,
    regular_month_threshold: float = DEFAULT_REGULAR_MONTH_THRESHOLD,
    fallback_frequency: PaymentFrequency = PaymentFrequency.QUARTERLY,
) -> ScheduleResult:
    """:func:`resolve_schedule` for a :class:`TrackedStock` and its own history.

    The cache key includes the stock symbol, the threshold and a hash of its
    history.
    """
    result = resolve_schedule(
        stock.dividend,
        stock.dividends,
        cache=cache,
        cache_key=schedule_cache_key(stock.symbol, stock.dividends, regular_month_threshold),
        regular_month_threshold=regular_month_threshold,
        fallback_frequency=fallback_frequency,
    )
    if isinstance(result, SchedulePresent):
        logger.debug(
            "Resolved schedule",
            extra={"symbol": stock.symbol, "frequency": result.schedule.frequency.value},
        )
    else:
        logger.debug("No dividend; no schedule", extra={"symbol": stock.symbol})
    return result
