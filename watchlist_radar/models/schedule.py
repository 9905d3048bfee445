"""
Inferred dividend schedule models.

``InferredSchedule`` is the output of schedule inference: a frequency class,
the calendar months (1 = January) where the regular cadence lands, and the
months where a payment was observed off-cadence ("shifted" months).

Invariants enforced at construction:
  - All months are in 1..12 with no duplicates; stored sorted.
  - ``payment_months`` and ``shifted_payment_months`` are disjoint.
  - For inferred schedules, ``frequency`` is ``unknown`` iff
    ``payment_months`` is empty. The dividend-payer fallback
    (``is_fallback=True``) is exempt: it is a known frequency with no
    observed months.

``ScheduleResult`` wraps the caller-level decision of whether a schedule
exists at all: ``SchedulePresent`` for dividend payers, ``ScheduleAbsent``
for stocks without a dividend. Absence is not the same as an ``unknown``
schedule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from watchlist_radar.taxonomy.frequency import PaymentFrequency


class InferredSchedule(BaseModel):
    """A recurring dividend payment schedule.

    Attributes:
        frequency: Inferred cadence class.
        payment_months: Months where the regular cadence expects a payment.
        shifted_payment_months: Observed months outside the regular cadence.
        is_fallback: ``True`` for the dividend-payer fallback schedule used
            when no usable history exists.
    """

    model_config = ConfigDict(frozen=True)

    frequency: PaymentFrequency
    payment_months: tuple[int, ...] = ()
    shifted_payment_months: tuple[int, ...] = ()
    is_fallback: bool = False

    @field_validator("payment_months", "shifted_payment_months")
    @classmethod
    def validate_months(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        for month in v:
            if not 1 <= month <= 12:
                raise ValueError(f"Month must be in 1..12, got {month}.")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate months in {list(v)}.")
        return tuple(sorted(v))

    @model_validator(mode="after")
    def validate_schedule_consistency(self) -> "InferredSchedule":
        overlap = set(self.payment_months) & set(self.shifted_payment_months)
        if overlap:
            raise ValueError(
                f"Months {sorted(overlap)} cannot be both payment and shifted months."
            )
        if not self.is_fallback:
            is_unknown = self.frequency == PaymentFrequency.UNKNOWN
            if is_unknown != (not self.payment_months):
                raise ValueError(
                    "frequency must be 'unknown' exactly when payment_months is empty."
                )
        return self

    @property
    def observed_months(self) -> tuple[int, ...]:
        """All months with a payment, regular or shifted, sorted."""
        return tuple(sorted(self.payment_months + self.shifted_payment_months))

    def to_record(self) -> dict[str, Any]:
        """Return the column values persisted alongside the stock record."""
        return {
            "payment_frequency":      self.frequency.value,
            "payment_months":         list(self.payment_months),
            "shifted_payment_months": list(self.shifted_payment_months),
        }


@dataclass(frozen=True)
class SchedulePresent:
    """The stock pays a dividend; ``schedule`` holds its (possibly fallback) schedule."""

    schedule: InferredSchedule


@dataclass(frozen=True)
class ScheduleAbsent:
    """The stock pays no dividend; no schedule fields should be populated."""


ScheduleResult = Union[SchedulePresent, ScheduleAbsent]
