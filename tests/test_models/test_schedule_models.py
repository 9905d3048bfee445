"""Tests for InferredSchedule, SchedulePresent and ScheduleAbsent."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from watchlist_radar.models.schedule import (
    InferredSchedule,
    ScheduleAbsent,
    SchedulePresent,
)
from watchlist_radar.taxonomy.frequency import PaymentFrequency


class TestInferredSchedule:
    def test_months_sorted_on_construction(self):
        s = InferredSchedule(
            frequency=PaymentFrequency.QUARTERLY,
            payment_months=[11, 2, 8, 5],
            shifted_payment_months=[3],
        )
        assert s.payment_months == (2, 5, 8, 11)
        assert s.observed_months == (2, 3, 5, 8, 11)

    def test_overlap_raises(self):
        with pytest.raises(ValidationError, match="both payment and shifted"):
            InferredSchedule(
                frequency=PaymentFrequency.ANNUAL,
                payment_months=[6],
                shifted_payment_months=[6],
            )

    def test_month_out_of_range_raises(self):
        with pytest.raises(ValidationError, match="1..12"):
            InferredSchedule(frequency=PaymentFrequency.ANNUAL, payment_months=[13])

    def test_duplicate_months_raise(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            InferredSchedule(frequency=PaymentFrequency.SEMI_ANNUAL, payment_months=[6, 6])

    def test_unknown_with_months_raises(self):
        with pytest.raises(ValidationError, match="unknown"):
            InferredSchedule(frequency=PaymentFrequency.UNKNOWN, payment_months=[1])

    def test_known_frequency_without_months_raises(self):
        with pytest.raises(ValidationError, match="unknown"):
            InferredSchedule(frequency=PaymentFrequency.QUARTERLY)

    def test_fallback_may_have_no_months(self):
        s = InferredSchedule(frequency=PaymentFrequency.QUARTERLY, is_fallback=True)
        assert s.payment_months == ()

    def test_frozen(self):
        s = InferredSchedule(frequency=PaymentFrequency.ANNUAL, payment_months=[6])
        with pytest.raises(ValidationError):
            s.frequency = PaymentFrequency.MONTHLY

    def test_to_record(self):
        s = InferredSchedule(
            frequency=PaymentFrequency.QUARTERLY,
            payment_months=[3, 6, 9, 12],
            shifted_payment_months=[11],
        )
        assert s.to_record() == {
            "payment_frequency": "quarterly",
            "payment_months": [3, 6, 9, 12],
            "shifted_payment_months": [11],
        }


class TestScheduleResult:
    def test_present_wraps_schedule(self):
        s = InferredSchedule(frequency=PaymentFrequency.ANNUAL, payment_months=[6])
        assert SchedulePresent(s).schedule is s

    def test_absent_instances_are_equal(self):
        assert ScheduleAbsent() == ScheduleAbsent()
