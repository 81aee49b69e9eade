"""Tests for overtime classification."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from payroll_recalc.calculators.classifier import classify_day, classify_period
from payroll_recalc.calculators.rules import DAILY_NORMAL_MINUTES
from payroll_recalc.calculators.types import ClassifiedMinutes, DailyTotal

EMPLOYEE = uuid4()
TUESDAY = date(2024, 3, 5)
SUNDAY = date(2024, 3, 3)


class TestClassifyDay:
    """Test classification of a single day."""

    def test_regular_day_under_limit(self):
        result = classify_day(DailyTotal(EMPLOYEE, TUESDAY, 300))
        assert result == ClassifiedMinutes(normal=300)

    def test_regular_day_at_limit(self):
        result = classify_day(DailyTotal(EMPLOYEE, TUESDAY, DAILY_NORMAL_MINUTES))
        assert result == ClassifiedMinutes(normal=480)

    def test_regular_day_over_limit(self):
        result = classify_day(DailyTotal(EMPLOYEE, TUESDAY, 540))
        assert result == ClassifiedMinutes(normal=480, premium50=60)

    def test_sunday_is_all_premium100(self):
        result = classify_day(DailyTotal(EMPLOYEE, SUNDAY, 600))
        assert result == ClassifiedMinutes(premium100=600)

    def test_saturday_is_a_regular_day(self):
        saturday = date(2024, 3, 2)
        result = classify_day(DailyTotal(EMPLOYEE, saturday, 500))
        assert result == ClassifiedMinutes(normal=480, premium50=20)

    @pytest.mark.parametrize("offset", range(7))
    @pytest.mark.parametrize("minutes", [0, 1, 479, 480, 481, 1440])
    def test_buckets_always_add_up(self, offset, minutes):
        day = DailyTotal(EMPLOYEE, date(2024, 3, 4) + timedelta(days=offset), minutes)
        result = classify_day(day)

        assert result.total == minutes
        if day.weekday == 6:
            assert result.normal == 0 and result.premium50 == 0
        else:
            assert result.normal <= DAILY_NORMAL_MINUTES
            assert result.premium100 == 0


class TestClassifyPeriod:
    """Test accumulation over a period."""

    def test_accumulates_per_employee(self):
        other = uuid4()
        days = [
            DailyTotal(EMPLOYEE, TUESDAY, 540),
            DailyTotal(EMPLOYEE, SUNDAY, 240),
            DailyTotal(EMPLOYEE, date(2024, 3, 6), 400),
            DailyTotal(other, TUESDAY, 600),
        ]
        totals = classify_period(days)

        assert totals[EMPLOYEE] == ClassifiedMinutes(normal=880, premium50=60, premium100=240)
        assert totals[other] == ClassifiedMinutes(normal=480, premium50=120)

    def test_overtime_is_not_offset_across_days(self):
        """A short day does not absorb another day's excess."""
        days = [
            DailyTotal(EMPLOYEE, TUESDAY, 600),
            DailyTotal(EMPLOYEE, date(2024, 3, 6), 360),
        ]
        assert classify_period(days)[EMPLOYEE] == ClassifiedMinutes(normal=840, premium50=120)

    def test_empty_period(self):
        assert classify_period([]) == {}
