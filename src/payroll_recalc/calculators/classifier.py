"""Overtime classification of daily worked minutes."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from payroll_recalc.calculators.rules import DAILY_NORMAL_MINUTES, REST_WEEKDAY
from payroll_recalc.calculators.types import ClassifiedMinutes, DailyTotal


def classify_day(day: DailyTotal) -> ClassifiedMinutes:
    """Split one day's minutes into normal / 50% / 100% buckets.

    On the rest day every minute is 100% premium. On other days the first
    DAILY_NORMAL_MINUTES are normal and the remainder is 50% premium.
    """
    if day.weekday == REST_WEEKDAY:
        return ClassifiedMinutes(premium100=day.minutes)

    normal = min(day.minutes, DAILY_NORMAL_MINUTES)
    return ClassifiedMinutes(normal=normal, premium50=day.minutes - normal)


def classify_period(days: Iterable[DailyTotal]) -> dict[UUID, ClassifiedMinutes]:
    """Accumulate classified minutes per employee across a period."""
    totals: dict[UUID, ClassifiedMinutes] = {}
    for day in days:
        totals[day.employee_id] = totals.get(day.employee_id, ClassifiedMinutes()) + classify_day(day)
    return totals
