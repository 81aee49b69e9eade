"""Entry/exit pairing and daily aggregation of worked time."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from payroll_recalc.calculators.types import (
    ClockEvent,
    DailyTotal,
    EventKind,
    WorkedInterval,
)

# ENTRY sorts ahead of EXIT when both carry the same time
_KIND_ORDER = {EventKind.ENTRY: 0, EventKind.EXIT: 1}


def pair_shift(events: list[ClockEvent]) -> list[int]:
    """Pair the events of a single (employee, date, shift slot) bucket.

    Returns the duration in minutes of each matched ENTRY -> EXIT pair.
    Unmatched events are dropped; an open shift is not an error.
    """
    ordered = sorted(events, key=lambda e: (e.minute_of_day, _KIND_ORDER[e.kind]))
    durations: list[int] = []

    i = 0
    while i < len(ordered):
        current = ordered[i]
        following = ordered[i + 1] if i + 1 < len(ordered) else None
        if (
            current.kind is EventKind.ENTRY
            and following is not None
            and following.kind is EventKind.EXIT
        ):
            durations.append(max(following.minute_of_day - current.minute_of_day, 0))
            i += 2
        else:
            i += 1

    return durations


def pair_events(events: Iterable[ClockEvent]) -> list[WorkedInterval]:
    """Turn clock events into worked intervals.

    Events are bucketed by (employee, date, shift slot) and each bucket is
    paired independently with :func:`pair_shift`.
    """
    buckets: dict[tuple[UUID, date, int], list[ClockEvent]] = defaultdict(list)
    for event in events:
        buckets[(event.employee_id, event.work_date, event.shift_slot)].append(event)

    intervals: list[WorkedInterval] = []
    for (employee_id, work_date, _slot), bucket in sorted(
        buckets.items(), key=lambda kv: (str(kv[0][0]), kv[0][1], kv[0][2])
    ):
        for minutes in pair_shift(bucket):
            intervals.append(
                WorkedInterval(employee_id=employee_id, work_date=work_date, minutes=minutes)
            )
    return intervals


def aggregate_daily(intervals: Iterable[WorkedInterval]) -> list[DailyTotal]:
    """Sum interval minutes per (employee, date).

    Days without any matched interval do not appear in the output.
    """
    totals: dict[tuple[UUID, date], int] = defaultdict(int)
    for interval in intervals:
        totals[(interval.employee_id, interval.work_date)] += interval.minutes

    return [
        DailyTotal(employee_id=employee_id, work_date=work_date, minutes=minutes)
        for (employee_id, work_date), minutes in totals.items()
    ]
