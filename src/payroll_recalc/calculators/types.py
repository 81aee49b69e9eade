"""Type definitions for the recalculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


class Regime(str, Enum):
    """Employee compensation basis."""

    HOURLY = "HOURLY"
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"


class LineItemType(str, Enum):
    """Manual payroll line item types."""

    EARNING = "EARNING"
    DEDUCTION = "DEDUCTION"
    OTHER = "OTHER"


class EventKind(str, Enum):
    """Clock event kind."""

    ENTRY = "ENTRY"
    EXIT = "EXIT"


@dataclass(frozen=True)
class ClockEvent:
    """A single clock-in or clock-out within a shift slot."""

    employee_id: UUID
    work_date: date
    shift_slot: int
    kind: EventKind
    at: time

    @property
    def minute_of_day(self) -> int:
        return self.at.hour * 60 + self.at.minute


@dataclass(frozen=True)
class WorkedInterval:
    """A matched entry/exit pair."""

    employee_id: UUID
    work_date: date
    minutes: int


@dataclass(frozen=True)
class DailyTotal:
    """Worked minutes of one employee on one date."""

    employee_id: UUID
    work_date: date
    minutes: int

    @property
    def weekday(self) -> int:
        """Day of week, Monday == 0 ... Sunday == 6."""
        return self.work_date.weekday()


@dataclass(frozen=True)
class ClassifiedMinutes:
    """Per-employee minute buckets accumulated over a period."""

    normal: int = 0
    premium50: int = 0
    premium100: int = 0

    def __add__(self, other: ClassifiedMinutes) -> ClassifiedMinutes:
        return ClassifiedMinutes(
            normal=self.normal + other.normal,
            premium50=self.premium50 + other.premium50,
            premium100=self.premium100 + other.premium100,
        )

    @property
    def total(self) -> int:
        return self.normal + self.premium50 + self.premium100


@dataclass(frozen=True)
class Compensation:
    """Compensation settings of one employee, as read from the employee record."""

    regime: Regime
    base_salary: Decimal | None = None
    hourly_rate: Decimal | None = None


@dataclass(frozen=True)
class WageBreakdown:
    """Hours and pay of one employee for a period."""

    regime: Regime
    hourly_rate: Decimal
    normal_hours: Decimal
    premium50_hours: Decimal
    premium100_hours: Decimal
    normal_pay: Decimal
    premium50_pay: Decimal
    premium100_pay: Decimal

    @property
    def gross_pay(self) -> Decimal:
        return self.normal_pay + self.premium50_pay + self.premium100_pay


@dataclass(frozen=True)
class LineItemInput:
    """A manual line item as seen by the aggregator."""

    line_id: UUID
    item_type: LineItemType
    amount: Decimal | None = None
    quantity: Decimal | None = None
    unit_amount: Decimal | None = None

    @property
    def effective_amount(self) -> Decimal:
        """Explicit amount, else quantity x unit amount, else zero."""
        if self.amount is not None:
            return self.amount
        if self.quantity is not None and self.unit_amount is not None:
            return self.quantity * self.unit_amount
        return Decimal("0")


@dataclass(frozen=True)
class LineItemTotals:
    """Summed manual earnings and deductions of one payroll line."""

    earnings: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")


@dataclass(frozen=True)
class LineFigures:
    """Everything written back to a payroll line by a recalculation."""

    wages: WageBreakdown
    earnings_total: Decimal
    deductions_total: Decimal
    net_total: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict (amounts as strings)."""
        return {
            "regime": self.wages.regime.value,
            "hourly_rate": str(self.wages.hourly_rate),
            "normal_hours": str(self.wages.normal_hours),
            "premium50_hours": str(self.wages.premium50_hours),
            "premium100_hours": str(self.wages.premium100_hours),
            "normal_pay": str(self.wages.normal_pay),
            "premium50_pay": str(self.wages.premium50_pay),
            "premium100_pay": str(self.wages.premium100_pay),
            "earnings_total": str(self.earnings_total),
            "deductions_total": str(self.deductions_total),
            "net_total": str(self.net_total),
        }
