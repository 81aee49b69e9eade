"""SQLAlchemy ORM models for the payroll recalculation engine."""

from payroll_recalc.calculators.types import LineItemType, Regime
from payroll_recalc.models.base import Base, TimestampMixin
from payroll_recalc.models.company import Company
from payroll_recalc.models.employee import Employee
from payroll_recalc.models.payroll import (
    PayrollEmployeeLine,
    PayrollLineItem,
    PayrollPeriod,
    PayrollStatus,
)
from payroll_recalc.models.time_entry import TimeEntry, TimeEntryOrigin

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Company
    "Company",
    "Employee",
    "Regime",
    # Time tracking
    "TimeEntry",
    "TimeEntryOrigin",
    # Payroll
    "PayrollPeriod",
    "PayrollStatus",
    "PayrollEmployeeLine",
    "PayrollLineItem",
    "LineItemType",
]
