"""Payroll period, per-employee line and manual line item models."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_recalc.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_recalc.models.company import Company
    from payroll_recalc.models.employee import Employee


class PayrollStatus(str, Enum):
    """Payroll period status values."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


# ===== Payroll Periods =====


class PayrollPeriod(Base, TimestampMixin):
    """Monthly payroll of one company.

    ``competence`` is stored as the first day of the covered month.
    """

    __tablename__ = "payroll_period"

    payroll_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    competence: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=PayrollStatus.OPEN.value
    )

    __table_args__ = (
        UniqueConstraint("company_id", "competence", name="payroll_company_competence_unique"),
        CheckConstraint("status IN ('OPEN', 'CLOSED')", name="payroll_status_check"),
    )

    # Relationships
    company: Mapped[Company] = relationship(back_populates="payroll_periods")
    lines: Mapped[list[PayrollEmployeeLine]] = relationship(back_populates="payroll")

    def date_range(self) -> tuple[date, date]:
        """First and last calendar day of the competence month."""
        first = self.competence.replace(day=1)
        last_day = calendar.monthrange(first.year, first.month)[1]
        return first, first.replace(day=last_day)


# ===== Per-employee Lines =====


class PayrollEmployeeLine(Base, TimestampMixin):
    """Computed totals of one employee within one payroll period.

    Rows are created zeroed when an employee is included in a payroll; the
    computed columns are only ever written by the recalculation service.
    """

    __tablename__ = "payroll_employee_line"

    line_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payroll_id: Mapped[UUID] = mapped_column(
        ForeignKey("payroll_period.payroll_id", ondelete="CASCADE"),
        nullable=False,
    )
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="RESTRICT"),
        nullable=False,
    )

    # Hours
    normal_hours: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    premium50_hours: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )
    premium100_hours: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )

    # Amounts
    normal_pay: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    premium50_pay: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    premium100_pay: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    earnings_total: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    deductions_total: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    net_total: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )

    inconsistency_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    recalculated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("payroll_id", "employee_id", name="payroll_line_employee_unique"),
        CheckConstraint("inconsistency_count >= 0", name="payroll_line_inconsistency_check"),
    )

    # Relationships
    payroll: Mapped[PayrollPeriod] = relationship(back_populates="lines")
    employee: Mapped[Employee] = relationship()
    items: Mapped[list[PayrollLineItem]] = relationship(back_populates="line")


# ===== Manual Line Items =====


class PayrollLineItem(Base, TimestampMixin):
    """Manually entered earning or deduction attached to a payroll line."""

    __tablename__ = "payroll_line_item"

    item_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    line_id: Mapped[UUID] = mapped_column(
        ForeignKey("payroll_employee_line.line_id", ondelete="CASCADE"),
        nullable=False,
    )
    item_type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    quantity: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    unit_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 4), nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "item_type IN ('EARNING', 'DEDUCTION', 'OTHER')",
            name="payroll_line_item_type_check",
        ),
    )

    # Relationships
    line: Mapped[PayrollEmployeeLine] = relationship(back_populates="items")
