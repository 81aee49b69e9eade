"""Employee model with compensation settings."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_recalc.calculators.types import Regime
from payroll_recalc.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_recalc.models.company import Company
    from payroll_recalc.models.time_entry import TimeEntry


class Employee(Base, TimestampMixin):
    """Employee record."""

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    regime: Mapped[str] = mapped_column(String, nullable=False, default=Regime.MONTHLY.value)
    base_salary: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")

    __table_args__ = (
        CheckConstraint(
            "regime IN ('HOURLY', 'DAILY', 'MONTHLY')",
            name="employee_regime_check",
        ),
        CheckConstraint(
            "status IN ('active', 'terminated', 'on_leave')",
            name="employee_status_check",
        ),
    )

    # Relationships
    company: Mapped[Company] = relationship(back_populates="employees")
    time_entries: Mapped[list[TimeEntry]] = relationship(back_populates="employee")
