"""Company model (maintained by the company screens)."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_recalc.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_recalc.models.employee import Employee
    from payroll_recalc.models.payroll import PayrollPeriod


class Company(Base, TimestampMixin):
    """Employer owning employees, time entries and payroll periods."""

    __tablename__ = "company"

    company_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="company_status_check"),
    )

    # Relationships
    employees: Mapped[list[Employee]] = relationship(back_populates="company")
    payroll_periods: Mapped[list[PayrollPeriod]] = relationship(back_populates="company")
