"""Clock-in/clock-out records."""

from __future__ import annotations

from datetime import date, time
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_recalc.calculators.types import ClockEvent, EventKind
from payroll_recalc.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_recalc.models.employee import Employee


class TimeEntryOrigin(str, Enum):
    """Where a time entry came from."""

    MANUAL = "MANUAL"
    IMPORTED = "IMPORTED"
    ADJUSTMENT = "ADJUSTMENT"
    INVALIDATED = "INVALIDATED"


class TimeEntry(Base, TimestampMixin):
    """Raw clock record for one employee, date and shift slot.

    A row may carry an entry time, an exit time, or both. Rows are never
    modified by the recalculation engine.
    """

    __tablename__ = "time_entry"

    time_entry_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
    )
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    shift_slot: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    entry_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    exit_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    origin: Mapped[str] = mapped_column(
        String, nullable=False, default=TimeEntryOrigin.MANUAL.value
    )
    note: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("shift_slot >= 1", name="time_entry_shift_slot_check"),
        CheckConstraint(
            "origin IN ('MANUAL', 'IMPORTED', 'ADJUSTMENT', 'INVALIDATED')",
            name="time_entry_origin_check",
        ),
        CheckConstraint(
            "entry_time IS NOT NULL OR exit_time IS NOT NULL",
            name="time_entry_has_time_check",
        ),
        Index("ix_time_entry_company_date", "company_id", "work_date"),
    )

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="time_entries")

    def events(self) -> list[ClockEvent]:
        """Expand the row into its clock events (one per populated time)."""
        events: list[ClockEvent] = []
        if self.entry_time is not None:
            events.append(
                ClockEvent(
                    employee_id=self.employee_id,
                    work_date=self.work_date,
                    shift_slot=self.shift_slot,
                    kind=EventKind.ENTRY,
                    at=self.entry_time,
                )
            )
        if self.exit_time is not None:
            events.append(
                ClockEvent(
                    employee_id=self.employee_id,
                    work_date=self.work_date,
                    shift_slot=self.shift_slot,
                    kind=EventKind.EXIT,
                    at=self.exit_time,
                )
            )
        return events
