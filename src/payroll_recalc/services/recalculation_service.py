"""Payroll recalculation service - orchestrates the calculators for a batch."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from payroll_recalc.calculators.classifier import classify_period
from payroll_recalc.calculators.line_items import combine, sum_line_items
from payroll_recalc.calculators.pairing import aggregate_daily, pair_events
from payroll_recalc.calculators.types import (
    ClassifiedMinutes,
    Compensation,
    LineFigures,
    LineItemInput,
    LineItemTotals,
    LineItemType,
    Regime,
)
from payroll_recalc.calculators.wage_calculator import WageCalculator
from payroll_recalc.models import (
    Employee,
    PayrollEmployeeLine,
    PayrollLineItem,
    PayrollPeriod,
    TimeEntry,
    TimeEntryOrigin,
)
from payroll_recalc.services.errors import (
    PayrollAccessDeniedError,
    PayrollNotFoundError,
    RecalculationFailedError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_IN_PAYROLL = "not_found_in_payroll"


@dataclass(frozen=True)
class RequestingUser:
    """Caller identity as resolved by the session layer."""

    user_id: UUID | None
    company_id: UUID | None
    cross_company: bool = False

    def can_access(self, company_id: UUID) -> bool:
        return self.cross_company or self.company_id == company_id


@dataclass
class LineOutcome:
    """Result for one requested payroll line: figures or an error, never both."""

    line_id: UUID
    figures: LineFigures | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RecalculationResult:
    """Result of recalculating a batch of payroll lines."""

    payroll_id: UUID
    period_start: date
    period_end: date
    results: list[LineOutcome] = field(default_factory=list)
    count: int = 0

    @property
    def failed(self) -> list[LineOutcome]:
        return [r for r in self.results if not r.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "results": [
                {"id": str(r.line_id), "ok": True, "figures": r.figures.to_dict()}
                if r.ok and r.figures is not None
                else {"id": str(r.line_id), "ok": False, "error": r.error}
                for r in self.results
            ],
            "period": {
                "from": self.period_start.isoformat(),
                "to": self.period_end.isoformat(),
            },
        }


class RecalculationService:
    """Recalculates hours, pay and totals of payroll lines.

    Pipeline (once per call, batched over every target employee):
    1) Check the caller's scope over the payroll
    2) Resolve the period's date range and the target lines
    3) Pair clock events, aggregate per day, classify overtime
    4) Convert classified hours to pay per compensation regime
    5) Sum manual earnings/deductions per line
    6) Write every line in one transaction (all or nothing)

    Every read happens before the first write. Concurrent recalculations of
    the same line are last-commit-wins; nothing here locks the period. The
    reads are separate SELECTs at the database default isolation (READ
    COMMITTED on PostgreSQL), so a concurrent commit between two of them can
    be seen by the later one only.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def recalculate(
        self,
        payroll_id: UUID,
        user: RequestingUser,
        target_ids: Sequence[UUID] | None = None,
    ) -> RecalculationResult:
        """Recalculate the requested lines (all lines when none are given).

        Raises:
            PayrollNotFoundError: the payroll does not exist
            PayrollAccessDeniedError: the caller has no scope over it
            RecalculationFailedError: persisting failed and was rolled back
        """
        payroll = await self._load_payroll(payroll_id)
        if payroll is None:
            raise PayrollNotFoundError(payroll_id)
        if not user.can_access(payroll.company_id):
            raise PayrollAccessDeniedError(payroll_id, user.company_id)

        period_start, period_end = payroll.date_range()
        requested = list(dict.fromkeys(target_ids)) if target_ids else None

        lines = await self._load_lines(payroll_id, requested)
        outcomes: dict[UUID, LineOutcome] = {}

        if requested is None:
            order = [line.line_id for line in lines]
        else:
            order = requested
            found = {line.line_id for line in lines}
            for line_id in requested:
                if line_id not in found:
                    logger.warning(
                        "Skipping line %s: not part of payroll %s", line_id, payroll_id
                    )
                    outcomes[line_id] = LineOutcome(line_id=line_id, error=NOT_FOUND_IN_PAYROLL)

        logger.info(
            "Recalculating payroll %s: %d line(s), period %s..%s",
            payroll_id,
            len(lines),
            period_start,
            period_end,
        )

        minutes_by_employee = await self._classify_worked_time(
            company_id=payroll.company_id,
            employee_ids={line.employee_id for line in lines},
            period_start=period_start,
            period_end=period_end,
        )
        item_totals = sum_line_items(
            await self._load_line_items([line.line_id for line in lines])
        )

        figures_by_line: dict[UUID, LineFigures] = {}
        for line in lines:
            wages = WageCalculator.calculate(
                self._compensation_of(line.employee),
                minutes_by_employee.get(line.employee_id, ClassifiedMinutes()),
            )
            figures_by_line[line.line_id] = combine(
                wages, item_totals.get(line.line_id, LineItemTotals())
            )

        await self._persist(payroll_id, figures_by_line)

        for line_id, figures in figures_by_line.items():
            outcomes[line_id] = LineOutcome(line_id=line_id, figures=figures)

        return RecalculationResult(
            payroll_id=payroll_id,
            period_start=period_start,
            period_end=period_end,
            results=[outcomes[line_id] for line_id in order],
            count=len(figures_by_line),
        )

    # === Persistence ===

    async def _persist(
        self, payroll_id: UUID, figures_by_line: dict[UUID, LineFigures]
    ) -> None:
        """Write all lines and commit, or roll everything back."""
        recalculated_at = datetime.now(timezone.utc)
        try:
            for line_id, figures in figures_by_line.items():
                await self._write_line(line_id, figures, recalculated_at)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.exception(
                "Recalculation of payroll %s failed, transaction rolled back", payroll_id
            )
            raise RecalculationFailedError(payroll_id, str(e)) from e

        logger.info(
            "Recalculated payroll %s: %d line(s) updated", payroll_id, len(figures_by_line)
        )

    async def _write_line(
        self, line_id: UUID, figures: LineFigures, recalculated_at: datetime
    ) -> None:
        """Overwrite the computed columns of one payroll line."""
        wages = figures.wages
        await self.session.execute(
            update(PayrollEmployeeLine)
            .where(PayrollEmployeeLine.line_id == line_id)
            .values(
                normal_hours=wages.normal_hours,
                premium50_hours=wages.premium50_hours,
                premium100_hours=wages.premium100_hours,
                normal_pay=wages.normal_pay,
                premium50_pay=wages.premium50_pay,
                premium100_pay=wages.premium100_pay,
                earnings_total=figures.earnings_total,
                deductions_total=figures.deductions_total,
                net_total=figures.net_total,
                inconsistency_count=0,
                recalculated_at=recalculated_at,
            )
        )

    # === Calculation helpers ===

    async def _classify_worked_time(
        self,
        company_id: UUID,
        employee_ids: set[UUID],
        period_start: date,
        period_end: date,
    ) -> dict[UUID, ClassifiedMinutes]:
        """Classified minutes per employee for the whole period."""
        if not employee_ids:
            return {}

        entries = await self._get_time_entries(
            company_id, employee_ids, period_start, period_end
        )
        events = [event for entry in entries for event in entry.events()]
        return classify_period(aggregate_daily(pair_events(events)))

    @staticmethod
    def _compensation_of(employee: Employee) -> Compensation:
        return Compensation(
            regime=Regime(employee.regime),
            base_salary=employee.base_salary,
            hourly_rate=employee.hourly_rate,
        )

    # === Data Loading Methods ===

    async def _load_payroll(self, payroll_id: UUID) -> PayrollPeriod | None:
        result = await self.session.execute(
            select(PayrollPeriod).where(PayrollPeriod.payroll_id == payroll_id)
        )
        return result.scalar_one_or_none()

    async def _load_lines(
        self, payroll_id: UUID, line_ids: list[UUID] | None
    ) -> list[PayrollEmployeeLine]:
        """Load target lines of the payroll with their employees.

        Ids belonging to another payroll simply do not come back.
        """
        query = (
            select(PayrollEmployeeLine)
            .where(PayrollEmployeeLine.payroll_id == payroll_id)
            .options(selectinload(PayrollEmployeeLine.employee))
            .order_by(PayrollEmployeeLine.created_at, PayrollEmployeeLine.line_id)
        )
        if line_ids is not None:
            query = query.where(PayrollEmployeeLine.line_id.in_(line_ids))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def _get_time_entries(
        self,
        company_id: UUID,
        employee_ids: set[UUID],
        period_start: date,
        period_end: date,
    ) -> list[TimeEntry]:
        """Get non-invalidated time entries of the employees in the period."""
        result = await self.session.execute(
            select(TimeEntry).where(
                TimeEntry.company_id == company_id,
                TimeEntry.employee_id.in_(employee_ids),
                TimeEntry.work_date >= period_start,
                TimeEntry.work_date <= period_end,
                TimeEntry.origin != TimeEntryOrigin.INVALIDATED.value,
            )
        )
        return list(result.scalars().all())

    async def _load_line_items(self, line_ids: list[UUID]) -> list[LineItemInput]:
        if not line_ids:
            return []

        result = await self.session.execute(
            select(PayrollLineItem).where(PayrollLineItem.line_id.in_(line_ids))
        )
        return [
            LineItemInput(
                line_id=item.line_id,
                item_type=LineItemType(item.item_type),
                amount=item.amount,
                quantity=item.quantity,
                unit_amount=item.unit_amount,
            )
            for item in result.scalars().all()
        ]
