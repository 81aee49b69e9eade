"""Pytest fixtures for payroll recalculation tests."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from payroll_recalc.database import make_session_factory
from payroll_recalc.models import (
    Base,
    Company,
    Employee,
    LineItemType,
    PayrollEmployeeLine,
    PayrollLineItem,
    PayrollPeriod,
    Regime,
    TimeEntry,
    TimeEntryOrigin,
)

# March 2024: the 3rd and 10th are Sundays, the 5th is a Tuesday
COMPETENCE = date(2024, 3, 1)


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create a file-backed SQLite engine with a fresh schema per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'payroll_test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_company(session: AsyncSession) -> Company:
    """Create the company owning the payroll under test."""
    company = Company(company_id=uuid4(), name="Acme Ltda")
    session.add(company)
    await session.commit()
    return company


@pytest_asyncio.fixture
async def other_company(session: AsyncSession) -> Company:
    """Create an unrelated company."""
    company = Company(company_id=uuid4(), name="Other Corp")
    session.add(company)
    await session.commit()
    return company


@pytest_asyncio.fixture
async def test_employees(
    session: AsyncSession, test_company: Company
) -> dict[str, Employee]:
    """Create one employee per compensation setup.

    - hourly: HOURLY at 20.00/h
    - monthly: MONTHLY with a 2200.00 salary and no explicit rate (10.00/h)
    - unconfigured: DAILY with neither rate nor salary
    """
    employees = {
        "hourly": Employee(
            employee_id=uuid4(),
            company_id=test_company.company_id,
            name="Ana Souza",
            regime=Regime.HOURLY.value,
            hourly_rate=Decimal("20.00"),
        ),
        "monthly": Employee(
            employee_id=uuid4(),
            company_id=test_company.company_id,
            name="Bruno Lima",
            regime=Regime.MONTHLY.value,
            base_salary=Decimal("2200.00"),
        ),
        "unconfigured": Employee(
            employee_id=uuid4(),
            company_id=test_company.company_id,
            name="Carla Dias",
            regime=Regime.DAILY.value,
        ),
    }
    session.add_all(employees.values())
    await session.commit()
    return employees


@pytest_asyncio.fixture
async def test_payroll(session: AsyncSession, test_company: Company) -> PayrollPeriod:
    """Create the March 2024 payroll."""
    payroll = PayrollPeriod(
        payroll_id=uuid4(),
        company_id=test_company.company_id,
        competence=COMPETENCE,
    )
    session.add(payroll)
    await session.commit()
    return payroll


@pytest_asyncio.fixture
async def test_lines(
    session: AsyncSession,
    test_payroll: PayrollPeriod,
    test_employees: dict[str, Employee],
) -> dict[str, PayrollEmployeeLine]:
    """Include every employee in the payroll with zeroed figures."""
    lines = {
        key: PayrollEmployeeLine(
            line_id=uuid4(),
            payroll_id=test_payroll.payroll_id,
            employee_id=employee.employee_id,
        )
        for key, employee in test_employees.items()
    }
    session.add_all(lines.values())
    await session.commit()
    return lines


def _entry(
    employee: Employee,
    work_date: date,
    entry_time: time | None,
    exit_time: time | None,
    shift_slot: int = 1,
    origin: TimeEntryOrigin = TimeEntryOrigin.MANUAL,
) -> TimeEntry:
    return TimeEntry(
        time_entry_id=uuid4(),
        employee_id=employee.employee_id,
        company_id=employee.company_id,
        work_date=work_date,
        shift_slot=shift_slot,
        entry_time=entry_time,
        exit_time=exit_time,
        origin=origin.value,
    )


@pytest_asyncio.fixture
async def test_time_entries(
    session: AsyncSession,
    test_employees: dict[str, Employee],
) -> list[TimeEntry]:
    """Create clock records for March 2024.

    hourly:
    - Tue 5th 08:00-17:00 on one row (540 min: 480 normal + 60 at 50%)
    - Sun 3rd 09:00 entry and 13:00 exit on separate rows (240 min at 100%)
    - Thu 7th 08:00-18:00 invalidated (ignored)
    - Fri 8th 08:00 entry without exit (open shift, ignored)
    - Thu 29 Feb 08:00-18:00 (outside the period, ignored)
    monthly:
    - Wed 6th 08:00-12:00 slot 1 and 13:00-19:00 slot 2 (600 min: 480 + 120 at 50%)
    """
    hourly = test_employees["hourly"]
    monthly = test_employees["monthly"]

    entries = [
        _entry(hourly, date(2024, 3, 5), time(8, 0), time(17, 0)),
        _entry(hourly, date(2024, 3, 3), time(9, 0), None),
        _entry(hourly, date(2024, 3, 3), None, time(13, 0)),
        _entry(
            hourly,
            date(2024, 3, 7),
            time(8, 0),
            time(18, 0),
            origin=TimeEntryOrigin.INVALIDATED,
        ),
        _entry(hourly, date(2024, 3, 8), time(8, 0), None),
        _entry(hourly, date(2024, 2, 29), time(8, 0), time(18, 0)),
        _entry(monthly, date(2024, 3, 6), time(8, 0), time(12, 0), shift_slot=1),
        _entry(
            monthly,
            date(2024, 3, 6),
            time(13, 0),
            time(19, 0),
            shift_slot=2,
            origin=TimeEntryOrigin.IMPORTED,
        ),
    ]
    session.add_all(entries)
    await session.commit()
    return entries


@pytest_asyncio.fixture
async def test_line_items(
    session: AsyncSession,
    test_lines: dict[str, PayrollEmployeeLine],
) -> list[PayrollLineItem]:
    """Create manual items.

    - hourly: one 50.00 earning, one informational OTHER item
    - monthly: a 100.00 earning and a 2 x 25.00 deduction
    """
    items = [
        PayrollLineItem(
            item_id=uuid4(),
            line_id=test_lines["hourly"].line_id,
            item_type=LineItemType.EARNING.value,
            description="Meal allowance",
            amount=Decimal("50.00"),
        ),
        PayrollLineItem(
            item_id=uuid4(),
            line_id=test_lines["hourly"].line_id,
            item_type=LineItemType.OTHER.value,
            description="Uniform handed over",
            amount=Decimal("999.00"),
        ),
        PayrollLineItem(
            item_id=uuid4(),
            line_id=test_lines["monthly"].line_id,
            item_type=LineItemType.EARNING.value,
            description="Bonus",
            amount=Decimal("100.00"),
        ),
        PayrollLineItem(
            item_id=uuid4(),
            line_id=test_lines["monthly"].line_id,
            item_type=LineItemType.DEDUCTION.value,
            description="Transport",
            quantity=Decimal("2"),
            unit_amount=Decimal("25.00"),
        ),
    ]
    session.add_all(items)
    await session.commit()
    return items


@pytest_asyncio.fixture
async def populated_payroll(
    test_payroll: PayrollPeriod,
    test_lines: dict[str, PayrollEmployeeLine],
    test_time_entries: list[TimeEntry],
    test_line_items: list[PayrollLineItem],
) -> PayrollPeriod:
    """Payroll with lines, clock records and manual items in place."""
    return test_payroll
