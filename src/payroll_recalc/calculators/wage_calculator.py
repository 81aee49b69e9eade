"""Conversion of classified hours into pay amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from payroll_recalc.calculators.rules import (
    MONTHLY_REFERENCE_HOURS,
    PREMIUM50_MULTIPLIER,
    PREMIUM100_MULTIPLIER,
)
from payroll_recalc.calculators.types import (
    ClassifiedMinutes,
    Compensation,
    Regime,
    WageBreakdown,
)

ZERO = Decimal("0")
MINUTES_PER_HOUR = Decimal(60)


class WageCalculator:
    """Converts classified minutes into hours and pay for one employee.

    Rate resolution:
    1. explicit hourly rate, when positive
    2. base salary / 220, when the salary is positive
    3. zero (unconfigured compensation yields zero pay, not an error)

    Monthly employees always report 220 normal hours and are paid their base
    salary for them; their overtime buckets are paid like everybody else's.

    Rounding:
    - pay is computed from the unrounded rate and raw minutes (hours = minutes / 60)
    - each pay component is rounded to cents once, before anything is summed
    - reported hours are rounded to 2 decimals, the reported rate to 4
    """

    PRECISION = Decimal("0.0001")  # 4 decimal places for the reported rate
    OUTPUT_PRECISION = Decimal("0.01")  # 2 decimal places for persistence

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (cents)."""
        return amount.quantize(WageCalculator.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @staticmethod
    def minutes_to_hours(minutes: int) -> Decimal:
        """Convert minutes to reported hours (2 decimals)."""
        return WageCalculator.round_to_cents(Decimal(minutes) / MINUTES_PER_HOUR)

    @staticmethod
    def pay_for(rate: Decimal, multiplier: Decimal, minutes: int) -> Decimal:
        """Pay for worked minutes at rate x multiplier, rounded to cents."""
        return WageCalculator.round_to_cents(
            rate * multiplier * Decimal(minutes) / MINUTES_PER_HOUR
        )

    @staticmethod
    def resolve_hourly_rate(compensation: Compensation) -> Decimal:
        """Resolve the hourly rate used for every pay component (unrounded)."""
        if compensation.hourly_rate is not None and compensation.hourly_rate > 0:
            return compensation.hourly_rate
        if compensation.base_salary is not None and compensation.base_salary > 0:
            return compensation.base_salary / MONTHLY_REFERENCE_HOURS
        return ZERO

    @staticmethod
    def calculate(
        compensation: Compensation,
        minutes: ClassifiedMinutes,
    ) -> WageBreakdown:
        """Compute hours and pay for one employee."""
        rate = WageCalculator.resolve_hourly_rate(compensation)

        if compensation.regime is Regime.MONTHLY:
            normal_hours = WageCalculator.round_to_cents(MONTHLY_REFERENCE_HOURS)
            if compensation.base_salary is not None and compensation.base_salary > 0:
                normal_pay = WageCalculator.round_to_cents(compensation.base_salary)
            else:
                normal_pay = WageCalculator.round_to_cents(rate * MONTHLY_REFERENCE_HOURS)
        else:
            normal_hours = WageCalculator.minutes_to_hours(minutes.normal)
            normal_pay = WageCalculator.pay_for(rate, Decimal("1"), minutes.normal)

        return WageBreakdown(
            regime=compensation.regime,
            hourly_rate=rate.quantize(WageCalculator.PRECISION, rounding=ROUND_HALF_UP),
            normal_hours=normal_hours,
            premium50_hours=WageCalculator.minutes_to_hours(minutes.premium50),
            premium100_hours=WageCalculator.minutes_to_hours(minutes.premium100),
            normal_pay=normal_pay,
            premium50_pay=WageCalculator.pay_for(rate, PREMIUM50_MULTIPLIER, minutes.premium50),
            premium100_pay=WageCalculator.pay_for(
                rate, PREMIUM100_MULTIPLIER, minutes.premium100
            ),
        )
