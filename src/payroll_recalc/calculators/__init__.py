"""Pure calculation steps of the payroll recalculation."""

from payroll_recalc.calculators.classifier import classify_day, classify_period
from payroll_recalc.calculators.line_items import combine, sum_line_items
from payroll_recalc.calculators.pairing import aggregate_daily, pair_events, pair_shift
from payroll_recalc.calculators.wage_calculator import WageCalculator

__all__ = [
    "aggregate_daily",
    "classify_day",
    "classify_period",
    "combine",
    "pair_events",
    "pair_shift",
    "sum_line_items",
    "WageCalculator",
]
