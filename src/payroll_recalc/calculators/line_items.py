"""Aggregation of manually entered payroll line items."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from uuid import UUID

from payroll_recalc.calculators.types import (
    LineFigures,
    LineItemInput,
    LineItemTotals,
    LineItemType,
    WageBreakdown,
)
from payroll_recalc.calculators.wage_calculator import WageCalculator


def sum_line_items(items: Iterable[LineItemInput]) -> dict[UUID, LineItemTotals]:
    """Sum EARNING and DEDUCTION amounts per payroll line.

    OTHER items are informational and contribute to neither sum. Item
    semantics are not validated here; whoever enters them owns them.
    """
    earnings: dict[UUID, Decimal] = {}
    deductions: dict[UUID, Decimal] = {}

    for item in items:
        if item.item_type is LineItemType.EARNING:
            earnings[item.line_id] = earnings.get(item.line_id, Decimal("0")) + item.effective_amount
        elif item.item_type is LineItemType.DEDUCTION:
            deductions[item.line_id] = (
                deductions.get(item.line_id, Decimal("0")) + item.effective_amount
            )

    return {
        line_id: LineItemTotals(
            earnings=WageCalculator.round_to_cents(earnings.get(line_id, Decimal("0"))),
            deductions=WageCalculator.round_to_cents(deductions.get(line_id, Decimal("0"))),
        )
        for line_id in earnings.keys() | deductions.keys()
    }


def combine(wages: WageBreakdown, totals: LineItemTotals) -> LineFigures:
    """Merge computed wages with manual items into the figures of one line.

    NET = normal + premium50 + premium100 + earnings - deductions
    """
    net = wages.gross_pay + totals.earnings - totals.deductions
    return LineFigures(
        wages=wages,
        earnings_total=totals.earnings,
        deductions_total=totals.deductions,
        net_total=WageCalculator.round_to_cents(net),
    )
