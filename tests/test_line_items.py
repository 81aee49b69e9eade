"""Tests for manual line item aggregation and net computation."""

from decimal import Decimal
from uuid import uuid4

from payroll_recalc.calculators.line_items import combine, sum_line_items
from payroll_recalc.calculators.types import (
    ClassifiedMinutes,
    Compensation,
    LineItemInput,
    LineItemTotals,
    LineItemType,
    Regime,
)
from payroll_recalc.calculators.wage_calculator import WageCalculator


class TestSumLineItems:
    """Test earnings/deductions sums."""

    def test_sums_per_line(self):
        line_a, line_b = uuid4(), uuid4()
        items = [
            LineItemInput(line_a, LineItemType.EARNING, amount=Decimal("50.00")),
            LineItemInput(line_a, LineItemType.EARNING, amount=Decimal("25.50")),
            LineItemInput(line_a, LineItemType.DEDUCTION, amount=Decimal("10.00")),
            LineItemInput(line_b, LineItemType.DEDUCTION, amount=Decimal("7.25")),
        ]
        totals = sum_line_items(items)

        assert totals[line_a] == LineItemTotals(Decimal("75.50"), Decimal("10.00"))
        assert totals[line_b] == LineItemTotals(Decimal("0.00"), Decimal("7.25"))

    def test_other_items_are_ignored(self):
        line = uuid4()
        items = [
            LineItemInput(line, LineItemType.OTHER, amount=Decimal("999.00")),
            LineItemInput(line, LineItemType.EARNING, amount=Decimal("1.00")),
        ]
        assert sum_line_items(items)[line] == LineItemTotals(Decimal("1.00"), Decimal("0.00"))

    def test_quantity_times_unit_when_amount_missing(self):
        line = uuid4()
        item = LineItemInput(
            line,
            LineItemType.DEDUCTION,
            quantity=Decimal("3"),
            unit_amount=Decimal("12.335"),
        )
        assert sum_line_items([item])[line].deductions == Decimal("37.01")

    def test_explicit_amount_wins_over_quantity(self):
        item = LineItemInput(
            uuid4(),
            LineItemType.EARNING,
            amount=Decimal("5.00"),
            quantity=Decimal("10"),
            unit_amount=Decimal("10"),
        )
        assert item.effective_amount == Decimal("5.00")

    def test_item_without_values_counts_as_zero(self):
        item = LineItemInput(uuid4(), LineItemType.EARNING)
        assert item.effective_amount == Decimal("0")

    def test_negative_amounts_are_taken_as_entered(self):
        line = uuid4()
        items = [LineItemInput(line, LineItemType.EARNING, amount=Decimal("-20.00"))]
        assert sum_line_items(items)[line].earnings == Decimal("-20.00")


class TestCombine:
    """Test net computation."""

    def test_net_identity(self):
        wages = WageCalculator.calculate(
            Compensation(Regime.HOURLY, hourly_rate=Decimal("20.00")),
            ClassifiedMinutes(normal=480, premium50=60, premium100=240),
        )
        figures = combine(wages, LineItemTotals(Decimal("50.00"), Decimal("0.00")))

        assert figures.net_total == Decimal("400.00")
        assert figures.net_total == (
            wages.normal_pay
            + wages.premium50_pay
            + wages.premium100_pay
            + figures.earnings_total
            - figures.deductions_total
        )

    def test_net_can_be_negative(self):
        wages = WageCalculator.calculate(Compensation(Regime.HOURLY), ClassifiedMinutes())
        figures = combine(wages, LineItemTotals(Decimal("0"), Decimal("80.00")))

        assert figures.net_total == Decimal("-80.00")

    def test_to_dict_serializes_amounts_as_strings(self):
        wages = WageCalculator.calculate(
            Compensation(Regime.MONTHLY, base_salary=Decimal("2200.00")),
            ClassifiedMinutes(),
        )
        data = combine(wages, LineItemTotals()).to_dict()

        assert data["regime"] == "MONTHLY"
        assert data["normal_hours"] == "220.00"
        assert data["net_total"] == "2200.00"
