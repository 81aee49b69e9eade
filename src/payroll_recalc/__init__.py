"""Payroll recalculation engine: worked hours, overtime and payroll line totals."""

__version__ = "0.1.0"
