"""HTTP API for the payroll recalculation engine."""
