"""Payroll recalculation services."""

from payroll_recalc.services.errors import (
    PayrollAccessDeniedError,
    PayrollNotFoundError,
    RecalculationError,
    RecalculationFailedError,
)
from payroll_recalc.services.recalculation_service import (
    LineOutcome,
    RecalculationResult,
    RecalculationService,
    RequestingUser,
)

__all__ = [
    "LineOutcome",
    "PayrollAccessDeniedError",
    "PayrollNotFoundError",
    "RecalculationError",
    "RecalculationFailedError",
    "RecalculationResult",
    "RecalculationService",
    "RequestingUser",
]
