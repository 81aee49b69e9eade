"""Errors raised by the recalculation service."""

from __future__ import annotations

from uuid import UUID


class RecalculationError(Exception):
    """Base class for recalculation failures that abort the whole call."""


class PayrollNotFoundError(RecalculationError):
    """Raised when the payroll period does not exist."""

    def __init__(self, payroll_id: UUID):
        self.payroll_id = payroll_id
        super().__init__(f"Payroll {payroll_id} not found")


class PayrollAccessDeniedError(RecalculationError):
    """Raised when the requesting user has no scope over the payroll's company."""

    def __init__(self, payroll_id: UUID, company_id: UUID | None):
        self.payroll_id = payroll_id
        self.company_id = company_id
        super().__init__(
            f"Company {company_id} has no access to payroll {payroll_id}"
        )


class RecalculationFailedError(RecalculationError):
    """Raised when persisting a batch failed and its transaction was rolled back."""

    def __init__(self, payroll_id: UUID, reason: str):
        self.payroll_id = payroll_id
        self.reason = reason
        super().__init__(
            f"Recalculation of payroll {payroll_id} failed, nothing was changed: {reason}"
        )
