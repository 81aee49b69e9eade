"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from payroll_recalc.services.recalculation_service import RecalculationResult


# ============================================================================
# Recalculation schemas
# ============================================================================


class RecalculateRequest(BaseModel):
    """Schema for a recalculation request; no ids means every line."""

    ids: list[UUID] | None = None


class LineFiguresResponse(BaseModel):
    """Computed figures of one payroll line."""

    regime: str
    hourly_rate: Decimal
    normal_hours: Decimal
    premium50_hours: Decimal
    premium100_hours: Decimal
    normal_pay: Decimal
    premium50_pay: Decimal
    premium100_pay: Decimal
    earnings_total: Decimal
    deductions_total: Decimal
    net_total: Decimal


class LineResultResponse(BaseModel):
    """Outcome for one requested line."""

    id: UUID
    ok: bool
    figures: LineFiguresResponse | None = None
    error: str | None = None


class PeriodResponse(BaseModel):
    """Date range covered by the payroll."""

    model_config = ConfigDict(populate_by_name=True)

    from_: date = Field(alias="from")
    to: date


class RecalculateResponse(BaseModel):
    """Schema for a recalculation response."""

    count: int
    results: list[LineResultResponse]
    period: PeriodResponse

    @classmethod
    def from_result(cls, result: RecalculationResult) -> "RecalculateResponse":
        items = []
        for outcome in result.results:
            if outcome.ok and outcome.figures is not None:
                wages = outcome.figures.wages
                items.append(
                    LineResultResponse(
                        id=outcome.line_id,
                        ok=True,
                        figures=LineFiguresResponse(
                            regime=wages.regime.value,
                            hourly_rate=wages.hourly_rate,
                            normal_hours=wages.normal_hours,
                            premium50_hours=wages.premium50_hours,
                            premium100_hours=wages.premium100_hours,
                            normal_pay=wages.normal_pay,
                            premium50_pay=wages.premium50_pay,
                            premium100_pay=wages.premium100_pay,
                            earnings_total=outcome.figures.earnings_total,
                            deductions_total=outcome.figures.deductions_total,
                            net_total=outcome.figures.net_total,
                        ),
                    )
                )
            else:
                items.append(
                    LineResultResponse(id=outcome.line_id, ok=False, error=outcome.error)
                )

        return cls(
            count=result.count,
            results=items,
            period=PeriodResponse(from_=result.period_start, to=result.period_end),
        )


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
