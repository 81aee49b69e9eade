"""Payroll recalculation endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Path

from payroll_recalc.api.dependencies import CurrentUser, DbSession
from payroll_recalc.api.schemas import (
    ErrorResponse,
    RecalculateRequest,
    RecalculateResponse,
)
from payroll_recalc.services.recalculation_service import RecalculationService

router = APIRouter(prefix="/payrolls", tags=["payrolls"])


@router.post(
    "/{payroll_id}/recalculate",
    response_model=RecalculateResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def recalculate_payroll(
    db: DbSession,
    user: CurrentUser,
    payroll_id: Annotated[UUID, Path()],
    payload: Annotated[RecalculateRequest | None, Body()] = None,
) -> RecalculateResponse:
    """Recalculate hours, pay and totals of payroll lines.

    Without ids every line of the payroll is recalculated. Ids that do not
    belong to the payroll are reported individually and do not stop the batch.
    """
    service = RecalculationService(db)
    result = await service.recalculate(
        payroll_id,
        user,
        target_ids=payload.ids if payload is not None else None,
    )
    return RecalculateResponse.from_result(result)
