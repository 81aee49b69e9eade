"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_recalc.database import init_db
from payroll_recalc.services.recalculation_service import RequestingUser

TRUE_VALUES = {"1", "true", "yes"}


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


def _parse_uuid_header(value: str | None, name: str) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {name} format",
        )


async def get_requesting_user(
    x_user_id: Annotated[str | None, Header()] = None,
    x_company_id: Annotated[str | None, Header()] = None,
    x_cross_company: Annotated[str | None, Header()] = None,
) -> RequestingUser:
    """Build the caller identity from the headers set by the session gateway."""
    cross_company = (x_cross_company or "").strip().lower() in TRUE_VALUES
    company_id = _parse_uuid_header(x_company_id, "X-Company-ID")
    if company_id is None and not cross_company:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Company-ID header is required",
        )

    return RequestingUser(
        user_id=_parse_uuid_header(x_user_id, "X-User-ID"),
        company_id=company_id,
        cross_company=cross_company,
    )


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentUser = Annotated[RequestingUser, Depends(get_requesting_user)]
