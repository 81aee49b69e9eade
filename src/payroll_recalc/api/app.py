"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll_recalc import __version__
from payroll_recalc.api.routes import health_router, payrolls_router
from payroll_recalc.config import get_settings
from payroll_recalc.database import dispose_db, init_db
from payroll_recalc.logging_config import configure_logging
from payroll_recalc.services.errors import (
    PayrollAccessDeniedError,
    PayrollNotFoundError,
    RecalculationFailedError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging(get_settings().log_level)
    init_db()
    yield
    await dispose_db()


def _error(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": code})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Payroll Recalculation API",
        description="Worked hours, overtime and payroll line totals",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(PayrollNotFoundError)
    async def payroll_not_found_handler(
        request: Request, exc: PayrollNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Payroll not found", "PAYROLL_NOT_FOUND")

    @app.exception_handler(PayrollAccessDeniedError)
    async def access_denied_handler(
        request: Request, exc: PayrollAccessDeniedError
    ) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, "No access to this payroll", "ACCESS_DENIED")

    @app.exception_handler(RecalculationFailedError)
    async def recalculation_failed_handler(
        request: Request, exc: RecalculationFailedError
    ) -> JSONResponse:
        return _error(
            status.HTTP_409_CONFLICT,
            "Recalculation failed, nothing was changed",
            "RECALCULATION_FAILED",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            "INTERNAL_ERROR",
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payrolls_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
