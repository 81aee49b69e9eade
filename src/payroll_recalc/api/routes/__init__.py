"""API routes."""

from payroll_recalc.api.routes.health import router as health_router
from payroll_recalc.api.routes.payrolls import router as payrolls_router

__all__ = ["payrolls_router", "health_router"]
