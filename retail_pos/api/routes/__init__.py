"""API routes."""

from retail_pos.api.routes.dashboard import router as dashboard_router
from retail_pos.api.routes.expenses import router as expenses_router
from retail_pos.api.routes.health import router as health_router
from retail_pos.api.routes.invoices import router as invoices_router
from retail_pos.api.routes.products import router as products_router
from retail_pos.api.routes.reports import router as reports_router

__all__ = [
    "health_router",
    "products_router",
    "invoices_router",
    "expenses_router",
    "dashboard_router",
    "reports_router",
]
