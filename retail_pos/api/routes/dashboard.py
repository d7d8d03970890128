"""Admin dashboard endpoints."""

from fastapi import APIRouter, Depends, Query

from retail_pos.api.dependencies import (
    StaffIdentity,
    get_current_staff,
    get_dashboard_use_case,
    require_admin,
)
from retail_pos.api.routes.products import product_to_response
from retail_pos.application.dto.responses import (
    ActivityResponse,
    BestSellersResponse,
    ChangeVersionResponse,
    DashboardStatsResponse,
    ErrorResponse,
    LowStockResponse,
    SalesChartResponse,
)
from retail_pos.application.use_cases.get_dashboard import GetDashboardUseCase

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> DashboardStatsResponse:
    """Today's sales, orders, expenses and profit."""
    return use_case.stats_response(await use_case.stats())


@router.get("/sales-chart", response_model=SalesChartResponse)
async def sales_chart(
    days: int | None = Query(default=None, ge=1, le=366),
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> SalesChartResponse:
    """Daily sales for the last N days."""
    return use_case.chart_response(await use_case.sales_chart(days=days))


@router.get("/best-sellers", response_model=BestSellersResponse)
async def best_sellers(
    limit: int | None = Query(default=None, ge=1, le=100),
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> BestSellersResponse:
    """Products by units sold."""
    return use_case.best_sellers_response(await use_case.best_sellers(limit=limit))


@router.get("/low-stock", response_model=LowStockResponse)
async def low_stock(
    threshold: int | None = Query(default=None, ge=0),
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> LowStockResponse:
    """Products at or below the low-stock threshold."""
    products = await use_case.low_stock(threshold)
    return LowStockResponse(
        threshold=use_case.low_stock_threshold if threshold is None else threshold,
        products=[product_to_response(p) for p in products],
    )


@router.get("/recent-activity", response_model=ActivityResponse)
async def recent_activity(
    limit: int | None = Query(default=None, ge=1, le=100),
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> ActivityResponse:
    """Latest invoices and expenses."""
    return use_case.activity_response(await use_case.recent_activity(limit=limit))


@router.get("/version", response_model=ChangeVersionResponse)
async def data_version(
    _staff: StaffIdentity = Depends(get_current_staff),
    use_case: GetDashboardUseCase = Depends(get_dashboard_use_case),
) -> ChangeVersionResponse:
    """Current data version. Clients refresh when it changes."""
    return ChangeVersionResponse(version=use_case.version)
