"""Sales report endpoints (admin only)."""

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends

from retail_pos.api.dependencies import (
    StaffIdentity,
    get_generate_report_use_case,
    require_admin,
)
from retail_pos.application.dto.responses import ErrorResponse, SalesReportResponse
from retail_pos.application.use_cases.generate_report import GenerateReportUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get(
    "/sales",
    response_model=SalesReportResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def sales_report(
    start_date: date | None = None,
    end_date: date | None = None,
    _admin: StaffIdentity = Depends(require_admin),
    use_case: GenerateReportUseCase = Depends(get_generate_report_use_case),
) -> SalesReportResponse:
    """
    Sales report for an inclusive date range.

    Defaults to the current month up to today (UTC).
    """
    today = datetime.now(UTC).date()
    end_date = end_date or today
    start_date = start_date or end_date.replace(day=1)
    report = await use_case.execute(start_date, end_date)
    return use_case.to_response(report)
