"""Invoice (checkout) endpoints."""

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, Query, status

from retail_pos.api.dependencies import (
    StaffIdentity,
    get_create_invoice_use_case,
    get_current_staff,
    get_inv_store,
)
from retail_pos.application.dto.requests import CreateInvoiceRequest
from retail_pos.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
    TodayInvoicesResponse,
)
from retail_pos.application.use_cases.create_invoice import (
    CreateInvoiceUseCase,
    invoice_to_response,
)
from retail_pos.core.exceptions import InvoiceNotFoundError, PermissionDeniedError
from retail_pos.infrastructure.storage.sqlite import SQLiteInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Empty cart or bad quantity"},
        404: {"model": ErrorResponse, "description": "Unknown product"},
        409: {"model": ErrorResponse, "description": "Inactive product or short stock"},
        500: {"model": ErrorResponse, "description": "Nothing was saved"},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    staff: StaffIdentity = Depends(get_current_staff),
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Check out a cart: persist the invoice and decrement stock atomically."""
    result = await use_case.execute(request, staff_id=staff.id, staff_name=staff.name)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    staff: StaffIdentity = Depends(get_current_staff),
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> InvoiceListResponse:
    """List invoices, newest first. Staff only see their own."""
    staff_id = None if staff.is_admin else staff.id
    invoices = await store.list_invoices(
        start_date=start_date,
        end_date=end_date,
        staff_id=staff_id,
        limit=limit,
        offset=offset,
    )
    total = await store.count_invoices(
        start_date=start_date, end_date=end_date, staff_id=staff_id
    )
    return InvoiceListResponse(
        invoices=[invoice_to_response(inv) for inv in invoices],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(invoices) < total,
    )


@router.get("/stats/today", response_model=TodayInvoicesResponse)
async def today_stats(
    staff: StaffIdentity = Depends(get_current_staff),
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> TodayInvoicesResponse:
    """Orders and sales today (UTC). Staff only see their own."""
    today = datetime.now(UTC).date()
    totals = await store.daily_totals(
        today, today, staff_id=None if staff.is_admin else staff.id
    )
    row = totals[0] if totals else None
    return TodayInvoicesResponse(
        day=today,
        orders=row.orders if row else 0,
        sales=row.sales if row else 0.0,
    )


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    staff: StaffIdentity = Depends(get_current_staff),
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> InvoiceResponse:
    """Get an invoice with its lines."""
    invoice = await store.get_invoice(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    if not staff.is_admin and invoice.staff_id != staff.id:
        raise PermissionDeniedError(staff.role.value, "admin or invoice owner")
    return invoice_to_response(invoice)
