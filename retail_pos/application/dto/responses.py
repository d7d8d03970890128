"""Response DTOs for API endpoints.

Pydantic v2 models for API responses.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Products ---


class ProductResponse(BaseModel):
    """Catalog product."""

    id: int
    name: str
    category: str
    sale_price: float
    stock_quantity: int
    status: str
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


class LowStockResponse(BaseModel):
    """Products at or below the low-stock threshold."""

    threshold: int
    products: list[ProductResponse]


# --- Invoices ---


class InvoiceItemResponse(BaseModel):
    """Invoice line with snapshotted name and price."""

    id: int | None = None
    product_id: int
    product_name: str
    quantity: int
    unit_price: float
    total: float


class InvoiceResponse(BaseModel):
    """Persisted invoice."""

    id: int
    invoice_number: str
    items: list[InvoiceItemResponse]
    item_count: int
    subtotal: float
    total: float
    payment_method: str
    staff_id: int
    staff_name: str
    created_at: datetime


class InvoiceListResponse(PaginatedResponse):
    """Paginated list of invoices."""

    invoices: list[InvoiceResponse]


class TodayInvoicesResponse(BaseModel):
    """Orders and sales for the caller's view of today."""

    day: date
    orders: int
    sales: float


# --- Expenses ---


class ExpenseResponse(BaseModel):
    id: int
    title: str
    amount: float
    date: date
    notes: str
    created_at: datetime


class ExpenseSummaryResponse(BaseModel):
    count: int
    total: float


class ExpenseListResponse(PaginatedResponse):
    """Paginated expenses with a summary over the whole filtered range."""

    expenses: list[ExpenseResponse]
    summary: ExpenseSummaryResponse


class TodayExpensesResponse(BaseModel):
    day: date
    count: int
    total: float


# --- Dashboard ---


class DashboardStatsResponse(BaseModel):
    """Today's headline figures."""

    day: date
    today_sales: float
    today_orders: int
    today_expenses: float
    today_profit: float


class SalesChartResponse(BaseModel):
    labels: list[str]
    dates: list[date]
    data: list[float]


class ProductSalesResponse(BaseModel):
    product_id: int
    name: str
    quantity: int
    revenue: float


class BestSellersResponse(BaseModel):
    products: list[ProductSalesResponse]


class ActivityEntryResponse(BaseModel):
    type: str
    description: str
    amount: float
    user: str
    time: datetime


class ActivityResponse(BaseModel):
    activities: list[ActivityEntryResponse]


class ChangeVersionResponse(BaseModel):
    """Current data version; clients poll it to know when to refresh."""

    version: int


# --- Reports ---


class ReportSummaryResponse(BaseModel):
    total_sales: float
    total_expenses: float
    net_profit: float
    total_orders: int
    cash_sales: float
    online_sales: float


class DailyBreakdownResponse(BaseModel):
    day: date
    orders: int
    sales: float
    expenses: float
    profit: float


class SalesReportResponse(BaseModel):
    """Sales report over an inclusive date range."""

    start_date: date
    end_date: date
    summary: ReportSummaryResponse
    product_summary: list[ProductSalesResponse]
    daily_breakdown: list[DailyBreakdownResponse]
