"""Data transfer objects for the API boundary."""

from retail_pos.application.dto.requests import (
    CreateExpenseRequest,
    CreateInvoiceRequest,
    CreateProductRequest,
    InvoiceLineRequest,
    UpdateExpenseRequest,
    UpdateProductRequest,
)
from retail_pos.application.dto.responses import (
    ActivityEntryResponse,
    ActivityResponse,
    BestSellersResponse,
    ChangeVersionResponse,
    DashboardStatsResponse,
    ErrorResponse,
    ExpenseListResponse,
    ExpenseResponse,
    ExpenseSummaryResponse,
    HealthResponse,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoiceResponse,
    LowStockResponse,
    ProductListResponse,
    ProductResponse,
    ProductSalesResponse,
    SalesChartResponse,
    SalesReportResponse,
    TodayExpensesResponse,
    TodayInvoicesResponse,
)

__all__ = [
    # Requests
    "CreateInvoiceRequest",
    "InvoiceLineRequest",
    "CreateProductRequest",
    "UpdateProductRequest",
    "CreateExpenseRequest",
    "UpdateExpenseRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProductResponse",
    "ProductListResponse",
    "InvoiceItemResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "TodayInvoicesResponse",
    "ExpenseResponse",
    "ExpenseListResponse",
    "ExpenseSummaryResponse",
    "TodayExpensesResponse",
    "DashboardStatsResponse",
    "SalesChartResponse",
    "ProductSalesResponse",
    "BestSellersResponse",
    "LowStockResponse",
    "ActivityEntryResponse",
    "ActivityResponse",
    "SalesReportResponse",
    "ChangeVersionResponse",
]
