"""Core domain entities."""

from retail_pos.core.entities.expense import Expense
from retail_pos.core.entities.invoice import (
    CartLine,
    Invoice,
    InvoiceItem,
    PaymentMethod,
)
from retail_pos.core.entities.product import Product, ProductStatus
from retail_pos.core.entities.report import (
    ActivityEntry,
    DailyBreakdown,
    DailyTotal,
    DashboardStats,
    ProductSales,
    ReportSummary,
    SalesChart,
    SalesReport,
)
from retail_pos.core.entities.user import User, UserRole, UserStatus

__all__ = [
    # Catalog
    "Product",
    "ProductStatus",
    # Invoices
    "CartLine",
    "Invoice",
    "InvoiceItem",
    "PaymentMethod",
    # Expenses
    "Expense",
    # Users
    "User",
    "UserRole",
    "UserStatus",
    # Reports
    "ActivityEntry",
    "DailyBreakdown",
    "DailyTotal",
    "DashboardStats",
    "ProductSales",
    "ReportSummary",
    "SalesChart",
    "SalesReport",
]
