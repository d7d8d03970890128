"""Read-side aggregate value objects for dashboards and reports."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """Sales, orders, expenses and profit for a single day."""

    day: date
    today_sales: float = 0.0
    today_orders: int = 0
    today_expenses: float = 0.0
    today_profit: float = 0.0


class DailyTotal(BaseModel):
    """Invoice count and sales sum for one day."""

    day: date
    orders: int = 0
    sales: float = 0.0


class SalesChart(BaseModel):
    labels: list[str] = Field(default_factory=list)
    dates: list[date] = Field(default_factory=list)
    data: list[float] = Field(default_factory=list)


class ProductSales(BaseModel):
    """Units and revenue for one product over a period."""

    product_id: int
    name: str
    quantity: int = 0
    revenue: float = 0.0


class DailyBreakdown(BaseModel):
    day: date
    orders: int = 0
    sales: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0


class ReportSummary(BaseModel):
    total_sales: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    total_orders: int = 0
    cash_sales: float = 0.0
    online_sales: float = 0.0


class SalesReport(BaseModel):
    """Everything derived from invoices and expenses in a date range."""

    start_date: date
    end_date: date
    summary: ReportSummary
    product_summary: list[ProductSales] = Field(default_factory=list)
    daily_breakdown: list[DailyBreakdown] = Field(default_factory=list)


class ActivityEntry(BaseModel):
    """One row of the recent activity feed."""

    type: Literal["invoice", "expense"]
    description: str
    amount: float
    user: str
    time: datetime
