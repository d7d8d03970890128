"""
Read-side aggregation for dashboards and reports.

Everything here is a pure function of invoices, expenses and per-day
totals already loaded from storage. Nothing is written.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from retail_pos.core.entities.expense import Expense
from retail_pos.core.entities.invoice import Invoice, PaymentMethod
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


def iter_days(start: date, end: date) -> Iterable[date]:
    """Yield each date from start to end inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def build_dashboard_stats(
    day: date,
    sales: DailyTotal | None,
    expenses_total: float,
) -> DashboardStats:
    """Combine one day's sales total and expense total."""
    today_sales = sales.sales if sales else 0.0
    return DashboardStats(
        day=day,
        today_sales=today_sales,
        today_orders=sales.orders if sales else 0,
        today_expenses=expenses_total,
        today_profit=today_sales - expenses_total,
    )


def build_sales_chart(totals: list[DailyTotal], end: date, days: int) -> SalesChart:
    """Sales per day for the `days` days ending at `end`, zero-filled."""
    by_day = {t.day: t.sales for t in totals}
    start = end - timedelta(days=days - 1)
    chart = SalesChart()
    for day in iter_days(start, end):
        chart.dates.append(day)
        chart.labels.append(day.strftime("%a"))
        chart.data.append(by_day.get(day, 0.0))
    return chart


def summarize_products(invoices: Iterable[Invoice]) -> list[ProductSales]:
    """Units and revenue per product, highest revenue first."""
    products: dict[int, ProductSales] = {}
    for invoice in invoices:
        for item in invoice.items:
            entry = products.get(item.product_id)
            if entry is None:
                entry = ProductSales(product_id=item.product_id, name=item.product_name)
                products[item.product_id] = entry
            entry.quantity += item.quantity
            entry.revenue += item.total
    return sorted(products.values(), key=lambda p: (-p.revenue, p.name))


def build_daily_breakdown(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
) -> list[DailyBreakdown]:
    """Per-day orders, sales, expenses and profit for days with any activity."""
    days: dict[date, DailyBreakdown] = {}

    for invoice in invoices:
        day = invoice.created_at.date()
        row = days.setdefault(day, DailyBreakdown(day=day))
        row.sales += invoice.total
        row.orders += 1

    for expense in expenses:
        row = days.setdefault(expense.date, DailyBreakdown(day=expense.date))
        row.expenses += expense.amount

    for row in days.values():
        row.profit = row.sales - row.expenses

    return [days[d] for d in sorted(days)]


def build_sales_report(
    invoices: list[Invoice],
    expenses: list[Expense],
    start: date,
    end: date,
) -> SalesReport:
    """Summary, per-product and per-day figures for a date range."""
    total_sales = sum(inv.total for inv in invoices)
    total_expenses = sum(exp.amount for exp in expenses)

    summary = ReportSummary(
        total_sales=total_sales,
        total_expenses=total_expenses,
        net_profit=total_sales - total_expenses,
        total_orders=len(invoices),
        cash_sales=sum(
            inv.total for inv in invoices if inv.payment_method == PaymentMethod.CASH
        ),
        online_sales=sum(
            inv.total
            for inv in invoices
            if inv.payment_method == PaymentMethod.ONLINE_BANK
        ),
    )

    return SalesReport(
        start_date=start,
        end_date=end,
        summary=summary,
        product_summary=summarize_products(invoices),
        daily_breakdown=build_daily_breakdown(invoices, expenses),
    )


def merge_activity(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    limit: int,
) -> list[ActivityEntry]:
    """Latest invoices and expenses interleaved by time, newest first."""
    entries = [
        ActivityEntry(
            type="invoice",
            description=inv.invoice_number,
            amount=inv.total,
            user=inv.staff_name,
            time=inv.created_at,
        )
        for inv in invoices
    ]
    entries.extend(
        ActivityEntry(
            type="expense",
            description=exp.title,
            amount=exp.amount,
            user="Admin",
            time=exp.created_at,
        )
        for exp in expenses
    )
    entries.sort(key=lambda e: e.time, reverse=True)
    return entries[:limit]
