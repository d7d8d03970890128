"""
Core business logic services.

Layer-pure services that depend only on:
- retail_pos/core/entities/*
- retail_pos/core/interfaces/*
- retail_pos/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from retail_pos.core.services.change_feed import (
    TOPIC_EXPENSES,
    TOPIC_INVOICES,
    TOPIC_PRODUCTS,
    DataChangeFeed,
    get_change_feed,
    reset_change_feed,
)
from retail_pos.core.services.invoice_numbers import InvoiceNumberGenerator
from retail_pos.core.services.reporting import (
    build_daily_breakdown,
    build_dashboard_stats,
    build_sales_chart,
    build_sales_report,
    merge_activity,
    summarize_products,
)

__all__ = [
    # Change feed
    "DataChangeFeed",
    "get_change_feed",
    "reset_change_feed",
    "TOPIC_INVOICES",
    "TOPIC_PRODUCTS",
    "TOPIC_EXPENSES",
    # Invoice numbers
    "InvoiceNumberGenerator",
    # Reporting
    "build_dashboard_stats",
    "build_sales_chart",
    "build_sales_report",
    "build_daily_breakdown",
    "summarize_products",
    "merge_activity",
]
