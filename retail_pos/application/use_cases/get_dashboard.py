"""Dashboard reads, cached per data version."""

from collections import OrderedDict
from collections.abc import Awaitable, Callable
from datetime import UTC, date, datetime, timedelta
from typing import Any

from retail_pos.application.dto.responses import (
    ActivityEntryResponse,
    ActivityResponse,
    BestSellersResponse,
    DashboardStatsResponse,
    ProductSalesResponse,
    SalesChartResponse,
)
from retail_pos.config import get_logger, get_settings
from retail_pos.core.entities.product import Product
from retail_pos.core.entities.report import (
    ActivityEntry,
    DashboardStats,
    ProductSales,
    SalesChart,
)
from retail_pos.core.interfaces.catalog_store import ICatalogStore
from retail_pos.core.interfaces.change_feed import IChangeFeed
from retail_pos.core.interfaces.expense_store import IExpenseStore
from retail_pos.core.interfaces.invoice_store import IInvoiceStore
from retail_pos.core.services.change_feed import get_change_feed
from retail_pos.core.services.reporting import (
    build_dashboard_stats,
    build_sales_chart,
    merge_activity,
)

logger = get_logger(__name__)


class GetDashboardUseCase:
    """
    Read-side dashboard figures.

    Aggregates are cached under (kind, arguments, data version). Any write
    bumps the change feed version, so cached figures are never served
    after a commit they do not reflect.
    """

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        expense_store: IExpenseStore | None = None,
        catalog_store: ICatalogStore | None = None,
        change_feed: IChangeFeed | None = None,
        cache_size: int | None = None,
    ):
        self._invoice_store = invoice_store
        self._expense_store = expense_store
        self._catalog_store = catalog_store
        self._change_feed = change_feed or get_change_feed()

        settings = get_settings()
        self._report = settings.report
        self._cache_size = cache_size or settings.cache.dashboard_cache_size
        self._cache: OrderedDict[tuple, Any] = OrderedDict()

        # Stale entries can never be hit again; drop them eagerly
        self._unsubscribe = self._change_feed.subscribe(self._on_change)

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from retail_pos.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_expense_store(self) -> IExpenseStore:
        if self._expense_store is None:
            from retail_pos.infrastructure.storage.sqlite import get_expense_store

            self._expense_store = await get_expense_store()
        return self._expense_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from retail_pos.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    @property
    def version(self) -> int:
        """Current data version."""
        return self._change_feed.version

    @property
    def low_stock_threshold(self) -> int:
        return self._report.low_stock_threshold

    @property
    def cached_entries(self) -> int:
        return len(self._cache)

    def _on_change(self, topic: str, version: int) -> None:
        self._cache.clear()

    def close(self) -> None:
        """Stop listening to the change feed."""
        self._unsubscribe()

    async def _cached(self, key: tuple, loader: Callable[[], Awaitable[Any]]) -> Any:
        full_key = (*key, self.version)
        if full_key in self._cache:
            self._cache.move_to_end(full_key)
            return self._cache[full_key]

        value = await loader()
        self._cache[full_key] = value
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return value

    async def stats(self, day: date | None = None) -> DashboardStats:
        """Sales, orders, expenses and profit for a day (default today, UTC)."""
        day = day or datetime.now(UTC).date()

        async def load() -> DashboardStats:
            invoices = await self._get_invoice_store()
            expenses = await self._get_expense_store()
            totals = await invoices.daily_totals(day, day)
            _, expense_total = await expenses.summarize(day, day)
            logger.debug("dashboard_stats_computed", day=day.isoformat())
            return build_dashboard_stats(day, totals[0] if totals else None, expense_total)

        return await self._cached(("stats", day), load)

    async def sales_chart(
        self, end: date | None = None, days: int | None = None
    ) -> SalesChart:
        """Daily sales for the last `days` days, zero-filled."""
        end = end or datetime.now(UTC).date()
        days = days or self._report.chart_days

        async def load() -> SalesChart:
            invoices = await self._get_invoice_store()
            totals = await invoices.daily_totals(end - timedelta(days=days - 1), end)
            return build_sales_chart(totals, end, days)

        return await self._cached(("sales_chart", end, days), load)

    async def best_sellers(self, limit: int | None = None) -> list[ProductSales]:
        """All-time best sellers by units sold."""
        limit = limit or self._report.best_sellers_limit

        async def load() -> list[ProductSales]:
            invoices = await self._get_invoice_store()
            return await invoices.best_sellers(limit=limit)

        return await self._cached(("best_sellers", limit), load)

    async def low_stock(self, threshold: int | None = None) -> list[Product]:
        """Products at or below the threshold, lowest stock first."""
        threshold = self.low_stock_threshold if threshold is None else threshold
        catalog = await self._get_catalog_store()
        return await catalog.list_low_stock(threshold)

    async def recent_activity(self, limit: int | None = None) -> list[ActivityEntry]:
        """Latest invoices and expenses, newest first."""
        limit = limit or self._report.recent_activity_limit

        async def load() -> list[ActivityEntry]:
            invoices = await self._get_invoice_store()
            expenses = await self._get_expense_store()
            latest_invoices = await invoices.list_invoices(limit=limit)
            latest_expenses = await expenses.list_expenses(limit=limit)
            return merge_activity(latest_invoices, latest_expenses, limit)

        return await self._cached(("recent_activity", limit), load)

    # Response mapping

    @staticmethod
    def stats_response(stats: DashboardStats) -> DashboardStatsResponse:
        return DashboardStatsResponse(**stats.model_dump())

    @staticmethod
    def chart_response(chart: SalesChart) -> SalesChartResponse:
        return SalesChartResponse(**chart.model_dump())

    @staticmethod
    def best_sellers_response(products: list[ProductSales]) -> BestSellersResponse:
        return BestSellersResponse(
            products=[ProductSalesResponse(**p.model_dump()) for p in products]
        )

    @staticmethod
    def activity_response(entries: list[ActivityEntry]) -> ActivityResponse:
        return ActivityResponse(
            activities=[ActivityEntryResponse(**e.model_dump()) for e in entries]
        )
