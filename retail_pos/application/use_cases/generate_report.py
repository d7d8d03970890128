"""Generate Sales Report Use Case."""

from datetime import date

from retail_pos.application.dto.responses import (
    DailyBreakdownResponse,
    ProductSalesResponse,
    ReportSummaryResponse,
    SalesReportResponse,
)
from retail_pos.config import get_logger
from retail_pos.core.entities.expense import Expense
from retail_pos.core.entities.invoice import Invoice
from retail_pos.core.entities.report import SalesReport
from retail_pos.core.exceptions import ValidationError
from retail_pos.core.interfaces.expense_store import IExpenseStore
from retail_pos.core.interfaces.invoice_store import IInvoiceStore
from retail_pos.core.services.reporting import build_sales_report

logger = get_logger(__name__)

PAGE_SIZE = 500


class GenerateReportUseCase:
    """Aggregate invoices and expenses over an inclusive date range."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        expense_store: IExpenseStore | None = None,
    ):
        self._invoice_store = invoice_store
        self._expense_store = expense_store

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

    async def execute(self, start_date: date, end_date: date) -> SalesReport:
        """Build the report for [start_date, end_date]."""
        if start_date > end_date:
            raise ValidationError(
                "start_date",
                "start_date must not be after end_date",
                start_date.isoformat(),
            )

        invoices = await self._load_invoices(start_date, end_date)
        expenses = await self._load_expenses(start_date, end_date)

        report = build_sales_report(invoices, expenses, start_date, end_date)

        logger.info(
            "sales_report_generated",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            orders=report.summary.total_orders,
            total_sales=report.summary.total_sales,
        )
        return report

    async def _load_invoices(self, start_date: date, end_date: date) -> list[Invoice]:
        store = await self._get_invoice_store()
        invoices: list[Invoice] = []
        after_id = 0
        while True:
            page = await store.scan_invoices(
                start_date=start_date,
                end_date=end_date,
                after_id=after_id,
                limit=PAGE_SIZE,
            )
            invoices.extend(page)
            if len(page) < PAGE_SIZE:
                return invoices
            after_id = page[-1].id  # type: ignore[assignment]

    async def _load_expenses(self, start_date: date, end_date: date) -> list[Expense]:
        store = await self._get_expense_store()
        expenses: list[Expense] = []
        after_id = 0
        while True:
            page = await store.scan_expenses(
                start_date=start_date,
                end_date=end_date,
                after_id=after_id,
                limit=PAGE_SIZE,
            )
            expenses.extend(page)
            if len(page) < PAGE_SIZE:
                return expenses
            after_id = page[-1].id  # type: ignore[assignment]

    def to_response(self, report: SalesReport) -> SalesReportResponse:
        """Convert report to API response."""
        return SalesReportResponse(
            start_date=report.start_date,
            end_date=report.end_date,
            summary=ReportSummaryResponse(**report.summary.model_dump()),
            product_summary=[
                ProductSalesResponse(**p.model_dump()) for p in report.product_summary
            ],
            daily_breakdown=[
                DailyBreakdownResponse(**d.model_dump()) for d in report.daily_breakdown
            ],
        )
