"""Abstract interface for the invoice ledger (read side)."""

from abc import ABC, abstractmethod
from datetime import date

from retail_pos.core.entities.invoice import Invoice
from retail_pos.core.entities.report import DailyTotal, ProductSales


class IInvoiceStore(ABC):
    """Interface for reading persisted invoices.

    Invoices are written only through the checkout unit of work.
    """

    @abstractmethod
    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with items."""
        pass

    @abstractmethod
    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        """Get invoice by its human-readable number."""
        pass

    @abstractmethod
    async def list_invoices(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        staff_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoices, newest first, with items."""
        pass

    @abstractmethod
    async def scan_invoices(
        self,
        start_date: date,
        end_date: date,
        after_id: int = 0,
        limit: int = 500,
    ) -> list[Invoice]:
        """Invoices in the range with id above after_id, ascending by id."""
        pass

    @abstractmethod
    async def count_invoices(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        staff_id: int | None = None,
    ) -> int:
        """Count invoices matching the filters."""
        pass

    @abstractmethod
    async def daily_totals(
        self,
        start_date: date,
        end_date: date,
        staff_id: int | None = None,
    ) -> list[DailyTotal]:
        """Invoice count and sales per day that has sales, ascending."""
        pass

    @abstractmethod
    async def best_sellers(
        self,
        limit: int = 5,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[ProductSales]:
        """Products by units sold, descending."""
        pass
