"""Core interfaces (ports) for dependency injection."""

from retail_pos.core.interfaces.catalog_store import ICatalogStore
from retail_pos.core.interfaces.change_feed import ChangeListener, IChangeFeed
from retail_pos.core.interfaces.expense_store import IExpenseStore
from retail_pos.core.interfaces.invoice_store import IInvoiceStore
from retail_pos.core.interfaces.unit_of_work import (
    ICheckoutTransaction,
    ICheckoutUnitOfWork,
)
from retail_pos.core.interfaces.user_store import IUserStore

__all__ = [
    # Storage interfaces
    "ICatalogStore",
    "IInvoiceStore",
    "IExpenseStore",
    "IUserStore",
    # Checkout boundary
    "ICheckoutTransaction",
    "ICheckoutUnitOfWork",
    # Change notification
    "IChangeFeed",
    "ChangeListener",
]
