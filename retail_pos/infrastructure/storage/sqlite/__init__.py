"""SQLite storage implementations."""

from retail_pos.core.services.change_feed import get_change_feed
from retail_pos.infrastructure.storage.sqlite.checkout_uow import (
    SQLiteCheckoutTransaction,
    SQLiteCheckoutUnitOfWork,
)
from retail_pos.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from retail_pos.infrastructure.storage.sqlite.expense_store import SQLiteExpenseStore
from retail_pos.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from retail_pos.infrastructure.storage.sqlite.product_store import SQLiteCatalogStore
from retail_pos.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None
_expense_store: SQLiteExpenseStore | None = None
_user_store: SQLiteUserStore | None = None
_checkout_uow: SQLiteCheckoutUnitOfWork | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore(change_feed=get_change_feed())
    return _catalog_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_expense_store() -> SQLiteExpenseStore:
    """Get singleton expense store instance."""
    global _expense_store
    if _expense_store is None:
        _expense_store = SQLiteExpenseStore(change_feed=get_change_feed())
    return _expense_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


async def get_checkout_uow() -> SQLiteCheckoutUnitOfWork:
    """Get singleton checkout unit of work."""
    global _checkout_uow
    if _checkout_uow is None:
        _checkout_uow = SQLiteCheckoutUnitOfWork()
    return _checkout_uow


def reset_stores() -> None:
    """Drop store singletons (tests and pool restarts)."""
    global _catalog_store, _invoice_store, _expense_store, _user_store, _checkout_uow
    _catalog_store = None
    _invoice_store = None
    _expense_store = None
    _user_store = None
    _checkout_uow = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteInvoiceStore",
    "SQLiteExpenseStore",
    "SQLiteUserStore",
    "SQLiteCheckoutUnitOfWork",
    "SQLiteCheckoutTransaction",
    # Factory functions
    "get_catalog_store",
    "get_invoice_store",
    "get_expense_store",
    "get_user_store",
    "get_checkout_uow",
    "reset_stores",
]
