"""Storage infrastructure implementations."""

from retail_pos.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteCheckoutUnitOfWork,
    SQLiteExpenseStore,
    SQLiteInvoiceStore,
    SQLiteUserStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteCatalogStore",
    "SQLiteInvoiceStore",
    "SQLiteExpenseStore",
    "SQLiteUserStore",
    "SQLiteCheckoutUnitOfWork",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
