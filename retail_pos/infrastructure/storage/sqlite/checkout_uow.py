"""SQLite checkout unit of work.

Every checkout runs inside one ``BEGIN IMMEDIATE`` transaction taken under
the pool's write lock, so stock checks and decrements of concurrent
checkouts never interleave.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from retail_pos.config import get_logger
from retail_pos.core.entities.invoice import Invoice
from retail_pos.core.entities.product import Product
from retail_pos.core.exceptions import PersistenceError
from retail_pos.core.interfaces.unit_of_work import (
    ICheckoutTransaction,
    ICheckoutUnitOfWork,
)
from retail_pos.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from retail_pos.infrastructure.storage.sqlite.invoice_store import insert_invoice
from retail_pos.infrastructure.storage.sqlite.product_store import (
    decrement_stock,
    fetch_product,
)

logger = get_logger(__name__)


class SQLiteCheckoutTransaction(ICheckoutTransaction):
    """Checkout operations bound to one open write transaction."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_product(self, product_id: int) -> Product | None:
        return await fetch_product(self._conn, product_id)

    async def insert_invoice(self, invoice: Invoice) -> Invoice:
        return await insert_invoice(self._conn, invoice)

    async def decrement_stock(self, product_id: int, quantity: int) -> None:
        await decrement_stock(self._conn, product_id, quantity)


class SQLiteCheckoutUnitOfWork(ICheckoutUnitOfWork):
    """Opens checkout transactions on the shared connection pool."""

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[ICheckoutTransaction]:
        """
        Yield a transaction that commits on normal exit.

        Domain errors pass through after rollback. Database errors are
        reported as PersistenceError.
        """
        pool = self._pool or await get_pool()
        try:
            async with pool.transaction() as conn:
                yield SQLiteCheckoutTransaction(conn)
        except aiosqlite.Error as e:
            logger.error("checkout_transaction_failed", error=str(e))
            raise PersistenceError("checkout") from e
