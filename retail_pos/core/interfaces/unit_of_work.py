"""Transactional boundary for checkout."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from retail_pos.core.entities.invoice import Invoice
from retail_pos.core.entities.product import Product


class ICheckoutTransaction(ABC):
    """Operations available inside one checkout transaction.

    Nothing done through this object is visible to other readers until the
    enclosing unit of work commits.
    """

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Read a product under the writer lock."""
        pass

    @abstractmethod
    async def insert_invoice(self, invoice: Invoice) -> Invoice:
        """Insert invoice header and items.

        Raises DuplicateInvoiceNumberError when the number is taken.
        """
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: int, quantity: int) -> None:
        """Guarded decrement. Raises InsufficientStockError."""
        pass


class ICheckoutUnitOfWork(ABC):
    """Factory for checkout transactions.

    Usage:
        async with uow.begin() as tx:
            ...
    Commits when the block exits normally, rolls back on any exception.
    """

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[ICheckoutTransaction]:
        pass
