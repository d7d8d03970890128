"""Abstract interface for catalog storage."""

from abc import ABC, abstractmethod
from typing import Any

from retail_pos.core.entities.product import Product, ProductStatus


class ICatalogStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def list_products(
        self,
        search: str | None = None,
        category: str | None = None,
        status: ProductStatus | None = None,
    ) -> list[Product]:
        """List products, newest first, optionally filtered."""
        pass

    @abstractmethod
    async def list_active(self) -> list[Product]:
        """List products that can be sold."""
        pass

    @abstractmethod
    async def list_low_stock(self, threshold: int = 20) -> list[Product]:
        """List products with stock at or below the threshold, lowest first."""
        pass

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a new product."""
        pass

    @abstractmethod
    async def update_product(self, product_id: int, changes: dict[str, Any]) -> Product:
        """Apply a partial update and return the stored product."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> None:
        """Delete a product that no invoice line references."""
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: int, quantity: int) -> Product:
        """Remove quantity from stock, refusing to go below zero."""
        pass
