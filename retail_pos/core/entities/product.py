"""Catalog product entity."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProductStatus(str, Enum):
    """Whether a product can be sold."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Product(BaseModel):
    """A sellable product with its current price and stock level."""

    id: int | None = None
    name: str
    category: str
    sale_price: float = Field(ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE
