"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

The checkout request is deliberately loose: cart rules (non-empty,
positive quantities, known payment method) are enforced by the use case
so that every caller gets the same VALIDATION_ERROR.
"""

import datetime as dt

from pydantic import BaseModel, Field, StrictInt

from retail_pos.core.entities.product import ProductStatus


# --- Checkout ---


class InvoiceLineRequest(BaseModel):
    """One requested cart line."""

    product_id: StrictInt = Field(..., description="Product ID", examples=[1])
    quantity: StrictInt = Field(..., description="Units to sell", examples=[2])


class CreateInvoiceRequest(BaseModel):
    """Request to check out a cart."""

    items: list[InvoiceLineRequest] = Field(
        default_factory=list,
        description="Cart lines to sell",
    )
    payment_method: str | None = Field(
        default=None,
        description="Payment method",
        examples=["cash", "online_bank"],
    )


# --- Products ---


class CreateProductRequest(BaseModel):
    """Request to add a product to the catalog."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    category: str = Field(..., min_length=1, max_length=100, description="Category")
    sale_price: float = Field(..., ge=0, description="Unit sale price")
    stock_quantity: int = Field(default=0, ge=0, description="Units in stock")
    status: ProductStatus = Field(default=ProductStatus.ACTIVE)


class UpdateProductRequest(BaseModel):
    """Partial product update. Omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    sale_price: float | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)
    status: ProductStatus | None = None


# --- Expenses ---


class CreateExpenseRequest(BaseModel):
    """Request to record an expense."""

    title: str = Field(..., min_length=1, max_length=200, description="Expense title")
    amount: float = Field(..., gt=0, description="Amount spent")
    date: dt.date = Field(..., description="Date the expense applies to")
    notes: str = Field(default="", max_length=1000)


class UpdateExpenseRequest(BaseModel):
    """Partial expense update. Omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    amount: float | None = Field(default=None, gt=0)
    date: dt.date | None = None
    notes: str | None = Field(default=None, max_length=1000)
