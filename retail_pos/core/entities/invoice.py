"""Invoice (checkout ledger) domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    CASH = "cash"
    ONLINE_BANK = "online_bank"


class CartLine(BaseModel):
    """A requested product and quantity, before validation against the catalog."""

    product_id: int
    quantity: int


class InvoiceItem(BaseModel):
    """A line on an invoice.

    Name and unit price are copied from the product at checkout time.
    """

    id: int | None = None
    invoice_id: int | None = None
    product_id: int
    product_name: str
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)
    total: float = 0.0  # quantity * unit_price

    @model_validator(mode="after")
    def compute_total(self) -> "InvoiceItem":
        """Compute line total from quantity and unit_price."""
        self.total = self.quantity * self.unit_price
        return self


class Invoice(BaseModel):
    """A completed sale. Immutable once persisted."""

    id: int | None = None
    invoice_number: str
    items: list[InvoiceItem] = Field(default_factory=list)
    subtotal: float = 0.0
    total: float = 0.0
    payment_method: PaymentMethod
    staff_id: int
    staff_name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def compute_totals(self) -> "Invoice":
        """Compute subtotal and total from items (no tax or discount)."""
        if self.items:
            self.subtotal = sum(i.total for i in self.items)
        self.total = self.subtotal
        return self

    @property
    def item_count(self) -> int:
        """Total units sold on this invoice."""
        return sum(i.quantity for i in self.items)
