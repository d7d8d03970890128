"""Create Invoice Use Case: atomic checkout of a cart."""

from dataclasses import dataclass
from datetime import UTC, datetime

from retail_pos.application.dto.requests import CreateInvoiceRequest
from retail_pos.application.dto.responses import InvoiceItemResponse, InvoiceResponse
from retail_pos.config import get_logger, get_settings
from retail_pos.core.entities.invoice import Invoice, InvoiceItem, PaymentMethod
from retail_pos.core.exceptions import (
    DuplicateInvoiceNumberError,
    InsufficientStockError,
    PersistenceError,
    POSError,
    ProductInactiveError,
    ProductNotFoundError,
    ValidationError,
)
from retail_pos.core.interfaces.change_feed import IChangeFeed
from retail_pos.core.interfaces.unit_of_work import (
    ICheckoutTransaction,
    ICheckoutUnitOfWork,
)
from retail_pos.core.services.change_feed import TOPIC_INVOICES, get_change_feed
from retail_pos.core.services.invoice_numbers import InvoiceNumberGenerator

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of a successful checkout."""

    invoice: Invoice
    number_attempts: int = 1


class CreateInvoiceUseCase:
    """
    Check out a cart as one all-or-nothing operation.

    Steps, all inside a single unit of work:
    1. Look up every product and reject missing, inactive or short-stocked ones
    2. Snapshot name and price into invoice lines and compute totals
    3. Insert the invoice under a fresh number, regenerating on collision
    4. Decrement stock for every product sold

    Readers are notified through the change feed only after commit.
    """

    def __init__(
        self,
        uow: ICheckoutUnitOfWork | None = None,
        number_generator: InvoiceNumberGenerator | None = None,
        change_feed: IChangeFeed | None = None,
        max_number_attempts: int | None = None,
    ):
        self._uow = uow
        self._change_feed = change_feed

        settings = get_settings()
        self._numbers = number_generator or InvoiceNumberGenerator(
            prefix=settings.checkout.invoice_prefix,
            suffix_length=settings.checkout.suffix_length,
        )
        self._max_number_attempts = (
            max_number_attempts or settings.checkout.max_number_attempts
        )

    async def _get_uow(self) -> ICheckoutUnitOfWork:
        if self._uow is None:
            from retail_pos.infrastructure.storage.sqlite import get_checkout_uow

            self._uow = await get_checkout_uow()
        return self._uow

    def _get_change_feed(self) -> IChangeFeed:
        if self._change_feed is None:
            self._change_feed = get_change_feed()
        return self._change_feed

    async def execute(
        self,
        request: CreateInvoiceRequest,
        staff_id: int,
        staff_name: str,
    ) -> CreateInvoiceResult:
        """Execute checkout for the given staff member."""
        payment_method = self._validate(request)

        logger.info(
            "checkout_started",
            lines=len(request.items),
            payment_method=payment_method.value,
            staff_id=staff_id,
        )

        uow = await self._get_uow()
        try:
            async with uow.begin() as tx:
                items, requested = await self._build_items(tx, request)
                invoice, attempts = await self._insert_invoice(
                    tx, items, payment_method, staff_id, staff_name
                )
                for product_id, quantity in requested.items():
                    await tx.decrement_stock(product_id, quantity)
        except POSError as e:
            logger.warning(
                "checkout_rejected",
                error_code=e.code,
                message=e.message,
                staff_id=staff_id,
            )
            raise

        version = self._get_change_feed().notify(TOPIC_INVOICES)

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total=invoice.total,
            items=len(invoice.items),
            number_attempts=attempts,
            data_version=version,
        )

        return CreateInvoiceResult(invoice=invoice, number_attempts=attempts)

    def _validate(self, request: CreateInvoiceRequest) -> PaymentMethod:
        """Reject malformed carts before touching storage."""
        if not request.items:
            raise ValidationError("items", "Cart is empty", request.items)

        for index, line in enumerate(request.items):
            if line.quantity <= 0:
                raise ValidationError(
                    f"items[{index}].quantity",
                    "Quantity must be a positive integer",
                    line.quantity,
                )

        if request.payment_method is None:
            raise ValidationError("payment_method", "Payment method is required")

        try:
            return PaymentMethod(request.payment_method)
        except ValueError:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                "payment_method",
                f"Payment method must be one of: {allowed}",
                request.payment_method,
            ) from None

    async def _build_items(
        self,
        tx: ICheckoutTransaction,
        request: CreateInvoiceRequest,
    ) -> tuple[list[InvoiceItem], dict[int, int]]:
        """Snapshot catalog data into invoice lines.

        Returns the lines and the cumulative quantity per product, so a
        product listed twice is checked against its total demand.
        """
        items: list[InvoiceItem] = []
        requested: dict[int, int] = {}

        for line in request.items:
            product = await tx.get_product(line.product_id)
            if product is None:
                raise ProductNotFoundError(line.product_id)
            if not product.is_active:
                raise ProductInactiveError(line.product_id, product.name)

            requested[line.product_id] = requested.get(line.product_id, 0) + line.quantity
            if requested[line.product_id] > product.stock_quantity:
                raise InsufficientStockError(
                    product_id=line.product_id,
                    name=product.name,
                    requested=requested[line.product_id],
                    available=product.stock_quantity,
                )

            items.append(
                InvoiceItem(
                    product_id=line.product_id,
                    product_name=product.name,
                    quantity=line.quantity,
                    unit_price=product.sale_price,
                )
            )

        return items, requested

    async def _insert_invoice(
        self,
        tx: ICheckoutTransaction,
        items: list[InvoiceItem],
        payment_method: PaymentMethod,
        staff_id: int,
        staff_name: str,
    ) -> tuple[Invoice, int]:
        """Insert the invoice, regenerating the number on collision."""
        now = datetime.now(UTC)

        for attempt in range(1, self._max_number_attempts + 1):
            invoice = Invoice(
                invoice_number=self._numbers.generate(now),
                items=items,
                payment_method=payment_method,
                staff_id=staff_id,
                staff_name=staff_name,
                created_at=now,
            )
            try:
                return await tx.insert_invoice(invoice), attempt
            except DuplicateInvoiceNumberError:
                logger.warning(
                    "invoice_number_collision",
                    invoice_number=invoice.invoice_number,
                    attempt=attempt,
                )

        logger.error(
            "invoice_number_exhausted",
            attempts=self._max_number_attempts,
        )
        raise PersistenceError("create_invoice")

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice)


def invoice_to_response(invoice: Invoice) -> InvoiceResponse:
    """Map an invoice entity to its API shape."""
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number,
        items=[
            InvoiceItemResponse(
                id=item.id,  # type: ignore[arg-type]
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=item.total,
            )
            for item in invoice.items
        ],
        item_count=invoice.item_count,
        subtotal=invoice.subtotal,
        total=invoice.total,
        payment_method=invoice.payment_method.value,
        staff_id=invoice.staff_id,
        staff_name=invoice.staff_name,
        created_at=invoice.created_at,
    )
