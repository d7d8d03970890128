"""Unit tests for domain exceptions."""

import pytest

from retail_pos.core.exceptions import (
    AccessError,
    AuthenticationRequiredError,
    CheckoutError,
    DuplicateInvoiceNumberError,
    ExpenseNotFoundError,
    InsufficientStockError,
    InvoiceNotFoundError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    POSError,
    ProductInactiveError,
    ProductInUseError,
    ProductNotFoundError,
    StorageError,
    ValidationError,
)


class TestPOSError:
    """Tests for base POSError exception."""

    def test_basic_initialization(self):
        error = POSError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "POSError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = POSError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = POSError("Boom", code="BOOM", details={"a": 1})
        assert error.to_dict() == {"error": "BOOM", "message": "Boom", "details": {"a": 1}}


class TestValidationError:
    def test_code_and_field(self):
        error = ValidationError("items", "Cart is empty", [])
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "items"
        assert "Cart is empty" in error.message

    def test_value_truncated(self):
        error = ValidationError("notes", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_value_none(self):
        error = ValidationError("items", "missing")
        assert error.details["value"] is None


class TestCheckoutErrors:
    def test_product_not_found(self):
        error = ProductNotFoundError(42)
        assert isinstance(error, NotFoundError)
        assert error.code == "PRODUCT_NOT_FOUND"
        assert error.details == {"product_id": 42}

    def test_product_inactive(self):
        error = ProductInactiveError(3, "Baklava")
        assert isinstance(error, CheckoutError)
        assert error.code == "PRODUCT_INACTIVE"
        assert "Baklava" in error.message

    def test_insufficient_stock_message_names_product_and_available(self):
        error = InsufficientStockError(1, "Falafel Wrap", requested=10, available=5)
        assert isinstance(error, CheckoutError)
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.message == "Insufficient stock for Falafel Wrap. Available: 5"
        assert error.details["requested"] == 10
        assert error.details["available"] == 5


class TestStorageErrors:
    def test_persistence_failure(self):
        error = PersistenceError("checkout")
        assert isinstance(error, StorageError)
        assert error.code == "PERSISTENCE_FAILURE"
        assert error.details == {"operation": "checkout"}
        assert error.message == "Could not save checkout. Nothing was written."

    def test_duplicate_invoice_number(self):
        error = DuplicateInvoiceNumberError("INV-20260101-AAAAAA")
        assert isinstance(error, StorageError)
        assert error.details["invoice_number"] == "INV-20260101-AAAAAA"

    def test_product_in_use(self):
        assert ProductInUseError(7).code == "PRODUCT_IN_USE"


class TestAccessErrors:
    def test_authentication_required(self):
        error = AuthenticationRequiredError()
        assert isinstance(error, AccessError)
        assert error.code == "AUTHENTICATION_REQUIRED"

    def test_permission_denied(self):
        error = PermissionDeniedError("staff", "admin")
        assert error.code == "PERMISSION_DENIED"
        assert error.details == {"role": "staff", "required": "admin"}


@pytest.mark.parametrize(
    "error",
    [
        InvoiceNotFoundError(1),
        ExpenseNotFoundError(1),
        ProductNotFoundError(1),
    ],
)
def test_not_found_errors_share_base(error):
    assert isinstance(error, NotFoundError)
    assert isinstance(error, POSError)
