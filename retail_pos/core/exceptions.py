"""
Domain exceptions for the POS application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class POSError(Exception):
    """Base exception for all POS errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(POSError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Lookup Exceptions
class NotFoundError(POSError):
    """Base exception for missing records."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found in the catalog."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found in the ledger."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class ExpenseNotFoundError(NotFoundError):
    """Expense not found."""

    def __init__(self, expense_id: int):
        super().__init__(
            f"Expense not found: {expense_id}",
            code="EXPENSE_NOT_FOUND",
            details={"expense_id": expense_id},
        )


# Checkout Exceptions
class CheckoutError(POSError):
    """Base exception for rejected checkouts."""

    pass


class ProductInactiveError(CheckoutError):
    """Product exists but is not available for sale."""

    def __init__(self, product_id: int, name: str):
        super().__init__(
            f"Product '{name}' is inactive",
            code="PRODUCT_INACTIVE",
            details={"product_id": product_id, "name": name},
        )


class InsufficientStockError(CheckoutError):
    """Requested quantity exceeds available stock."""

    def __init__(self, product_id: int, name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {name}. Available: {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "name": name,
                "requested": requested,
                "available": available,
            },
        )


# Storage Exceptions
class StorageError(POSError):
    """Base exception for storage operations."""

    pass


class PersistenceError(StorageError):
    """A write failed and the transaction was rolled back."""

    def __init__(self, operation: str):
        super().__init__(
            f"Could not save {operation}. Nothing was written.",
            code="PERSISTENCE_FAILURE",
            details={"operation": operation},
        )


class MigrationError(StorageError):
    """A schema migration could not be applied or verified."""

    def __init__(self, version: str, reason: str):
        super().__init__(
            f"Migration v{version} failed: {reason}",
            code="MIGRATION_FAILED",
            details={"version": version, "reason": reason},
        )


class DuplicateInvoiceNumberError(StorageError):
    """Invoice number collides with an existing invoice."""

    def __init__(self, invoice_number: str):
        super().__init__(
            f"Invoice number already exists: {invoice_number}",
            code="DUPLICATE_INVOICE_NUMBER",
            details={"invoice_number": invoice_number},
        )


class ProductInUseError(StorageError):
    """Product is referenced by invoice lines and cannot be deleted."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product {product_id} is referenced by existing invoices",
            code="PRODUCT_IN_USE",
            details={"product_id": product_id},
        )


class DuplicateUsernameError(StorageError):
    """A user with the same username already exists."""

    def __init__(self, username: str):
        super().__init__(
            f"Username already exists: {username}",
            code="DUPLICATE_USERNAME",
            details={"username": username},
        )


# Access Exceptions
class AccessError(POSError):
    """Base exception for caller identity problems."""

    pass


class AuthenticationRequiredError(AccessError):
    """No caller identity was supplied."""

    def __init__(self, reason: str = "missing caller identity"):
        super().__init__(
            f"Authentication required: {reason}",
            code="AUTHENTICATION_REQUIRED",
            details={"reason": reason},
        )


class PermissionDeniedError(AccessError):
    """Caller role is not allowed to perform the operation."""

    def __init__(self, role: str, required: str):
        super().__init__(
            f"Access denied: role '{role}' cannot perform this action (requires {required})",
            code="PERMISSION_DENIED",
            details={"role": role, "required": required},
        )


class ConfigurationError(POSError):
    """Configuration error."""

    pass
