"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from retail_pos.application.dto.responses import ErrorResponse
from retail_pos.config import get_logger
from retail_pos.core.exceptions import (
    AuthenticationRequiredError,
    CheckoutError,
    ConfigurationError,
    DuplicateInvoiceNumberError,
    DuplicateUsernameError,
    NotFoundError,
    PermissionDeniedError,
    POSError,
    ProductInUseError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes (first match wins, specific before base)
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    CheckoutError: status.HTTP_409_CONFLICT,
    ProductInUseError: status.HTTP_409_CONFLICT,
    DuplicateUsernameError: status.HTTP_409_CONFLICT,
    DuplicateInvoiceNumberError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /api/products to list products.",
    "INVOICE_NOT_FOUND": "Check the invoice ID and try GET /api/invoices to list invoices.",
    "EXPENSE_NOT_FOUND": "Check the expense ID and try GET /api/expenses to list expenses.",
    "USER_NOT_FOUND": "The staff identity does not match a known user.",
    "PRODUCT_INACTIVE": "Reactivate the product or remove it from the cart.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or restock the product.",
    "PRODUCT_IN_USE": "Products on existing invoices cannot be deleted. Mark it inactive instead.",
    "DUPLICATE_USERNAME": "Choose a different username.",
    "PERSISTENCE_FAILURE": "Nothing was saved. Retry the request.",
    "AUTHENTICATION_REQUIRED": "Send X-Staff-Id, X-Staff-Name and X-Staff-Role headers.",
    "PERMISSION_DENIED": "This action requires the admin role.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authenticate before calling this endpoint.",
    403: "You are not allowed to perform this action.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer POSError.code, fall back to class name
    if isinstance(exc, POSError):
        error_code = exc.code
        message = exc.message
        detail = str(exc.details) if exc.details else None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        detail = None

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
        )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escaped the exception handlers to standardized
    JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(POSError)
    async def pos_exception_handler(request: Request, exc: POSError) -> JSONResponse:
        """Handle domain errors."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "AUTHENTICATION_REQUIRED",
        403: "PERMISSION_DENIED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
