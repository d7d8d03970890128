"""API middleware."""

from retail_pos.api.middleware.error_handler import ErrorHandlerMiddleware
from retail_pos.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
