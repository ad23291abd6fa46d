"""API middleware."""

from stockledger.api.middleware.error_handler import ErrorHandlerMiddleware
from stockledger.api.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware", "ErrorHandlerMiddleware"]
