"""
Error handling for the API.

Every error body is an ``ErrorResponse``: a machine-readable
``error_code``, the message, a recovery hint, the offending fields or
ids in ``detail``, and the id of the request that failed.

Domain rejections are raised before anything is mutated, so they are
logged as warnings; anything unexpected is logged with its traceback.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from stockledger.application.dto.responses import ErrorResponse
from stockledger.config import current_request_id, get_logger
from stockledger.core.exceptions import (
    ConfigurationError,
    ConsumptionNotFoundError,
    DuplicateSkuError,
    InsufficientStockError,
    MaterialRequestClosedError,
    MaterialRequestNotFoundError,
    NegativeResultingStockError,
    ReceiptNotFoundError,
    RequestItemNotFoundError,
    StockLedgerError,
    UnknownSkuError,
)

logger = get_logger(__name__)

_NOT_FOUND = (
    UnknownSkuError,
    ConsumptionNotFoundError,
    ReceiptNotFoundError,
    MaterialRequestNotFoundError,
    RequestItemNotFoundError,
)
_CONFLICT = (
    InsufficientStockError,
    NegativeResultingStockError,
    DuplicateSkuError,
    MaterialRequestClosedError,
)

HINTS: dict[str, str] = {
    "INVALID_QUANTITY": "Quantities must be finite and greater than zero.",
    "INVALID_COST": "Unit costs must be finite and >= 0, discounts between 0 and 100.",
    "INVALID_ADJUSTMENT": "Adjustments need a finite non-zero delta and a reason.",
    "INVALID_PRODUCT": "Thresholds must be >= 0 and min_stock must not exceed max_stock.",
    "INSUFFICIENT_STOCK": "Check GET /api/inventory/products/{sku} for the quantity on hand.",
    "NEGATIVE_RESULTING_STOCK": "The adjustment would leave negative stock. Use a smaller delta.",
    "UNKNOWN_SKU": "Register the product first with POST /api/inventory/products.",
    "DUPLICATE_SKU": "A product with this SKU already exists.",
    "CONSUMPTION_NOT_FOUND": "Check the consumption ID and try GET /api/consumptions.",
    "RECEIPT_NOT_FOUND": "Check the receipt ID and try GET /api/receipts.",
    "MATERIAL_REQUEST_NOT_FOUND": "Check the request ID and try GET /api/material-requests.",
    "MATERIAL_REQUEST_CLOSED": "The request is totally received or cancelled. Open a new one.",
    "INVALID_MATERIAL_REQUEST": "Check the request items and their statuses.",
    "REQUEST_ITEM_NOT_FOUND": "Check the item ID with GET /api/material-requests/{id}.",
    "CONFIGURATION_ERROR": "Fix the environment variables listed in detail and restart.",
    "VALIDATION_ERROR": "Check the request body and query parameters against the API schema.",
}

_STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current stock or request state.",
    500: "An internal error occurred. Check server logs.",
}

_HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
}


def status_for(exc: Exception) -> int:
    """HTTP status for an exception raised while serving a request."""
    if isinstance(exc, _NOT_FOUND):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, _CONFLICT):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, (StockLedgerError, ValueError)):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _format_details(details: dict[str, Any]) -> str | None:
    if not details:
        return None
    return ", ".join(f"{key}={value}" for key, value in details.items())


def _respond(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINTS.get(error_code) or _STATUS_HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
        request_id=current_request_id(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def error_response(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, StockLedgerError):
        return _respond(
            request, status_code, exc.code, exc.message, _format_details(exc.details)
        )
    return _respond(request, status_code, exc.__class__.__name__, str(exc))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions that escape the routes into ``ErrorResponse`` bodies."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            if status_for(exc) >= 500:
                logger.exception("unhandled_exception", error_type=exc.__class__.__name__)
            else:
                logger.warning(
                    "request_rejected", error_type=exc.__class__.__name__, error=str(exc)
                )
            return error_response(request, exc)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(StockLedgerError)
    async def domain_exception_handler(request: Request, exc: StockLedgerError) -> JSONResponse:
        response = error_response(request, exc)
        if response.status_code >= 500:
            logger.error("server_misconfigured", error_code=exc.code, details=exc.details)
        else:
            logger.warning("request_rejected", error_code=exc.code, status=response.status_code)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _respond(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            "; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _respond(
            request,
            exc.status_code,
            _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            exc.detail or "An error occurred",
        )
