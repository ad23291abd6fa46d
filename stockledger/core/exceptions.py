"""
Domain exceptions for the stock ledger.

Every rejection happens before any state is mutated, so callers may
surface these to the user and resubmit corrected input.
"""

from typing import Any


class StockLedgerError(Exception):
    """Base exception for all stock ledger errors."""

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


# Inventory Exceptions
class InventoryError(StockLedgerError):
    """Base exception for stock record operations."""

    pass


class InvalidQuantityError(InventoryError):
    """Quantity is zero or negative where a positive value is required."""

    def __init__(self, quantity: float, field: str = "quantity", sku: str | None = None):
        super().__init__(
            f"Invalid {field}: {quantity} (must be greater than zero)",
            code="INVALID_QUANTITY",
            details={"field": field, "quantity": quantity, "sku": sku},
        )


class InvalidCostError(InventoryError):
    """Unit cost (or discount) is outside its allowed range."""

    def __init__(self, value: float, field: str = "unit_cost", sku: str | None = None):
        super().__init__(
            f"Invalid {field}: {value}",
            code="INVALID_COST",
            details={"field": field, "value": value, "sku": sku},
        )


class InsufficientStockError(InventoryError):
    """Consumption exceeds the quantity on hand."""

    def __init__(self, sku: str, requested: float, available: float):
        super().__init__(
            f"Insufficient stock for {sku}: requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={"sku": sku, "requested": requested, "available": available},
        )


class NegativeResultingStockError(InventoryError):
    """Adjustment would drive the quantity on hand below zero."""

    def __init__(self, sku: str, delta: float, available: float):
        super().__init__(
            f"Adjustment of {delta} on {sku} would leave {available + delta} in stock",
            code="NEGATIVE_RESULTING_STOCK",
            details={"sku": sku, "delta": delta, "available": available},
        )


class InvalidAdjustmentError(InventoryError):
    """Adjustment has a zero delta or no reason."""

    def __init__(self, reason: str, sku: str | None = None):
        super().__init__(
            f"Invalid adjustment: {reason}",
            code="INVALID_ADJUSTMENT",
            details={"reason": reason, "sku": sku},
        )


class UnknownSkuError(InventoryError):
    """No stock record exists for the SKU."""

    def __init__(self, sku: str):
        super().__init__(
            f"Unknown SKU: {sku}",
            code="UNKNOWN_SKU",
            details={"sku": sku},
        )


class DuplicateSkuError(InventoryError):
    """A stock record already exists for the SKU."""

    def __init__(self, sku: str):
        super().__init__(
            f"SKU already registered: {sku}",
            code="DUPLICATE_SKU",
            details={"sku": sku},
        )


class ConsumptionNotFoundError(InventoryError):
    """Consumption not found in history."""

    def __init__(self, consumption_id: str):
        super().__init__(
            f"Consumption not found: {consumption_id}",
            code="CONSUMPTION_NOT_FOUND",
            details={"consumption_id": consumption_id},
        )


class ReceiptNotFoundError(InventoryError):
    """Receipt document not found in history."""

    def __init__(self, receipt_id: str):
        super().__init__(
            f"Receipt not found: {receipt_id}",
            code="RECEIPT_NOT_FOUND",
            details={"receipt_id": receipt_id},
        )


# Material Request Exceptions
class MaterialRequestError(StockLedgerError):
    """Base exception for material request operations."""

    pass


class MaterialRequestNotFoundError(MaterialRequestError):
    """Material request not found."""

    def __init__(self, request_id: str):
        super().__init__(
            f"Material request not found: {request_id}",
            code="MATERIAL_REQUEST_NOT_FOUND",
            details={"request_id": request_id},
        )


class MaterialRequestClosedError(MaterialRequestError):
    """Material request is in a terminal state and accepts no more receipts."""

    def __init__(self, request_id: str, status: str):
        super().__init__(
            f"Material request {request_id} is closed ({status})",
            code="MATERIAL_REQUEST_CLOSED",
            details={"request_id": request_id, "status": status},
        )


class InvalidMaterialRequestError(MaterialRequestError):
    """Material request contents are invalid."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid material request: {reason}",
            code="INVALID_MATERIAL_REQUEST",
            details={"reason": reason},
        )


class RequestItemNotFoundError(MaterialRequestError):
    """Item not found in the material request."""

    def __init__(self, request_id: str, item_id: str):
        super().__init__(
            f"Item {item_id} not found in material request {request_id}",
            code="REQUEST_ITEM_NOT_FOUND",
            details={"request_id": request_id, "item_id": item_id},
        )


class ConfigurationError(StockLedgerError):
    """Configuration error."""

    pass
