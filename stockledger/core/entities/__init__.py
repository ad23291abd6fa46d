"""Core domain entities."""

from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    ConsumptionLine,
    DocumentType,
    KardexEntry,
    MovementKind,
    ReceiptDocument,
    ReceiptLine,
    StockRecord,
    as_utc,
)
from stockledger.core.entities.material_request import (
    TERMINAL_REQUEST_STATES,
    MaterialRequest,
    MaterialRequestItem,
    RequestItemStatus,
    RequestStatus,
)

__all__ = [
    # Inventory entities
    "StockRecord",
    "DocumentType",
    "ReceiptLine",
    "ReceiptDocument",
    "ConsumptionLine",
    "Consumption",
    "AdjustmentEvent",
    "MovementKind",
    "KardexEntry",
    "as_utc",
    # Material request entities
    "MaterialRequest",
    "MaterialRequestItem",
    "RequestItemStatus",
    "RequestStatus",
    "TERMINAL_REQUEST_STATES",
]
