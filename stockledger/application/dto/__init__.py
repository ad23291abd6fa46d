"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from stockledger.application.dto.requests import (
    AdjustStockRequest,
    ConsumptionLineRequest,
    CreateMaterialRequestRequest,
    MaterialRequestItemRequest,
    PostReceiptRequest,
    ReceiptLineRequest,
    RecordConsumptionRequest,
    RegisterProductRequest,
)
from stockledger.application.dto.responses import (
    AdjustmentResponse,
    ConsumptionResponse,
    ErrorResponse,
    HealthResponse,
    KardexEntryResponse,
    KardexResponse,
    MaterialRequestResponse,
    MaterialRequestStatusResponse,
    PostReceiptResponse,
    ReceiptResponse,
    StockRecordListResponse,
    StockRecordResponse,
)

__all__ = [
    # Requests
    "RegisterProductRequest",
    "ReceiptLineRequest",
    "PostReceiptRequest",
    "ConsumptionLineRequest",
    "RecordConsumptionRequest",
    "AdjustStockRequest",
    "MaterialRequestItemRequest",
    "CreateMaterialRequestRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "StockRecordResponse",
    "StockRecordListResponse",
    "KardexEntryResponse",
    "KardexResponse",
    "ReceiptResponse",
    "PostReceiptResponse",
    "ConsumptionResponse",
    "AdjustmentResponse",
    "MaterialRequestResponse",
    "MaterialRequestStatusResponse",
]
