"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    products: int = 0
    material_requests: int = 0


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. UNKNOWN_SKU)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    - request_id: echoed in the X-Request-ID header
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    request_id: str | None = Field(default=None, description="Id of the failed request")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# --- Inventory ---


class StockRecordResponse(BaseModel):
    """Stock record response DTO."""

    sku: str
    name: str
    unit: str
    location: str | None = None
    quantity_on_hand: float
    avg_cost: float
    total_value: float
    min_stock: float | None = None
    max_stock: float | None = None
    stock_status: str
    alert_level: str
    last_receipt_date: date | None = None
    updated_at: datetime


class StockRecordListResponse(BaseModel):
    """Paginated stock record list."""

    items: list[StockRecordResponse]
    total: int


class KardexEntryResponse(BaseModel):
    """A line of the Kardex."""

    id: str
    timestamp: datetime
    kind: str
    reference: str
    quantity_in: float | None = None
    quantity_out: float | None = None
    unit_cost: float
    movement_cost: float
    balance: float
    actor: str | None = None


class KardexResponse(BaseModel):
    """Kardex of one product."""

    sku: str
    name: str
    unit: str
    quantity_on_hand: float = Field(..., description="Current stock per the stock record")
    avg_cost: float
    entries: list[KardexEntryResponse]
    final_balance: float = Field(..., description="Running balance after the last entry")


class ReceiptLineResponse(BaseModel):
    sku: str
    product_name: str | None = None
    quantity: float
    unit_cost: float
    discount_pct: float
    line_total: float


class CostUpdateResponse(BaseModel):
    """Effect of a receipt line on a stock record."""

    sku: str
    old_quantity: float
    old_avg_cost: float
    new_quantity: float
    new_avg_cost: float


class ReceiptResponse(BaseModel):
    """Goods-receipt document response DTO."""

    id: str
    document_type: str
    document_number: str
    provider_id: str | None = None
    provider_name: str | None = None
    issue_date: date | None = None
    reception_date: date
    lines: list[ReceiptLineResponse]
    total: float
    material_request_id: str | None = None
    posted_by: str | None = None
    created_at: datetime


class ConsumptionLineResponse(BaseModel):
    sku: str
    product_name: str | None = None
    quantity: float


class ConsumptionResponse(BaseModel):
    """Work-order consumption response DTO."""

    id: str
    work_order_ref: str
    requester_id: str | None = None
    requester_name: str | None = None
    actor: str | None = None
    timestamp: datetime
    lines: list[ConsumptionLineResponse]


class AdjustmentResponse(BaseModel):
    """Stock adjustment response DTO."""

    id: str
    sku: str
    delta: float
    reason: str
    actor: str | None = None
    timestamp: datetime
    stock_record: StockRecordResponse


# --- Material requests ---


class MaterialRequestItemResponse(BaseModel):
    id: str
    description: str
    requested_quantity: float
    received_quantity: float
    expected_sku: str | None = None
    suggested_unit: str | None = None
    suggested_provider_id: str | None = None
    status: str


class MaterialRequestResponse(BaseModel):
    """Material request response DTO."""

    id: str
    requester_id: str
    requester_name: str | None = None
    request_date: date
    items: list[MaterialRequestItemResponse]
    status: str
    notes: str | None = None
    linked_receipt_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ItemStatusResponse(BaseModel):
    item_id: str
    status: str
    requested_quantity: float
    received_quantity: float


class MaterialRequestStatusResponse(BaseModel):
    """Aggregate and per-item status of a material request."""

    request_id: str
    status: str
    items: list[ItemStatusResponse]


class PostReceiptResponse(BaseModel):
    """Response for posting a receipt document."""

    receipt: ReceiptResponse
    cost_updates: list[CostUpdateResponse]
    material_request: MaterialRequestStatusResponse | None = None


# --- Reports ---


class ValuationLineResponse(BaseModel):
    sku: str
    name: str
    unit: str
    quantity_on_hand: float
    avg_cost: float
    total_value: float


class ValuationReportResponse(BaseModel):
    currency: str
    lines: list[ValuationLineResponse]
    grand_total: float


class StockAlertResponse(BaseModel):
    sku: str
    name: str
    level: str
    quantity_on_hand: float
    min_stock: float


class MovementReportEntryResponse(KardexEntryResponse):
    sku: str


class ConsumptionReportLineResponse(BaseModel):
    consumption_id: str | None = None
    work_order_ref: str
    timestamp: datetime
    sku: str
    product_name: str
    category_id: str | None = None
    unit: str
    quantity: float
    unit_cost: float
    total_cost: float
    requester_id: str | None = None
    requester_name: str | None = None
    actor: str | None = None


class ConsumptionReportResponse(BaseModel):
    """Consumed lines with totals, valued at current average cost."""

    currency: str
    lines: list[ConsumptionReportLineResponse]
    total_quantity: float
    total_value: float


class LeadTimeResponse(BaseModel):
    receipt_id: str | None = None
    document_number: str
    provider_id: str | None = None
    provider_name: str | None = None
    issue_date: date
    reception_date: date
    days: int


class LeadTimeReportResponse(BaseModel):
    items: list[LeadTimeResponse]
    average_days: float | None = None
