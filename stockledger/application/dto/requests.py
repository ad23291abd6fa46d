"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Numeric fields refuse NaN and infinities; range checks are left to the
domain services, which reject with their own error codes
(INVALID_QUANTITY, INVALID_COST).
"""

from datetime import date, datetime
from typing import Annotated

from pydantic import AllowInfNan, BaseModel, Field

from stockledger.core.entities.inventory import DocumentType

FiniteFloat = Annotated[float, AllowInfNan(False)]

# --- Products ---


class RegisterProductRequest(BaseModel):
    """Request to add a product to the catalog."""

    sku: str = Field(..., min_length=1, description="Unique product SKU")
    name: str = Field(..., min_length=1, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    unit: str | None = Field(default=None, description="Unit of measure")
    location: str | None = Field(default=None, description="Warehouse location")
    category_id: str | None = Field(default=None, description="Category ID")
    default_provider_id: str | None = Field(default=None, description="Default provider ID")
    initial_quantity: FiniteFloat = Field(default=0.0, description="Opening quantity on hand")
    initial_avg_cost: FiniteFloat = Field(default=0.0, description="Opening average unit cost")
    min_stock: FiniteFloat | None = Field(default=None, description="Minimum stock threshold")
    max_stock: FiniteFloat | None = Field(default=None, description="Maximum stock threshold")


# --- Inventory movements ---


class ReceiptLineRequest(BaseModel):
    """A line of a goods-receipt document."""

    sku: str = Field(..., description="Product SKU")
    quantity: FiniteFloat = Field(..., description="Quantity received (> 0)")
    unit_cost: FiniteFloat = Field(..., description="Cost per unit (>= 0)")
    discount_pct: FiniteFloat = Field(default=0.0, description="Line discount percentage (0-100)")
    product_name: str | None = Field(default=None, description="Product name for display")


class PostReceiptRequest(BaseModel):
    """Request to post a goods-receipt document."""

    document_type: DocumentType = Field(default=DocumentType.INVOICE)
    document_number: str = Field(..., min_length=1, description="External document number")
    provider_id: str | None = Field(default=None, description="Provider ID")
    provider_name: str | None = Field(default=None, description="Provider name")
    issue_date: date | None = Field(default=None, description="Document issue date")
    reception_date: date | None = Field(
        default=None,
        description="Reception date (defaults to today)",
    )
    lines: list[ReceiptLineRequest] = Field(..., min_length=1)
    material_request_id: str | None = Field(
        default=None, description="Material request fulfilled by this document"
    )
    posted_by: str | None = Field(default=None, description="User posting the document")


class ConsumptionLineRequest(BaseModel):
    """A product consumed by a work order."""

    sku: str = Field(..., description="Product SKU")
    quantity: FiniteFloat = Field(..., description="Quantity consumed (> 0)")
    product_name: str | None = Field(default=None)


class RecordConsumptionRequest(BaseModel):
    """Request to record a work-order consumption."""

    work_order_ref: str = Field(..., min_length=1, description="Work order number")
    requester_id: str | None = Field(default=None, description="Requester ID")
    requester_name: str | None = Field(default=None, description="Requester name")
    actor: str | None = Field(default=None, description="User recording the consumption")
    timestamp: datetime | None = Field(
        default=None, description="Consumption time (defaults to now)"
    )
    lines: list[ConsumptionLineRequest] = Field(..., min_length=1)


class AdjustStockRequest(BaseModel):
    """Request for a manual stock adjustment."""

    sku: str = Field(..., description="Product SKU")
    delta: FiniteFloat = Field(..., description="Signed quantity change (non-zero)")
    reason: str = Field(..., description="Reason for the adjustment")
    actor: str | None = Field(default=None, description="User making the adjustment")
    timestamp: datetime | None = Field(
        default=None, description="Adjustment time (defaults to now)"
    )


# --- Material requests ---


class MaterialRequestItemRequest(BaseModel):
    """An item of a new material request."""

    description: str = Field(..., min_length=1, description="What is needed")
    requested_quantity: FiniteFloat = Field(..., description="Quantity requested (> 0)")
    expected_sku: str | None = Field(
        default=None, description="SKU expected on receipt documents"
    )
    suggested_unit: str | None = Field(default=None)
    suggested_provider_id: str | None = Field(default=None)


class CreateMaterialRequestRequest(BaseModel):
    """Request to open a material request."""

    requester_id: str = Field(..., min_length=1, description="Requester ID")
    requester_name: str | None = Field(default=None)
    request_date: date | None = Field(default=None, description="Defaults to today")
    items: list[MaterialRequestItemRequest] = Field(default_factory=list)
    notes: str | None = Field(default=None)
