"""
Material request domain entities.

A material request lists items to be procured; linked goods receipts
accumulate received quantities until every item is fulfilled.
"""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class RequestItemStatus(str, Enum):
    """Fulfillment status of a single requested item."""

    PENDING = "pending"
    IN_PROCUREMENT = "in_procurement"
    PARTIALLY_RECEIVED = "partially_received"
    RECEIVED = "received"
    CANCELLED = "cancelled"


class RequestStatus(str, Enum):
    """Aggregate status of a material request."""

    OPEN = "open"
    IN_PROCUREMENT = "in_procurement"
    PARTIALLY_RECEIVED = "partially_received"
    TOTALLY_RECEIVED = "totally_received"
    CANCELLED = "cancelled"


# No automatic derivation once reached
TERMINAL_REQUEST_STATES = frozenset({RequestStatus.TOTALLY_RECEIVED, RequestStatus.CANCELLED})


class MaterialRequestItem(BaseModel):
    """An item line of a material request."""

    id: str | None = None
    description: str
    requested_quantity: float
    received_quantity: float = 0.0
    expected_sku: str | None = None
    suggested_unit: str | None = None
    suggested_provider_id: str | None = None
    status: RequestItemStatus = RequestItemStatus.PENDING

    @property
    def outstanding_quantity(self) -> float:
        return max(self.requested_quantity - self.received_quantity, 0.0)


class MaterialRequest(BaseModel):
    """Request for materials, tracked to partial or full fulfillment."""

    id: str | None = None
    requester_id: str
    requester_name: str | None = None
    request_date: date = Field(default_factory=date.today)
    items: list[MaterialRequestItem] = Field(default_factory=list)
    status: RequestStatus = RequestStatus.OPEN
    notes: str | None = None
    linked_receipt_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_REQUEST_STATES

    def get_item(self, item_id: str) -> MaterialRequestItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None
