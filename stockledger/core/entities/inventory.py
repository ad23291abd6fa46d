"""Inventory domain entities."""

import math
from datetime import UTC, date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def as_utc(moment: date | datetime) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime.

    Plain dates map to midnight UTC; naive datetimes are taken as UTC.
    """
    if not isinstance(moment, datetime):
        return datetime.combine(moment, time.min, tzinfo=UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class StockRecord(BaseModel):
    """Stock level and weighted average cost for one product (SKU)."""

    sku: str
    name: str = ""
    description: str | None = None
    unit: str = "unit"
    location: str | None = None
    category_id: str | None = None
    default_provider_id: str | None = None
    quantity_on_hand: float = 0.0
    avg_cost: float = 0.0  # Weighted Average Cost
    min_stock: float | None = None
    max_stock: float | None = None
    last_receipt_date: date | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("sku")
    @classmethod
    def sku_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("sku must not be empty")
        return v

    @field_validator("quantity_on_hand", "avg_cost")
    @classmethod
    def non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("must be a finite number >= 0")
        return v

    @model_validator(mode="after")
    def check_thresholds(self) -> "StockRecord":
        """Thresholds are optional, non-negative, and min never exceeds max."""
        for value in (self.min_stock, self.max_stock):
            if value is not None and (not math.isfinite(value) or value < 0):
                raise ValueError("stock thresholds must be >= 0")
        if (
            self.min_stock is not None
            and self.max_stock is not None
            and self.min_stock > self.max_stock
        ):
            raise ValueError("min_stock must not exceed max_stock")
        return self

    @property
    def total_value(self) -> float:
        """Total inventory value = quantity * avg_cost."""
        return self.quantity_on_hand * self.avg_cost


class DocumentType(str, Enum):
    """Kinds of goods-receipt documents."""

    INVOICE = "invoice"
    DISPATCH_GUIDE = "dispatch_guide"
    RECEIPT = "receipt"
    OTHER = "other"


class ReceiptLine(BaseModel):
    """A single product line on a goods-receipt document."""

    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: float
    unit_cost: float
    discount_pct: float = 0.0
    product_name: str | None = None

    @property
    def line_total(self) -> float:
        """quantity * unit_cost * (1 - discount)."""
        return self.quantity * self.unit_cost * (1 - self.discount_pct / 100)


class ReceiptDocument(BaseModel):
    """
    Goods-receipt document.

    Saved documents are never edited in place; a correction is a new document.
    """

    id: str | None = None
    document_type: DocumentType = DocumentType.INVOICE
    document_number: str
    provider_id: str | None = None
    provider_name: str | None = None
    issue_date: date | None = None
    reception_date: date
    lines: list[ReceiptLine] = Field(default_factory=list)
    material_request_id: str | None = None
    posted_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total(self) -> float:
        """Document total (sum of discounted line totals)."""
        return sum(line.line_total for line in self.lines)

    @property
    def skus(self) -> set[str]:
        return {line.sku for line in self.lines}


class ConsumptionLine(BaseModel):
    """Quantity of one product consumed by a work order."""

    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: float
    product_name: str | None = None


class Consumption(BaseModel):
    """Work-order consumption batch."""

    id: str | None = None
    work_order_ref: str
    requester_id: str | None = None
    requester_name: str | None = None
    actor: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    lines: list[ConsumptionLine] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def skus(self) -> set[str]:
        return {line.sku for line in self.lines}

    def demand_by_sku(self) -> dict[str, float]:
        """Total quantity requested per SKU across all lines."""
        demand: dict[str, float] = {}
        for line in self.lines:
            demand[line.sku] = demand.get(line.sku, 0.0) + line.quantity
        return demand


class AdjustmentEvent(BaseModel):
    """Manual stock adjustment (signed delta)."""

    id: str | None = None
    sku: str
    delta: float  # positive adds stock, negative removes it
    reason: str
    actor: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return as_utc(v)


class MovementKind(str, Enum):
    """Types of stock movements shown in the Kardex."""

    RECEIPT = "receipt"
    CONSUMPTION = "consumption"
    POSITIVE_ADJUSTMENT = "positive_adjustment"
    NEGATIVE_ADJUSTMENT = "negative_adjustment"


class KardexEntry(BaseModel):
    """One line of a product's Kardex (derived, never stored)."""

    model_config = ConfigDict(frozen=True)

    id: str
    sku: str
    timestamp: datetime
    kind: MovementKind
    reference: str
    quantity_in: float | None = None
    quantity_out: float | None = None
    unit_cost: float
    movement_cost: float
    balance: float
    actor: str | None = None
