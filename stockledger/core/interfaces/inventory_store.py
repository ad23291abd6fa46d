"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    ReceiptDocument,
    StockRecord,
)


class IInventoryStore(ABC):
    """Interface for stock records and their event histories.

    Records returned by the store are copies; state only changes through
    save_record. Mutations for a SKU must run inside ``lock(sku)``.
    """

    @abstractmethod
    def lock(self, *skus: str) -> AbstractAsyncContextManager[None]:
        """Serialize mutations for the given SKUs (acquired in sorted order)."""
        pass

    @abstractmethod
    async def create_record(self, record: StockRecord) -> StockRecord:
        """Create a new stock record; raises DuplicateSkuError if present."""
        pass

    @abstractmethod
    async def get_record(self, sku: str) -> StockRecord | None:
        """Get stock record by SKU."""
        pass

    @abstractmethod
    async def save_record(self, record: StockRecord) -> StockRecord:
        """Replace the stored record (quantity, avg_cost, etc.)."""
        pass

    @abstractmethod
    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[StockRecord]:
        """List stock records ordered by SKU."""
        pass

    @abstractmethod
    async def add_receipt(self, document: ReceiptDocument) -> ReceiptDocument:
        """Record a posted goods-receipt document."""
        pass

    @abstractmethod
    async def get_receipt(self, receipt_id: str) -> ReceiptDocument | None:
        """Get receipt document by ID."""
        pass

    @abstractmethod
    async def list_receipts(self, sku: str | None = None) -> list[ReceiptDocument]:
        """List receipt documents in posting order, optionally touching a SKU."""
        pass

    @abstractmethod
    async def add_consumption(self, consumption: Consumption) -> Consumption:
        """Record a work-order consumption."""
        pass

    @abstractmethod
    async def get_consumption(self, consumption_id: str) -> Consumption | None:
        """Get consumption by ID."""
        pass

    @abstractmethod
    async def delete_consumption(self, consumption_id: str) -> bool:
        """Remove a consumption from history. Returns False if absent."""
        pass

    @abstractmethod
    async def list_consumptions(self, sku: str | None = None) -> list[Consumption]:
        """List consumptions in recording order, optionally touching a SKU."""
        pass

    @abstractmethod
    async def add_adjustment(self, adjustment: AdjustmentEvent) -> AdjustmentEvent:
        """Record a manual adjustment."""
        pass

    @abstractmethod
    async def list_adjustments(self, sku: str | None = None) -> list[AdjustmentEvent]:
        """List adjustments in recording order, optionally for one SKU."""
        pass
