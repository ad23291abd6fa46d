"""In-memory implementation of inventory storage."""

from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime

from stockledger.config import get_logger
from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    ReceiptDocument,
    StockRecord,
)
from stockledger.core.exceptions import DuplicateSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.infrastructure.storage.memory.locks import KeyedLock

logger = get_logger(__name__)


class MemoryInventoryStore(IInventoryStore):
    """Volatile stock record and event history storage.

    Every read returns a deep copy, so callers never hold a reference
    into the store's own collections.
    """

    def __init__(self) -> None:
        self._records: dict[str, StockRecord] = {}
        self._receipts: list[ReceiptDocument] = []
        self._consumptions: list[Consumption] = []
        self._adjustments: list[AdjustmentEvent] = []
        self._locks = KeyedLock()
        self._receipt_seq = 0
        self._consumption_seq = 0
        self._adjustment_seq = 0

    def lock(self, *skus: str) -> AbstractAsyncContextManager[None]:
        """Serialize mutations for the given SKUs."""
        return self._locks.acquire(*skus)

    # Stock records

    async def create_record(self, record: StockRecord) -> StockRecord:
        """Create a new stock record."""
        if record.sku in self._records:
            raise DuplicateSkuError(record.sku)
        now = datetime.now(UTC)
        record = record.model_copy(deep=True, update={"created_at": now, "updated_at": now})
        self._records[record.sku] = record
        logger.info("stock_record_created", sku=record.sku)
        return record.model_copy(deep=True)

    async def get_record(self, sku: str) -> StockRecord | None:
        """Get stock record by SKU."""
        record = self._records.get(sku)
        return record.model_copy(deep=True) if record else None

    async def save_record(self, record: StockRecord) -> StockRecord:
        """Replace the stored record."""
        stored = record.model_copy(deep=True, update={"updated_at": datetime.now(UTC)})
        self._records[stored.sku] = stored
        logger.debug("stock_record_saved", sku=stored.sku)
        return stored.model_copy(deep=True)

    async def list_records(
        self, limit: int = 100, offset: int = 0
    ) -> list[StockRecord]:
        """List stock records ordered by SKU."""
        skus = sorted(self._records)[offset : offset + limit]
        return [self._records[sku].model_copy(deep=True) for sku in skus]

    # Receipts

    async def add_receipt(self, document: ReceiptDocument) -> ReceiptDocument:
        """Record a posted goods-receipt document."""
        self._receipt_seq += 1
        stored = document.model_copy(deep=True)
        if stored.id is None:
            stored.id = f"REC-{self._receipt_seq:04d}"
        self._receipts.append(stored)
        logger.info(
            "receipt_recorded",
            receipt_id=stored.id,
            document_number=stored.document_number,
            lines=len(stored.lines),
        )
        return stored.model_copy(deep=True)

    async def get_receipt(self, receipt_id: str) -> ReceiptDocument | None:
        """Get receipt document by ID."""
        for document in self._receipts:
            if document.id == receipt_id:
                return document.model_copy(deep=True)
        return None

    async def list_receipts(self, sku: str | None = None) -> list[ReceiptDocument]:
        """List receipt documents in posting order."""
        return [
            d.model_copy(deep=True)
            for d in self._receipts
            if sku is None or sku in d.skus
        ]

    # Consumptions

    async def add_consumption(self, consumption: Consumption) -> Consumption:
        """Record a work-order consumption."""
        self._consumption_seq += 1
        stored = consumption.model_copy(deep=True)
        if stored.id is None:
            stored.id = f"CONS-{self._consumption_seq:04d}"
        self._consumptions.append(stored)
        logger.info(
            "consumption_recorded",
            consumption_id=stored.id,
            work_order=stored.work_order_ref,
            lines=len(stored.lines),
        )
        return stored.model_copy(deep=True)

    async def get_consumption(self, consumption_id: str) -> Consumption | None:
        """Get consumption by ID."""
        for consumption in self._consumptions:
            if consumption.id == consumption_id:
                return consumption.model_copy(deep=True)
        return None

    async def delete_consumption(self, consumption_id: str) -> bool:
        """Remove a consumption from history."""
        for index, consumption in enumerate(self._consumptions):
            if consumption.id == consumption_id:
                del self._consumptions[index]
                logger.info("consumption_removed", consumption_id=consumption_id)
                return True
        return False

    async def list_consumptions(self, sku: str | None = None) -> list[Consumption]:
        """List consumptions in recording order."""
        return [
            c.model_copy(deep=True)
            for c in self._consumptions
            if sku is None or sku in c.skus
        ]

    # Adjustments

    async def add_adjustment(self, adjustment: AdjustmentEvent) -> AdjustmentEvent:
        """Record a manual adjustment."""
        self._adjustment_seq += 1
        stored = adjustment.model_copy(deep=True)
        if stored.id is None:
            stored.id = f"ADJ-{self._adjustment_seq:04d}"
        self._adjustments.append(stored)
        logger.info(
            "adjustment_recorded",
            adjustment_id=stored.id,
            sku=stored.sku,
            delta=stored.delta,
        )
        return stored.model_copy(deep=True)

    async def list_adjustments(self, sku: str | None = None) -> list[AdjustmentEvent]:
        """List adjustments in recording order."""
        return [
            a.model_copy(deep=True)
            for a in self._adjustments
            if sku is None or a.sku == sku
        ]
