"""Get Kardex Use Case: chronological ledger of one product."""

from dataclasses import dataclass

from stockledger.application.dto.mappers import kardex_entry_response
from stockledger.application.dto.responses import KardexResponse
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import KardexEntry, StockRecord
from stockledger.core.exceptions import UnknownSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.kardex import KardexReconstructor

logger = get_logger(__name__)


@dataclass
class KardexResult:
    """Kardex entries plus the live stock record they were built against."""

    record: StockRecord
    entries: list[KardexEntry]
    final_balance: float


class GetKardexUseCase:
    """Rebuild a SKU's Kardex from the stored event histories."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        reconstructor: KardexReconstructor | None = None,
    ):
        self._inventory_store = inventory_store
        self._reconstructor = reconstructor or KardexReconstructor()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, sku: str, limit: int | None = None) -> KardexResult:
        """
        Execute get kardex use case.

        Args:
            sku: Product to reconstruct.
            limit: Keep only the most recent ``limit`` entries, at least 1.
                Defaults to, and is capped at, the configured kardex page
                limit. Balances always come from the full history.
        """
        page_limit = get_settings().inventory.kardex_page_limit
        if limit is None:
            limit = page_limit
        elif limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        limit = min(limit, page_limit)

        store = await self._get_inventory_store()
        record = await store.get_record(sku)
        if record is None:
            raise UnknownSkuError(sku)

        # Snapshot reads; no lock needed for a reporting path
        ledger = self._reconstructor.build_ledger(
            sku,
            await store.list_receipts(sku=sku),
            await store.list_consumptions(sku=sku),
            await store.list_adjustments(sku=sku),
            record.avg_cost,
        )
        entries = list(ledger)

        if len(entries) > limit:
            entries = entries[-limit:]

        logger.debug("kardex_built", sku=sku, entries=len(ledger), returned=len(entries))
        return KardexResult(record=record, entries=entries, final_balance=ledger.final_balance)

    def to_response(self, result: KardexResult) -> KardexResponse:
        """Convert result to API response."""
        return KardexResponse(
            sku=result.record.sku,
            name=result.record.name,
            unit=result.record.unit,
            quantity_on_hand=result.record.quantity_on_hand,
            avg_cost=result.record.avg_cost,
            entries=[kardex_entry_response(e) for e in result.entries],
            final_balance=result.final_balance,
        )
