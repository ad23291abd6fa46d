"""Get Stock Record Use Case."""

from stockledger.core.entities.inventory import StockRecord
from stockledger.core.exceptions import UnknownSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore


class GetStockRecordUseCase:
    """Look up the current quantity, average cost and thresholds of a SKU."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, sku: str) -> StockRecord:
        store = await self._get_inventory_store()
        record = await store.get_record(sku)
        if record is None:
            raise UnknownSkuError(sku)
        return record
