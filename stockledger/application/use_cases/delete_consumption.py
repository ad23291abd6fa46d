"""Delete Consumption Use Case: remove a consumption and credit its stock back."""

from stockledger.config import get_logger
from stockledger.core.entities.inventory import Consumption, StockRecord
from stockledger.core.exceptions import ConsumptionNotFoundError, UnknownSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.movements import MovementMutator

logger = get_logger(__name__)


class DeleteConsumptionUseCase:
    """Delete a recorded consumption. Average cost is left as it is."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        mutator: MovementMutator | None = None,
    ):
        self._inventory_store = inventory_store
        self._mutator = mutator or MovementMutator()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, consumption_id: str) -> Consumption:
        """Execute delete consumption use case."""
        store = await self._get_inventory_store()

        consumption = await store.get_consumption(consumption_id)
        if consumption is None:
            raise ConsumptionNotFoundError(consumption_id)

        async with store.lock(*consumption.skus):
            # Re-read under the lock; a concurrent delete may have won
            consumption = await store.get_consumption(consumption_id)
            if consumption is None:
                raise ConsumptionNotFoundError(consumption_id)

            records: dict[str, StockRecord] = {}
            for sku in sorted(consumption.skus):
                record = await store.get_record(sku)
                if record is None:
                    raise UnknownSkuError(sku)
                records[sku] = record

            for line in consumption.lines:
                self._mutator.reverse_consumption(records[line.sku], line)
            for record in records.values():
                await store.save_record(record)
            await store.delete_consumption(consumption_id)

        logger.info(
            "consumption_deleted",
            consumption_id=consumption_id,
            work_order=consumption.work_order_ref,
            skus=sorted(consumption.skus),
        )
        return consumption
