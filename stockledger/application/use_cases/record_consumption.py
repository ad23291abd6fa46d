"""Record Consumption Use Case: work-order OUT movement with balance check."""

import math
from datetime import UTC, datetime

from stockledger.application.dto.mappers import consumption_response
from stockledger.application.dto.requests import RecordConsumptionRequest
from stockledger.application.dto.responses import ConsumptionResponse
from stockledger.config import get_logger
from stockledger.core.entities.inventory import Consumption, ConsumptionLine, StockRecord
from stockledger.core.exceptions import InvalidQuantityError, StockLedgerError, UnknownSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.movements import MovementMutator

logger = get_logger(__name__)


class RecordConsumptionUseCase:
    """Record a work-order consumption batch."""

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

    async def execute(self, request: RecordConsumptionRequest) -> Consumption:
        """Execute record consumption use case."""
        logger.info(
            "record_consumption_started",
            work_order=request.work_order_ref,
            lines=len(request.lines),
        )

        consumption = Consumption(
            work_order_ref=request.work_order_ref,
            requester_id=request.requester_id,
            requester_name=request.requester_name,
            actor=request.actor,
            timestamp=request.timestamp or datetime.now(UTC),
            lines=[
                ConsumptionLine(
                    sku=line.sku,
                    quantity=line.quantity,
                    product_name=line.product_name,
                )
                for line in request.lines
            ],
        )

        store = await self._get_inventory_store()
        try:
            async with store.lock(*consumption.skus):
                return await self._record(consumption, store)
        except StockLedgerError as e:
            logger.warning(
                "record_consumption_rejected",
                work_order=consumption.work_order_ref,
                error=e.code,
            )
            raise

    async def _record(self, consumption: Consumption, store: IInventoryStore) -> Consumption:
        # 1. Every line must carry a positive quantity
        for line in consumption.lines:
            if not math.isfinite(line.quantity) or line.quantity <= 0:
                raise InvalidQuantityError(line.quantity, sku=line.sku)

        # 2. Check summed demand per SKU against stock before mutating
        records: dict[str, StockRecord] = {}
        for sku, demand in sorted(consumption.demand_by_sku().items()):
            record = await store.get_record(sku)
            if record is None:
                raise UnknownSkuError(sku)
            self._mutator.check_consumption(record, demand)
            records[sku] = record

        # 3. Deduct stock (avg_cost unchanged)
        for line in consumption.lines:
            self._mutator.apply_consumption(records[line.sku], line)
        for record in records.values():
            await store.save_record(record)

        # 4. Record the consumption for the Kardex
        consumption = await store.add_consumption(consumption)

        logger.info(
            "consumption_complete",
            consumption_id=consumption.id,
            work_order=consumption.work_order_ref,
            skus=sorted(consumption.skus),
        )
        return consumption

    def to_response(self, consumption: Consumption) -> ConsumptionResponse:
        """Convert result to API response."""
        return consumption_response(consumption)
