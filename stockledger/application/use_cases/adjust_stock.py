"""Adjust Stock Use Case: manual signed correction of on-hand quantity."""

from dataclasses import dataclass
from datetime import UTC, datetime

from stockledger.application.dto.mappers import adjustment_response
from stockledger.application.dto.requests import AdjustStockRequest
from stockledger.application.dto.responses import AdjustmentResponse
from stockledger.config import get_logger
from stockledger.core.entities.inventory import AdjustmentEvent, StockRecord
from stockledger.core.exceptions import StockLedgerError, UnknownSkuError
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.movements import MovementMutator

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a stock adjustment."""

    adjustment: AdjustmentEvent
    stock_record: StockRecord


class AdjustStockUseCase:
    """Apply a manual adjustment and record it for the Kardex."""

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

    async def execute(self, request: AdjustStockRequest) -> AdjustStockResult:
        """Execute adjust stock use case."""
        logger.info(
            "adjust_stock_started",
            sku=request.sku,
            delta=request.delta,
        )

        adjustment = AdjustmentEvent(
            sku=request.sku,
            delta=request.delta,
            reason=request.reason,
            actor=request.actor,
            timestamp=request.timestamp or datetime.now(UTC),
        )

        store = await self._get_inventory_store()
        try:
            async with store.lock(adjustment.sku):
                record = await store.get_record(adjustment.sku)
                if record is None:
                    raise UnknownSkuError(adjustment.sku)

                old_qty = record.quantity_on_hand
                self._mutator.apply_adjustment(record, adjustment)
                record = await store.save_record(record)
                adjustment = await store.add_adjustment(adjustment)
        except StockLedgerError as e:
            logger.warning("adjust_stock_rejected", sku=adjustment.sku, error=e.code)
            raise

        logger.info(
            "stock_adjusted",
            adjustment_id=adjustment.id,
            sku=record.sku,
            old_qty=old_qty,
            new_qty=record.quantity_on_hand,
            reason=adjustment.reason,
        )
        return AdjustStockResult(adjustment=adjustment, stock_record=record)

    def to_response(self, result: AdjustStockResult) -> AdjustmentResponse:
        """Convert result to API response."""
        return adjustment_response(result.adjustment, result.stock_record)
