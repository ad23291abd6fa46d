"""Register Product Use Case: catalog entry with an opening stock record."""

import math

from pydantic import ValidationError

from stockledger.application.dto.mappers import stock_record_response
from stockledger.application.dto.requests import RegisterProductRequest
from stockledger.application.dto.responses import StockRecordResponse
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import StockRecord
from stockledger.core.exceptions import InvalidCostError, InvalidQuantityError, StockLedgerError
from stockledger.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


class RegisterProductUseCase:
    """Create the stock record for a new SKU."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: RegisterProductRequest) -> StockRecord:
        """Execute register product use case."""
        logger.info("register_product_started", sku=request.sku)

        if not math.isfinite(request.initial_quantity) or request.initial_quantity < 0:
            raise InvalidQuantityError(
                request.initial_quantity, field="initial_quantity", sku=request.sku
            )
        if not math.isfinite(request.initial_avg_cost) or request.initial_avg_cost < 0:
            raise InvalidCostError(
                request.initial_avg_cost, field="initial_avg_cost", sku=request.sku
            )

        try:
            record = StockRecord(
                sku=request.sku,
                name=request.name,
                description=request.description,
                unit=request.unit or get_settings().inventory.default_unit,
                location=request.location,
                category_id=request.category_id,
                default_provider_id=request.default_provider_id,
                quantity_on_hand=request.initial_quantity,
                avg_cost=request.initial_avg_cost,
                min_stock=request.min_stock,
                max_stock=request.max_stock,
            )
        except ValidationError as e:
            logger.warning("register_product_rejected", sku=request.sku, error=str(e))
            raise StockLedgerError(
                f"Invalid product {request.sku}",
                code="INVALID_PRODUCT",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

        store = await self._get_inventory_store()
        async with store.lock(record.sku):
            record = await store.create_record(record)

        logger.info(
            "product_registered",
            sku=record.sku,
            qty=record.quantity_on_hand,
            avg_cost=record.avg_cost,
        )
        return record

    def to_response(self, record: StockRecord) -> StockRecordResponse:
        """Convert result to API response."""
        return stock_record_response(record)
