"""Tests for RecordConsumptionUseCase and DeleteConsumptionUseCase."""

import pytest

from stockledger.application.dto.requests import ConsumptionLineRequest, RecordConsumptionRequest
from stockledger.application.use_cases.delete_consumption import DeleteConsumptionUseCase
from stockledger.application.use_cases.record_consumption import RecordConsumptionUseCase
from stockledger.core.entities.inventory import StockRecord
from stockledger.core.exceptions import (
    ConsumptionNotFoundError,
    InsufficientStockError,
    InvalidQuantityError,
    UnknownSkuError,
)


def _request(*lines: tuple[str, float]) -> RecordConsumptionRequest:
    return RecordConsumptionRequest(
        work_order_ref="OT-42",
        requester_name="Maintenance",
        lines=[ConsumptionLineRequest(sku=sku, quantity=qty) for sku, qty in lines],
    )


@pytest.fixture
async def stocked_store(inventory_store):
    await inventory_store.create_record(StockRecord(sku="A", quantity_on_hand=15.0, avg_cost=110.0))
    await inventory_store.create_record(StockRecord(sku="B", quantity_on_hand=2.0, avg_cost=5.0))
    return inventory_store


class TestRecordConsumption:
    async def test_stock_decremented(self, stocked_store):
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        consumption = await use_case.execute(_request(("A", 5.0), ("B", 2.0)))

        assert consumption.id == "CONS-0001"
        a = await stocked_store.get_record("A")
        assert a.quantity_on_hand == 10.0
        assert a.avg_cost == 110.0
        assert (await stocked_store.get_record("B")).quantity_on_hand == 0.0

    async def test_insufficient_stock_leaves_all_records(self, stocked_store):
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        with pytest.raises(InsufficientStockError):
            await use_case.execute(_request(("A", 20.0)))
        assert (await stocked_store.get_record("A")).quantity_on_hand == 15.0
        assert await stocked_store.list_consumptions() == []

    async def test_demand_summed_across_lines(self, stocked_store):
        """Two lines that each fit but together exceed stock are rejected."""
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        with pytest.raises(InsufficientStockError) as exc_info:
            await use_case.execute(_request(("B", 1.5), ("A", 1.0), ("B", 1.5)))
        assert exc_info.value.details["requested"] == 3.0
        assert (await stocked_store.get_record("A")).quantity_on_hand == 15.0

    async def test_unknown_sku(self, stocked_store):
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        with pytest.raises(UnknownSkuError):
            await use_case.execute(_request(("A", 1.0), ("GHOST", 1.0)))
        assert (await stocked_store.get_record("A")).quantity_on_hand == 15.0

    async def test_zero_quantity(self, stocked_store):
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        with pytest.raises(InvalidQuantityError):
            await use_case.execute(_request(("A", 0.0)))

    async def test_to_response(self, stocked_store):
        use_case = RecordConsumptionUseCase(inventory_store=stocked_store)
        response = use_case.to_response(await use_case.execute(_request(("A", 1.0))))
        assert response.work_order_ref == "OT-42"
        assert response.lines[0].quantity == 1.0


class TestDeleteConsumption:
    async def test_credits_stock_back(self, stocked_store):
        recorded = await RecordConsumptionUseCase(inventory_store=stocked_store).execute(
            _request(("A", 5.0), ("A", 1.0))
        )

        deleted = await DeleteConsumptionUseCase(inventory_store=stocked_store).execute(
            recorded.id
        )

        assert deleted.id == recorded.id
        record = await stocked_store.get_record("A")
        assert record.quantity_on_hand == 15.0
        assert record.avg_cost == 110.0
        assert await stocked_store.list_consumptions() == []

    async def test_unknown_id(self, stocked_store):
        with pytest.raises(ConsumptionNotFoundError):
            await DeleteConsumptionUseCase(inventory_store=stocked_store).execute("CONS-9999")
