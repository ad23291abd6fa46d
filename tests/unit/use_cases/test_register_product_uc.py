"""Tests for RegisterProductUseCase and GetStockRecordUseCase."""

import math

import pytest

from stockledger.application.dto.requests import RegisterProductRequest
from stockledger.application.use_cases.get_stock_record import GetStockRecordUseCase
from stockledger.application.use_cases.register_product import RegisterProductUseCase
from stockledger.core.exceptions import (
    DuplicateSkuError,
    InvalidCostError,
    InvalidQuantityError,
    StockLedgerError,
    UnknownSkuError,
)


class TestRegisterProductUseCase:
    async def test_register(self, inventory_store):
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        record = await use_case.execute(
            RegisterProductRequest(
                sku="BOLT-M8",
                name="Bolt M8",
                initial_quantity=10.0,
                initial_avg_cost=100.0,
                min_stock=5.0,
                max_stock=50.0,
            )
        )
        assert record.quantity_on_hand == 10.0
        assert record.unit == "unit"
        stored = await inventory_store.get_record("BOLT-M8")
        assert stored.avg_cost == 100.0

    async def test_default_unit_from_settings(self, inventory_store, monkeypatch):
        monkeypatch.setenv("INVENTORY_DEFAULT_UNIT", "kg")
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        record = await use_case.execute(RegisterProductRequest(sku="SAND", name="Sand"))
        assert record.unit == "kg"

    async def test_duplicate(self, inventory_store):
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        await use_case.execute(RegisterProductRequest(sku="A", name="Alpha"))
        with pytest.raises(DuplicateSkuError):
            await use_case.execute(RegisterProductRequest(sku="A", name="Alpha again"))

    async def test_negative_opening_quantity(self, inventory_store):
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        with pytest.raises(InvalidQuantityError):
            await use_case.execute(
                RegisterProductRequest(sku="A", name="Alpha", initial_quantity=-1.0)
            )

    async def test_negative_opening_cost(self, inventory_store):
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        with pytest.raises(InvalidCostError):
            await use_case.execute(
                RegisterProductRequest(sku="A", name="Alpha", initial_avg_cost=-1.0)
            )

    @pytest.mark.parametrize(
        ("field", "error"),
        [("initial_quantity", InvalidQuantityError), ("initial_avg_cost", InvalidCostError)],
    )
    async def test_non_finite_opening_values(self, inventory_store, field, error):
        request = RegisterProductRequest.model_construct(sku="A", name="Alpha", **{field: math.nan})
        with pytest.raises(error):
            await RegisterProductUseCase(inventory_store=inventory_store).execute(request)
        assert await inventory_store.get_record("A") is None

    async def test_min_above_max(self, inventory_store):
        use_case = RegisterProductUseCase(inventory_store=inventory_store)
        with pytest.raises(StockLedgerError) as exc_info:
            await use_case.execute(
                RegisterProductRequest(sku="A", name="Alpha", min_stock=10.0, max_stock=1.0)
            )
        assert exc_info.value.code == "INVALID_PRODUCT"
        assert await inventory_store.get_record("A") is None


class TestGetStockRecordUseCase:
    async def test_found(self, inventory_store, stock_record):
        await inventory_store.create_record(stock_record)
        record = await GetStockRecordUseCase(inventory_store=inventory_store).execute("BOLT-M8")
        assert record.quantity_on_hand == 10.0

    async def test_unknown(self, inventory_store):
        with pytest.raises(UnknownSkuError):
            await GetStockRecordUseCase(inventory_store=inventory_store).execute("GHOST")
