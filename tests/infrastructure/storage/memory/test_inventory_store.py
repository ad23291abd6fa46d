"""Tests for the in-memory inventory store."""

import asyncio
from datetime import UTC, date, datetime

import pytest

from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    ConsumptionLine,
    ReceiptDocument,
    ReceiptLine,
    StockRecord,
)
from stockledger.core.exceptions import DuplicateSkuError
from stockledger.infrastructure.storage.memory import MemoryInventoryStore


class TestStockRecords:
    async def test_create_and_get(self, inventory_store: MemoryInventoryStore):
        created = await inventory_store.create_record(StockRecord(sku="A", name="Alpha"))
        fetched = await inventory_store.get_record("A")
        assert fetched == created
        assert fetched.name == "Alpha"

    async def test_get_missing(self, inventory_store):
        assert await inventory_store.get_record("NOPE") is None

    async def test_duplicate_sku(self, inventory_store):
        await inventory_store.create_record(StockRecord(sku="A"))
        with pytest.raises(DuplicateSkuError):
            await inventory_store.create_record(StockRecord(sku="A"))

    async def test_reads_are_copies(self, inventory_store):
        await inventory_store.create_record(StockRecord(sku="A", quantity_on_hand=5.0))
        record = await inventory_store.get_record("A")
        record.quantity_on_hand = 999.0
        assert (await inventory_store.get_record("A")).quantity_on_hand == 5.0

    async def test_save_replaces(self, inventory_store):
        await inventory_store.create_record(StockRecord(sku="A"))
        record = await inventory_store.get_record("A")
        record.quantity_on_hand = 7.0
        await inventory_store.save_record(record)
        assert (await inventory_store.get_record("A")).quantity_on_hand == 7.0

    async def test_list_sorted_with_paging(self, inventory_store):
        for sku in ("C", "A", "B"):
            await inventory_store.create_record(StockRecord(sku=sku))
        assert [r.sku for r in await inventory_store.list_records()] == ["A", "B", "C"]
        assert [r.sku for r in await inventory_store.list_records(limit=1, offset=1)] == ["B"]


class TestEventHistories:
    async def test_receipt_ids_and_filter(self, inventory_store):
        first = await inventory_store.add_receipt(
            ReceiptDocument(
                document_number="F-1",
                reception_date=date(2024, 1, 1),
                lines=[ReceiptLine(sku="A", quantity=1.0, unit_cost=1.0)],
            )
        )
        second = await inventory_store.add_receipt(
            ReceiptDocument(
                document_number="F-2",
                reception_date=date(2024, 1, 2),
                lines=[ReceiptLine(sku="B", quantity=1.0, unit_cost=1.0)],
            )
        )
        assert (first.id, second.id) == ("REC-0001", "REC-0002")
        assert [d.id for d in await inventory_store.list_receipts(sku="B")] == ["REC-0002"]
        assert (await inventory_store.get_receipt("REC-0001")).document_number == "F-1"
        assert await inventory_store.get_receipt("REC-0404") is None

    async def test_consumption_delete(self, inventory_store):
        consumption = await inventory_store.add_consumption(
            Consumption(work_order_ref="OT-1", lines=[ConsumptionLine(sku="A", quantity=1.0)])
        )
        assert consumption.id == "CONS-0001"
        assert await inventory_store.delete_consumption("CONS-0001") is True
        assert await inventory_store.delete_consumption("CONS-0001") is False
        assert await inventory_store.list_consumptions() == []

    async def test_adjustments_in_order(self, inventory_store):
        now = datetime.now(UTC)
        for delta in (1.0, -1.0):
            await inventory_store.add_adjustment(
                AdjustmentEvent(sku="A", delta=delta, reason="count", timestamp=now)
            )
        await inventory_store.add_adjustment(AdjustmentEvent(sku="B", delta=2.0, reason="x"))
        adjustments = await inventory_store.list_adjustments(sku="A")
        assert [a.id for a in adjustments] == ["ADJ-0001", "ADJ-0002"]


class TestLocking:
    async def test_lock_serializes_same_sku(self, inventory_store):
        order: list[str] = []

        async def worker(name: str) -> None:
            async with inventory_store.lock("A", "B"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("one"), worker("two"))
        assert order in (
            ["one-in", "one-out", "two-in", "two-out"],
            ["two-in", "two-out", "one-in", "one-out"],
        )

    async def test_overlapping_sets_do_not_deadlock(self, inventory_store):
        async def worker(*skus: str) -> None:
            async with inventory_store.lock(*skus):
                await asyncio.sleep(0)

        await asyncio.wait_for(
            asyncio.gather(worker("A", "B"), worker("B", "A"), worker("B", "B")),
            timeout=1.0,
        )
