"""
End-to-end inventory flows through the HTTP API.

Covers the worked scenarios: weighted-average receipt, rejected
over-consumption, adjustment to zero, and capped request fulfillment.
"""

import asyncio

import pytest
from httpx import AsyncClient


async def _register(client: AsyncClient, sku: str, qty: float = 0, cost: float = 0) -> None:
    response = await client.post(
        "/api/inventory/products",
        json={"sku": sku, "name": sku, "initial_quantity": qty, "initial_avg_cost": cost},
    )
    assert response.status_code == 201


async def _stock(client: AsyncClient, sku: str) -> dict:
    return (await client.get(f"/api/inventory/products/{sku}")).json()


class TestWeightedAverageFlow:
    async def test_receive_consume_adjust(self, api_client: AsyncClient):
        await _register(api_client, "A", qty=10, cost=100)

        # Receive 5 @ 130 -> 15 @ 110
        response = await api_client.post(
            "/api/receipts",
            json={
                "document_number": "F-1",
                "reception_date": "2024-03-04",
                "lines": [{"sku": "A", "quantity": 5, "unit_cost": 130}],
            },
        )
        assert response.status_code == 201
        stock = await _stock(api_client, "A")
        assert stock["quantity_on_hand"] == 15.0
        assert stock["avg_cost"] == pytest.approx(110.0)

        # Consume 20 -> rejected, unchanged
        response = await api_client.post(
            "/api/consumptions",
            json={"work_order_ref": "OT-1", "lines": [{"sku": "A", "quantity": 20}]},
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"
        stock = await _stock(api_client, "A")
        assert stock["quantity_on_hand"] == 15.0
        assert stock["avg_cost"] == pytest.approx(110.0)

        # Adjust -15 -> 0, then -1 -> rejected
        response = await api_client.post(
            "/api/inventory/adjustments",
            json={"sku": "A", "delta": -15, "reason": "write-off"},
        )
        assert response.status_code == 201
        assert (await _stock(api_client, "A"))["quantity_on_hand"] == 0.0

        response = await api_client.post(
            "/api/inventory/adjustments",
            json={"sku": "A", "delta": -1, "reason": "write-off"},
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "NEGATIVE_RESULTING_STOCK"

        # Kardex: receipt in, adjustment out; opening stock is not an event
        kardex = (await api_client.get("/api/inventory/products/A/kardex")).json()
        assert [e["kind"] for e in kardex["entries"]] == ["receipt", "negative_adjustment"]
        assert kardex["final_balance"] == -10.0


class TestMaterialRequestFlow:
    async def test_partial_then_capped_receipt(self, api_client: AsyncClient):
        await _register(api_client, "A")
        created = await api_client.post(
            "/api/material-requests",
            json={
                "requester_id": "U-7",
                "items": [{"description": "A", "requested_quantity": 10, "expected_sku": "A"}],
            },
        )
        request_id = created.json()["id"]

        for number, qty in (("F-1", 6), ("F-2", 10)):
            response = await api_client.post(
                "/api/receipts",
                json={
                    "document_number": number,
                    "material_request_id": request_id,
                    "lines": [{"sku": "A", "quantity": qty, "unit_cost": 50}],
                },
            )
            assert response.status_code == 201

        status = (await api_client.get(f"/api/material-requests/{request_id}/status")).json()
        assert status["status"] == "totally_received"
        assert status["items"][0]["status"] == "received"
        assert status["items"][0]["received_quantity"] == 10.0

        # Totally received is sticky: a later linked receipt still enters stock
        response = await api_client.post(
            "/api/receipts",
            json={
                "document_number": "F-3",
                "material_request_id": request_id,
                "lines": [{"sku": "A", "quantity": 1, "unit_cost": 50}],
            },
        )
        assert response.status_code == 201
        assert (await _stock(api_client, "A"))["quantity_on_hand"] == 17.0
        status = (await api_client.get(f"/api/material-requests/{request_id}/status")).json()
        assert status["status"] == "totally_received"
        assert status["items"][0]["received_quantity"] == 10.0


class TestConcurrentMutations:
    async def test_concurrent_receipts_do_not_lose_updates(self, api_client: AsyncClient):
        await _register(api_client, "A")

        async def receive(n: int):
            return await api_client.post(
                "/api/receipts",
                json={
                    "document_number": f"F-{n}",
                    "lines": [{"sku": "A", "quantity": 1, "unit_cost": 10}],
                },
            )

        responses = await asyncio.gather(*(receive(n) for n in range(20)))
        assert all(r.status_code == 201 for r in responses)
        stock = await _stock(api_client, "A")
        assert stock["quantity_on_hand"] == 20.0
        assert stock["avg_cost"] == pytest.approx(10.0)

    async def test_concurrent_consumptions_never_oversell(self, api_client: AsyncClient):
        await _register(api_client, "A", qty=5, cost=1)

        async def consume(n: int):
            return await api_client.post(
                "/api/consumptions",
                json={"work_order_ref": f"OT-{n}", "lines": [{"sku": "A", "quantity": 1}]},
            )

        responses = await asyncio.gather(*(consume(n) for n in range(8)))
        assert sorted(r.status_code for r in responses) == [201] * 5 + [409] * 3
        assert (await _stock(api_client, "A"))["quantity_on_hand"] == 0.0
