"""API tests for material request endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def request_id(api_client: AsyncClient) -> str:
    await api_client.post("/api/inventory/products", json={"sku": "A", "name": "Alpha"})
    response = await api_client.post(
        "/api/material-requests",
        json={
            "requester_id": "U-7",
            "items": [
                {"description": "Alpha", "requested_quantity": 10, "expected_sku": "A"},
                {"description": "Other", "requested_quantity": 1},
            ],
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestMaterialRequestsAPI:
    async def test_create_and_get(self, api_client: AsyncClient, request_id):
        response = await api_client.get(f"/api/material-requests/{request_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "open"
        assert [i["id"] for i in data["items"]] == [f"{request_id}-01", f"{request_id}-02"]

    async def test_create_without_items_returns_400(self, api_client: AsyncClient):
        response = await api_client.post("/api/material-requests", json={"requester_id": "U-1"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MATERIAL_REQUEST"

    async def test_linked_receipt_updates_status(self, api_client: AsyncClient, request_id):
        response = await api_client.post(
            "/api/receipts",
            json={
                "document_number": "F-1",
                "material_request_id": request_id,
                "lines": [{"sku": "A", "quantity": 6, "unit_cost": 10}],
            },
        )
        assert response.status_code == 201
        assert response.json()["material_request"]["status"] == "partially_received"

        status = await api_client.get(f"/api/material-requests/{request_id}/status")
        items = status.json()["items"]
        assert items[0]["status"] == "partially_received"
        assert items[0]["received_quantity"] == 6.0
        assert items[1]["status"] == "pending"

    async def test_procure_and_cancel_item(self, api_client: AsyncClient, request_id):
        procured = await api_client.post(
            f"/api/material-requests/{request_id}/items/{request_id}-02/procure"
        )
        assert procured.status_code == 200
        assert procured.json()["status"] == "in_procurement"

        again = await api_client.post(
            f"/api/material-requests/{request_id}/items/{request_id}-02/procure"
        )
        assert again.status_code == 400

        cancelled = await api_client.post(
            f"/api/material-requests/{request_id}/items/{request_id}-02/cancel"
        )
        assert cancelled.json()["items"][1]["status"] == "cancelled"

        missing = await api_client.post(
            f"/api/material-requests/{request_id}/items/{request_id}-99/cancel"
        )
        assert missing.status_code == 404

    async def test_cancelled_request_still_receives_stock(
        self, api_client: AsyncClient, request_id
    ):
        cancelled = await api_client.post(f"/api/material-requests/{request_id}/cancel")
        assert cancelled.json()["status"] == "cancelled"

        response = await api_client.post(
            "/api/receipts",
            json={
                "document_number": "F-1",
                "material_request_id": request_id,
                "lines": [{"sku": "A", "quantity": 1, "unit_cost": 10}],
            },
        )
        assert response.status_code == 201
        assert response.json()["material_request"]["status"] == "cancelled"

        product = (await api_client.get("/api/inventory/products/A")).json()
        assert product["quantity_on_hand"] == 1.0
        request = (await api_client.get(f"/api/material-requests/{request_id}")).json()
        assert request["status"] == "cancelled"
        assert request["items"][0]["received_quantity"] == 0.0
        assert request["linked_receipt_ids"] == [response.json()["receipt"]["id"]]

    async def test_list_by_status(self, api_client: AsyncClient, request_id):
        await api_client.post(f"/api/material-requests/{request_id}/cancel")
        open_requests = await api_client.get("/api/material-requests", params={"status": "open"})
        assert open_requests.json() == []
        cancelled = await api_client.get("/api/material-requests", params={"status": "cancelled"})
        assert [r["id"] for r in cancelled.json()] == [request_id]

    async def test_unknown_request(self, api_client: AsyncClient):
        response = await api_client.get("/api/material-requests/SM-0404/status")
        assert response.status_code == 404
        assert response.json()["error_code"] == "MATERIAL_REQUEST_NOT_FOUND"
