"""API tests for product, kardex and adjustment endpoints."""

from unittest.mock import AsyncMock

import pytest

from httpx import ASGITransport, AsyncClient

from stockledger.api.dependencies import get_register_product_use_case
from stockledger.api.main import app
from stockledger.core.exceptions import DuplicateSkuError

PRODUCT = {
    "sku": "BOLT-M8",
    "name": "Bolt M8",
    "initial_quantity": 10,
    "initial_avg_cost": 100,
    "min_stock": 5,
    "max_stock": 50,
}


class TestProductsAPI:
    async def test_register_returns_201(self, api_client: AsyncClient):
        response = await api_client.post("/api/inventory/products", json=PRODUCT)
        assert response.status_code == 201
        data = response.json()
        assert data["sku"] == "BOLT-M8"
        assert data["total_value"] == 1000.0
        assert data["stock_status"] == "normal"
        assert data["alert_level"] == "ok"

    async def test_duplicate_returns_409(self, api_client: AsyncClient):
        await api_client.post("/api/inventory/products", json=PRODUCT)
        response = await api_client.post("/api/inventory/products", json=PRODUCT)
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_SKU"

    async def test_missing_name_returns_422(self, api_client: AsyncClient):
        response = await api_client.post("/api/inventory/products", json={"sku": "A"})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "name" in data["detail"]

    async def test_min_above_max_returns_400(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/inventory/products",
            json={"sku": "A", "name": "Alpha", "min_stock": 9, "max_stock": 1},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PRODUCT"

    async def test_list_and_get(self, api_client: AsyncClient):
        await api_client.post("/api/inventory/products", json=PRODUCT)
        await api_client.post("/api/inventory/products", json={"sku": "A-1", "name": "Alpha"})

        listing = await api_client.get("/api/inventory/products")
        assert listing.status_code == 200
        assert [p["sku"] for p in listing.json()["items"]] == ["A-1", "BOLT-M8"]

        single = await api_client.get("/api/inventory/products/BOLT-M8")
        assert single.json()["avg_cost"] == 100.0

    async def test_unknown_sku_returns_404_with_hint(self, api_client: AsyncClient):
        response = await api_client.get("/api/inventory/products/GHOST")
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "UNKNOWN_SKU"
        assert "POST /api/inventory/products" in data["hint"]
        assert data["path"] == "/api/inventory/products/GHOST"


class TestAdjustmentsAPI:
    async def test_adjust_and_reject_negative(self, api_client: AsyncClient):
        await api_client.post("/api/inventory/products", json=PRODUCT)

        ok = await api_client.post(
            "/api/inventory/adjustments",
            json={"sku": "BOLT-M8", "delta": -10, "reason": "count"},
        )
        assert ok.status_code == 201
        assert ok.json()["stock_record"]["quantity_on_hand"] == 0.0
        assert ok.json()["stock_record"]["alert_level"] == "low"

        rejected = await api_client.post(
            "/api/inventory/adjustments",
            json={"sku": "BOLT-M8", "delta": -1, "reason": "count"},
        )
        assert rejected.status_code == 409
        assert rejected.json()["error_code"] == "NEGATIVE_RESULTING_STOCK"

    async def test_zero_delta_returns_400(self, api_client: AsyncClient):
        await api_client.post("/api/inventory/products", json=PRODUCT)
        response = await api_client.post(
            "/api/inventory/adjustments",
            json={"sku": "BOLT-M8", "delta": 0, "reason": "noop"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ADJUSTMENT"


class TestKardexAPI:
    async def test_kardex(self, api_client: AsyncClient):
        await api_client.post("/api/inventory/products", json={"sku": "A", "name": "Alpha"})
        await api_client.post(
            "/api/receipts",
            json={
                "document_number": "F-1",
                "reception_date": "2024-01-01",
                "lines": [{"sku": "A", "quantity": 10, "unit_cost": 100}],
            },
        )
        await api_client.post(
            "/api/inventory/adjustments", json={"sku": "A", "delta": -2, "reason": "loss"}
        )

        response = await api_client.get("/api/inventory/products/A/kardex")
        assert response.status_code == 200
        data = response.json()
        assert [e["kind"] for e in data["entries"]] == ["receipt", "negative_adjustment"]
        assert data["final_balance"] == 8.0
        assert data["quantity_on_hand"] == 8.0

    async def test_kardex_unknown_sku(self, api_client: AsyncClient):
        response = await api_client.get("/api/inventory/products/GHOST/kardex")
        assert response.status_code == 404

    @pytest.mark.parametrize("limit", [0, -1, -5])
    async def test_kardex_limit_below_one_returns_422(self, api_client: AsyncClient, limit):
        await api_client.post("/api/inventory/products", json={"sku": "A", "name": "Alpha"})
        response = await api_client.get(f"/api/inventory/products/A/kardex?limit={limit}")
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestNonFiniteNumbers:
    """NaN and Infinity in a JSON body are refused before reaching the ledger."""

    @pytest.mark.parametrize(
        ("path", "body"),
        [
            ("/api/consumptions", '{"work_order_ref":"OT-1","lines":[{"sku":"A","quantity":NaN}]}'),
            (
                "/api/receipts",
                '{"document_number":"F-1","lines":[{"sku":"A","quantity":Infinity,"unit_cost":5}]}',
            ),
            (
                "/api/receipts",
                '{"document_number":"F-1","lines":[{"sku":"A","quantity":1,"unit_cost":NaN}]}',
            ),
            ("/api/inventory/adjustments", '{"sku": "A", "delta": NaN, "reason": "count"}'),
            ("/api/inventory/adjustments", '{"sku": "A", "delta": -Infinity, "reason": "count"}'),
        ],
    )
    async def test_non_finite_returns_422(self, api_client: AsyncClient, path, body):
        await api_client.post(
            "/api/inventory/products",
            json={"sku": "A", "name": "Alpha", "initial_quantity": 10, "initial_avg_cost": 2},
        )

        response = await api_client.post(
            path, content=body, headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 422

        product = (await api_client.get("/api/inventory/products/A")).json()
        assert product["quantity_on_hand"] == 10.0
        assert product["avg_cost"] == 2.0

        # The balance check still holds afterwards
        response = await api_client.post(
            "/api/consumptions",
            json={"work_order_ref": "OT-2", "lines": [{"sku": "A", "quantity": 11}]},
        )
        assert response.status_code == 409


class TestUseCaseOverride:
    async def test_register_with_mocked_use_case(self):
        """Test domain errors from an overridden use case map to HTTP codes."""
        uc = AsyncMock()
        uc.execute.side_effect = DuplicateSkuError("BOLT-M8")
        app.dependency_overrides[get_register_product_use_case] = lambda: uc
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                response = await ac.post("/api/inventory/products", json=PRODUCT)
        finally:
            app.dependency_overrides.pop(get_register_product_use_case, None)

        assert response.status_code == 409
        uc.execute.assert_called_once()
