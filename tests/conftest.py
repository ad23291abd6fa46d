"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from stockledger.api.dependencies import get_inv_store, get_mr_store
from stockledger.api.main import app
from stockledger.config import reset_settings
from stockledger.core.entities.inventory import (
    ReceiptDocument,
    ReceiptLine,
    StockRecord,
)
from stockledger.core.entities.material_request import MaterialRequest, MaterialRequestItem
from stockledger.infrastructure.storage.memory import (
    MemoryInventoryStore,
    MemoryMaterialRequestStore,
    reset_stores,
)


@pytest.fixture(autouse=True)
def _fresh_singletons():
    """Each test starts with default settings and empty singleton stores."""
    reset_settings()
    reset_stores()
    yield
    reset_settings()
    reset_stores()


@pytest.fixture
def inventory_store() -> MemoryInventoryStore:
    return MemoryInventoryStore()


@pytest.fixture
def material_request_store() -> MemoryMaterialRequestStore:
    return MemoryMaterialRequestStore()


@pytest.fixture
def stock_record() -> StockRecord:
    """The worked example: 10 units at an average cost of 100."""
    return StockRecord(
        sku="BOLT-M8",
        name="Bolt M8",
        quantity_on_hand=10.0,
        avg_cost=100.0,
        min_stock=5.0,
        max_stock=50.0,
    )


@pytest.fixture
def sample_receipt() -> ReceiptDocument:
    return ReceiptDocument(
        document_number="F-1001",
        provider_id="PROV-1",
        provider_name="Ferreteria Sur",
        issue_date=date(2024, 3, 1),
        reception_date=date(2024, 3, 4),
        lines=[ReceiptLine(sku="BOLT-M8", quantity=5.0, unit_cost=130.0)],
    )


@pytest.fixture
def sample_request() -> MaterialRequest:
    return MaterialRequest(
        requester_id="U-7",
        requester_name="Maintenance",
        items=[
            MaterialRequestItem(
                description="Bolts M8",
                requested_quantity=10.0,
                expected_sku="BOLT-M8",
            )
        ],
    )


@pytest.fixture
async def api_client(
    inventory_store: MemoryInventoryStore,
    material_request_store: MemoryMaterialRequestStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Async client over the real app wired to per-test in-memory stores."""
    app.dependency_overrides[get_inv_store] = lambda: inventory_store
    app.dependency_overrides[get_mr_store] = lambda: material_request_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_inv_store, None)
    app.dependency_overrides.pop(get_mr_store, None)
