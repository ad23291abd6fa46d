"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Use cases are
built from the store dependencies, so overriding a store in
``app.dependency_overrides`` reaches every use case that needs it.
"""

from functools import lru_cache

from fastapi import Depends

from stockledger.application.use_cases import (
    AdjustStockUseCase,
    CancelMaterialRequestUseCase,
    CancelRequestItemUseCase,
    CreateMaterialRequestUseCase,
    DeleteConsumptionUseCase,
    GetKardexUseCase,
    GetRequestStatusUseCase,
    GetStockRecordUseCase,
    InventoryReportsUseCase,
    MarkItemInProcurementUseCase,
    PostReceiptUseCase,
    RecordConsumptionUseCase,
    RegisterProductUseCase,
)
from stockledger.config import Settings, get_settings
from stockledger.core.interfaces import IInventoryStore, IMaterialRequestStore
from stockledger.core.services import InventoryReporter
from stockledger.infrastructure.storage.memory import (
    get_inventory_store,
    get_material_request_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_inv_store() -> IInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_mr_store() -> IMaterialRequestStore:
    """Get material request store."""
    return await get_material_request_store()


def get_reporter(settings: Settings = Depends(get_app_settings)) -> InventoryReporter:
    """Get inventory reporter configured with the low-stock warning margin."""
    return InventoryReporter(warning_margin=settings.inventory.low_stock_warning_margin)


# Use case dependencies
def get_register_product_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> RegisterProductUseCase:
    """Get register product use case."""
    return RegisterProductUseCase(inventory_store=store)


def get_stock_record_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> GetStockRecordUseCase:
    """Get stock record lookup use case."""
    return GetStockRecordUseCase(inventory_store=store)


def get_post_receipt_use_case(
    store: IInventoryStore = Depends(get_inv_store),
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> PostReceiptUseCase:
    """Get post receipt use case."""
    return PostReceiptUseCase(inventory_store=store, material_request_store=mr_store)


def get_record_consumption_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> RecordConsumptionUseCase:
    """Get record consumption use case."""
    return RecordConsumptionUseCase(inventory_store=store)


def get_delete_consumption_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> DeleteConsumptionUseCase:
    """Get delete consumption use case."""
    return DeleteConsumptionUseCase(inventory_store=store)


def get_adjust_stock_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase(inventory_store=store)


def get_kardex_use_case(
    store: IInventoryStore = Depends(get_inv_store),
) -> GetKardexUseCase:
    """Get kardex use case."""
    return GetKardexUseCase(inventory_store=store)


def get_create_material_request_use_case(
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> CreateMaterialRequestUseCase:
    """Get create material request use case."""
    return CreateMaterialRequestUseCase(material_request_store=mr_store)


def get_request_status_use_case(
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> GetRequestStatusUseCase:
    """Get material request status use case."""
    return GetRequestStatusUseCase(material_request_store=mr_store)


def get_cancel_material_request_use_case(
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> CancelMaterialRequestUseCase:
    """Get cancel material request use case."""
    return CancelMaterialRequestUseCase(material_request_store=mr_store)


def get_cancel_request_item_use_case(
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> CancelRequestItemUseCase:
    """Get cancel request item use case."""
    return CancelRequestItemUseCase(material_request_store=mr_store)


def get_mark_in_procurement_use_case(
    mr_store: IMaterialRequestStore = Depends(get_mr_store),
) -> MarkItemInProcurementUseCase:
    """Get mark item in procurement use case."""
    return MarkItemInProcurementUseCase(material_request_store=mr_store)


def get_reports_use_case(
    store: IInventoryStore = Depends(get_inv_store),
    reporter: InventoryReporter = Depends(get_reporter),
) -> InventoryReportsUseCase:
    """Get inventory reports use case."""
    return InventoryReportsUseCase(inventory_store=store, reporter=reporter)
