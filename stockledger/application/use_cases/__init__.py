"""Application use cases."""

from stockledger.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from stockledger.application.use_cases.create_material_request import (
    CreateMaterialRequestUseCase,
)
from stockledger.application.use_cases.delete_consumption import DeleteConsumptionUseCase
from stockledger.application.use_cases.get_kardex import GetKardexUseCase, KardexResult
from stockledger.application.use_cases.get_stock_record import GetStockRecordUseCase
from stockledger.application.use_cases.inventory_reports import InventoryReportsUseCase
from stockledger.application.use_cases.manage_material_request import (
    CancelMaterialRequestUseCase,
    CancelRequestItemUseCase,
    GetRequestStatusUseCase,
    MarkItemInProcurementUseCase,
)
from stockledger.application.use_cases.post_receipt import PostReceiptResult, PostReceiptUseCase
from stockledger.application.use_cases.record_consumption import RecordConsumptionUseCase
from stockledger.application.use_cases.register_product import RegisterProductUseCase

__all__ = [
    "RegisterProductUseCase",
    "GetStockRecordUseCase",
    "PostReceiptUseCase",
    "PostReceiptResult",
    "RecordConsumptionUseCase",
    "DeleteConsumptionUseCase",
    "AdjustStockUseCase",
    "AdjustStockResult",
    "GetKardexUseCase",
    "KardexResult",
    "CreateMaterialRequestUseCase",
    "GetRequestStatusUseCase",
    "CancelMaterialRequestUseCase",
    "CancelRequestItemUseCase",
    "MarkItemInProcurementUseCase",
    "InventoryReportsUseCase",
]
