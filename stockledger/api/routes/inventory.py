"""Inventory management endpoints."""

from fastapi import APIRouter, Depends, Query, status

from stockledger.api.dependencies import (
    get_adjust_stock_use_case,
    get_inv_store,
    get_kardex_use_case,
    get_register_product_use_case,
    get_reporter,
    get_stock_record_use_case,
)
from stockledger.application.dto.mappers import stock_record_response
from stockledger.application.dto.requests import AdjustStockRequest, RegisterProductRequest
from stockledger.application.dto.responses import (
    AdjustmentResponse,
    ErrorResponse,
    KardexResponse,
    StockRecordListResponse,
    StockRecordResponse,
)
from stockledger.application.use_cases import (
    AdjustStockUseCase,
    GetKardexUseCase,
    GetStockRecordUseCase,
    RegisterProductUseCase,
)
from stockledger.core.interfaces import IInventoryStore
from stockledger.core.services import InventoryReporter

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/products",
    response_model=StockRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register_product(
    request: RegisterProductRequest,
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
    reporter: InventoryReporter = Depends(get_reporter),
) -> StockRecordResponse:
    """Register a product and its opening stock."""
    record = await use_case.execute(request)
    return stock_record_response(record, reporter)


@router.get("/products", response_model=StockRecordListResponse)
async def list_products(
    limit: int = 100,
    offset: int = 0,
    store: IInventoryStore = Depends(get_inv_store),
    reporter: InventoryReporter = Depends(get_reporter),
) -> StockRecordListResponse:
    """Get current stock for all products, ordered by SKU."""
    records = await store.list_records(limit=limit, offset=offset)
    return StockRecordListResponse(
        items=[stock_record_response(r, reporter) for r in records],
        total=len(records),
    )


@router.get(
    "/products/{sku}",
    response_model=StockRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    sku: str,
    use_case: GetStockRecordUseCase = Depends(get_stock_record_use_case),
    reporter: InventoryReporter = Depends(get_reporter),
) -> StockRecordResponse:
    """Quantity, average cost and thresholds for one SKU."""
    record = await use_case.execute(sku)
    return stock_record_response(record, reporter)


@router.get(
    "/products/{sku}/kardex",
    response_model=KardexResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_kardex(
    sku: str,
    limit: int | None = Query(
        default=None, ge=1, le=10_000, description="Most recent entries to return"
    ),
    use_case: GetKardexUseCase = Depends(get_kardex_use_case),
) -> KardexResponse:
    """Chronological movement ledger with running balance."""
    result = await use_case.execute(sku, limit=limit)
    return use_case.to_response(result)


@router.post(
    "/adjustments",
    response_model=AdjustmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> AdjustmentResponse:
    """Manual stock adjustment (signed delta with a reason)."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
