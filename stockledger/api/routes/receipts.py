"""Goods-receipt endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import get_inv_store, get_post_receipt_use_case
from stockledger.application.dto.mappers import receipt_response
from stockledger.application.dto.requests import PostReceiptRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    PostReceiptResponse,
    ReceiptResponse,
)
from stockledger.application.use_cases import PostReceiptUseCase
from stockledger.core.exceptions import ReceiptNotFoundError
from stockledger.core.interfaces import IInventoryStore

router = APIRouter(prefix="/api/receipts", tags=["receipts"])


@router.post(
    "",
    response_model=PostReceiptResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def post_receipt(
    request: PostReceiptRequest,
    use_case: PostReceiptUseCase = Depends(get_post_receipt_use_case),
) -> PostReceiptResponse:
    """Post a goods-receipt document (WAC recalculation, request fulfillment)."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=list[ReceiptResponse])
async def list_receipts(
    sku: str | None = None,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[ReceiptResponse]:
    """List receipt documents in posting order, optionally for one SKU."""
    documents = await store.list_receipts(sku=sku)
    return [receipt_response(d) for d in documents]


@router.get(
    "/{receipt_id}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_receipt(
    receipt_id: str,
    store: IInventoryStore = Depends(get_inv_store),
) -> ReceiptResponse:
    """Get a receipt document by ID."""
    document = await store.get_receipt(receipt_id)
    if document is None:
        raise ReceiptNotFoundError(receipt_id)
    return receipt_response(document)
