"""Material request endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_cancel_material_request_use_case,
    get_cancel_request_item_use_case,
    get_create_material_request_use_case,
    get_mark_in_procurement_use_case,
    get_mr_store,
    get_request_status_use_case,
)
from stockledger.application.dto.mappers import material_request_response
from stockledger.application.dto.requests import CreateMaterialRequestRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    MaterialRequestResponse,
    MaterialRequestStatusResponse,
)
from stockledger.application.use_cases import (
    CancelMaterialRequestUseCase,
    CancelRequestItemUseCase,
    CreateMaterialRequestUseCase,
    GetRequestStatusUseCase,
    MarkItemInProcurementUseCase,
)
from stockledger.core.entities import RequestStatus
from stockledger.core.interfaces import IMaterialRequestStore

router = APIRouter(prefix="/api/material-requests", tags=["material-requests"])


@router.post(
    "",
    response_model=MaterialRequestResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_material_request(
    request: CreateMaterialRequestRequest,
    use_case: CreateMaterialRequestUseCase = Depends(get_create_material_request_use_case),
) -> MaterialRequestResponse:
    """Open a material request."""
    material_request = await use_case.execute(request)
    return use_case.to_response(material_request)


@router.get("", response_model=list[MaterialRequestResponse])
async def list_material_requests(
    status: RequestStatus | None = None,
    store: IMaterialRequestStore = Depends(get_mr_store),
) -> list[MaterialRequestResponse]:
    """List material requests, newest first, optionally by status."""
    requests = await store.list_requests(status=status)
    return [material_request_response(r) for r in requests]


@router.get(
    "/{request_id}",
    response_model=MaterialRequestResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_material_request(
    request_id: str,
    use_case: GetRequestStatusUseCase = Depends(get_request_status_use_case),
) -> MaterialRequestResponse:
    """Get a material request with its items."""
    material_request = await use_case.execute(request_id)
    return material_request_response(material_request)


@router.get(
    "/{request_id}/status",
    response_model=MaterialRequestStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_request_status(
    request_id: str,
    use_case: GetRequestStatusUseCase = Depends(get_request_status_use_case),
) -> MaterialRequestStatusResponse:
    """Aggregate and per-item fulfillment status."""
    material_request = await use_case.execute(request_id)
    return use_case.to_response(material_request)


@router.post(
    "/{request_id}/cancel",
    response_model=MaterialRequestStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def cancel_material_request(
    request_id: str,
    use_case: CancelMaterialRequestUseCase = Depends(get_cancel_material_request_use_case),
) -> MaterialRequestStatusResponse:
    """Cancel a request; items with receipts keep their status."""
    material_request = await use_case.execute(request_id)
    return use_case.to_response(material_request)


@router.post(
    "/{request_id}/items/{item_id}/cancel",
    response_model=MaterialRequestStatusResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def cancel_request_item(
    request_id: str,
    item_id: str,
    use_case: CancelRequestItemUseCase = Depends(get_cancel_request_item_use_case),
) -> MaterialRequestStatusResponse:
    """Cancel a single item that has not received anything."""
    material_request = await use_case.execute(request_id, item_id)
    return use_case.to_response(material_request)


@router.post(
    "/{request_id}/items/{item_id}/procure",
    response_model=MaterialRequestStatusResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def mark_item_in_procurement(
    request_id: str,
    item_id: str,
    use_case: MarkItemInProcurementUseCase = Depends(get_mark_in_procurement_use_case),
) -> MaterialRequestStatusResponse:
    """Mark a pending item as being purchased."""
    material_request = await use_case.execute(request_id, item_id)
    return use_case.to_response(material_request)
