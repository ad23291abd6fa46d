"""Work-order consumption endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_delete_consumption_use_case,
    get_inv_store,
    get_record_consumption_use_case,
)
from stockledger.application.dto.mappers import consumption_response
from stockledger.application.dto.requests import RecordConsumptionRequest
from stockledger.application.dto.responses import ConsumptionResponse, ErrorResponse
from stockledger.application.use_cases import (
    DeleteConsumptionUseCase,
    RecordConsumptionUseCase,
)
from stockledger.core.interfaces import IInventoryStore

router = APIRouter(prefix="/api/consumptions", tags=["consumptions"])


@router.post(
    "",
    response_model=ConsumptionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_consumption(
    request: RecordConsumptionRequest,
    use_case: RecordConsumptionUseCase = Depends(get_record_consumption_use_case),
) -> ConsumptionResponse:
    """Record a work-order consumption (OUT movement with balance check)."""
    consumption = await use_case.execute(request)
    return use_case.to_response(consumption)


@router.get("", response_model=list[ConsumptionResponse])
async def list_consumptions(
    sku: str | None = None,
    store: IInventoryStore = Depends(get_inv_store),
) -> list[ConsumptionResponse]:
    """List consumptions in recording order, optionally for one SKU."""
    consumptions = await store.list_consumptions(sku=sku)
    return [consumption_response(c) for c in consumptions]


@router.delete(
    "/{consumption_id}",
    response_model=ConsumptionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_consumption(
    consumption_id: str,
    use_case: DeleteConsumptionUseCase = Depends(get_delete_consumption_use_case),
) -> ConsumptionResponse:
    """Delete a consumption and return its quantities to stock."""
    consumption = await use_case.execute(consumption_id)
    return consumption_response(consumption)
