"""Create Material Request Use Case."""

import math
from datetime import date

from stockledger.application.dto.mappers import material_request_response
from stockledger.application.dto.requests import CreateMaterialRequestRequest
from stockledger.application.dto.responses import MaterialRequestResponse
from stockledger.config import get_logger
from stockledger.core.entities.material_request import (
    MaterialRequest,
    MaterialRequestItem,
    RequestItemStatus,
    RequestStatus,
)
from stockledger.core.exceptions import InvalidMaterialRequestError, InvalidQuantityError
from stockledger.core.interfaces.material_request_store import IMaterialRequestStore

logger = get_logger(__name__)


class CreateMaterialRequestUseCase:
    """Open a material request with its items pending."""

    def __init__(self, material_request_store: IMaterialRequestStore | None = None):
        self._material_request_store = material_request_store

    async def _get_material_request_store(self) -> IMaterialRequestStore:
        if self._material_request_store is None:
            from stockledger.infrastructure.storage.memory import get_material_request_store

            self._material_request_store = await get_material_request_store()
        return self._material_request_store

    async def execute(self, request: CreateMaterialRequestRequest) -> MaterialRequest:
        """Execute create material request use case."""
        if not request.items:
            raise InvalidMaterialRequestError("at least one item is required")
        for item in request.items:
            if not math.isfinite(item.requested_quantity) or item.requested_quantity <= 0:
                raise InvalidQuantityError(
                    item.requested_quantity,
                    field="requested_quantity",
                    sku=item.expected_sku,
                )

        material_request = MaterialRequest(
            requester_id=request.requester_id,
            requester_name=request.requester_name,
            request_date=request.request_date or date.today(),
            notes=request.notes,
            status=RequestStatus.OPEN,
            items=[
                MaterialRequestItem(
                    description=item.description,
                    requested_quantity=item.requested_quantity,
                    received_quantity=0.0,
                    expected_sku=item.expected_sku,
                    suggested_unit=item.suggested_unit,
                    suggested_provider_id=item.suggested_provider_id,
                    status=RequestItemStatus.PENDING,
                )
                for item in request.items
            ],
        )

        store = await self._get_material_request_store()
        material_request = await store.create_request(material_request)

        logger.info(
            "material_request_opened",
            request_id=material_request.id,
            requester_id=material_request.requester_id,
            items=len(material_request.items),
        )
        return material_request

    def to_response(self, material_request: MaterialRequest) -> MaterialRequestResponse:
        """Convert result to API response."""
        return material_request_response(material_request)
