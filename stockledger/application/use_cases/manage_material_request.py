"""Material request status queries and operator transitions."""

from stockledger.application.dto.mappers import material_request_status_response
from stockledger.application.dto.responses import MaterialRequestStatusResponse
from stockledger.config import get_logger
from stockledger.core.entities.material_request import MaterialRequest
from stockledger.core.exceptions import MaterialRequestNotFoundError, StockLedgerError
from stockledger.core.interfaces.material_request_store import IMaterialRequestStore
from stockledger.core.services.fulfillment import FulfillmentStateMachine

logger = get_logger(__name__)


class _MaterialRequestUseCase:
    """Shared store wiring for the material request use cases below."""

    def __init__(
        self,
        material_request_store: IMaterialRequestStore | None = None,
        fulfillment: FulfillmentStateMachine | None = None,
    ):
        self._material_request_store = material_request_store
        self._fulfillment = fulfillment or FulfillmentStateMachine()

    async def _get_material_request_store(self) -> IMaterialRequestStore:
        if self._material_request_store is None:
            from stockledger.infrastructure.storage.memory import get_material_request_store

            self._material_request_store = await get_material_request_store()
        return self._material_request_store

    async def _load(self, store: IMaterialRequestStore, request_id: str) -> MaterialRequest:
        material_request = await store.get_request(request_id)
        if material_request is None:
            raise MaterialRequestNotFoundError(request_id)
        return material_request

    def to_response(self, material_request: MaterialRequest) -> MaterialRequestStatusResponse:
        """Convert result to API response."""
        return material_request_status_response(material_request)


class GetRequestStatusUseCase(_MaterialRequestUseCase):
    """Aggregate and per-item status of a material request."""

    async def execute(self, request_id: str) -> MaterialRequest:
        store = await self._get_material_request_store()
        return await self._load(store, request_id)


class CancelMaterialRequestUseCase(_MaterialRequestUseCase):
    """Manual override: cancel a request and its not-yet-received items."""

    async def execute(self, request_id: str) -> MaterialRequest:
        store = await self._get_material_request_store()
        async with store.lock(request_id):
            material_request = await self._load(store, request_id)
            self._fulfillment.cancel(material_request)
            material_request = await store.save_request(material_request)

        logger.info("material_request_cancelled", request_id=request_id)
        return material_request


class CancelRequestItemUseCase(_MaterialRequestUseCase):
    """Cancel one item that has not received anything yet."""

    async def execute(self, request_id: str, item_id: str) -> MaterialRequest:
        store = await self._get_material_request_store()
        try:
            async with store.lock(request_id):
                material_request = await self._load(store, request_id)
                self._fulfillment.cancel_item(material_request, item_id)
                material_request = await store.save_request(material_request)
        except StockLedgerError as e:
            logger.warning(
                "cancel_request_item_rejected",
                request_id=request_id,
                item_id=item_id,
                error=e.code,
            )
            raise

        logger.info(
            "request_item_cancelled",
            request_id=request_id,
            item_id=item_id,
            status=material_request.status.value,
        )
        return material_request


class MarkItemInProcurementUseCase(_MaterialRequestUseCase):
    """Operator marks a pending item as being purchased."""

    async def execute(self, request_id: str, item_id: str) -> MaterialRequest:
        store = await self._get_material_request_store()
        try:
            async with store.lock(request_id):
                material_request = await self._load(store, request_id)
                self._fulfillment.mark_in_procurement(material_request, item_id)
                material_request = await store.save_request(material_request)
        except StockLedgerError as e:
            logger.warning(
                "mark_in_procurement_rejected",
                request_id=request_id,
                item_id=item_id,
                error=e.code,
            )
            raise

        logger.info(
            "request_item_in_procurement",
            request_id=request_id,
            item_id=item_id,
            status=material_request.status.value,
        )
        return material_request
