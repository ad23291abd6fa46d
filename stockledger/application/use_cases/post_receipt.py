"""Post Receipt Use Case: goods-receipt document with WAC recalculation."""

from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from datetime import date

from stockledger.application.dto.mappers import (
    material_request_status_response,
    receipt_response,
)
from stockledger.application.dto.requests import PostReceiptRequest
from stockledger.application.dto.responses import CostUpdateResponse, PostReceiptResponse
from stockledger.config import get_logger
from stockledger.core.entities.inventory import ReceiptDocument, ReceiptLine, StockRecord
from stockledger.core.entities.material_request import MaterialRequest
from stockledger.core.exceptions import (
    MaterialRequestNotFoundError,
    StockLedgerError,
    UnknownSkuError,
)
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.material_request_store import IMaterialRequestStore
from stockledger.core.services.costing import CostingEngine, CostUpdate
from stockledger.core.services.fulfillment import FulfillmentStateMachine, FulfillmentUpdate

logger = get_logger(__name__)


@dataclass
class PostReceiptResult:
    """Result of posting a receipt document."""

    receipt: ReceiptDocument
    cost_updates: list[CostUpdate] = field(default_factory=list)
    material_request: MaterialRequest | None = None
    fulfillment: list[FulfillmentUpdate] = field(default_factory=list)


class PostReceiptUseCase:
    """
    Post a goods-receipt document.

    Every line, every SKU and the linked material request are checked
    before any stock record changes. Lines for the same SKU are applied
    in document order. Goods always enter stock; a linked request that is
    already totally received or cancelled keeps its status.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        material_request_store: IMaterialRequestStore | None = None,
        costing: CostingEngine | None = None,
        fulfillment: FulfillmentStateMachine | None = None,
    ):
        self._inventory_store = inventory_store
        self._material_request_store = material_request_store
        self._costing = costing or CostingEngine()
        self._fulfillment = fulfillment or FulfillmentStateMachine()

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_material_request_store(self) -> IMaterialRequestStore:
        if self._material_request_store is None:
            from stockledger.infrastructure.storage.memory import get_material_request_store

            self._material_request_store = await get_material_request_store()
        return self._material_request_store

    async def execute(self, request: PostReceiptRequest) -> PostReceiptResult:
        """Execute post receipt use case."""
        logger.info(
            "post_receipt_started",
            document_number=request.document_number,
            lines=len(request.lines),
            material_request_id=request.material_request_id,
        )

        document = ReceiptDocument(
            document_type=request.document_type,
            document_number=request.document_number,
            provider_id=request.provider_id,
            provider_name=request.provider_name,
            issue_date=request.issue_date,
            reception_date=request.reception_date or date.today(),
            lines=[
                ReceiptLine(
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_cost=line.unit_cost,
                    discount_pct=line.discount_pct,
                    product_name=line.product_name,
                )
                for line in request.lines
            ],
            material_request_id=request.material_request_id,
            posted_by=request.posted_by,
        )

        inv_store = await self._get_inventory_store()
        req_store = (
            await self._get_material_request_store()
            if document.material_request_id
            else None
        )

        try:
            async with AsyncExitStack() as stack:
                # Request lock first, then SKU locks (sorted by the store)
                if req_store is not None:
                    await stack.enter_async_context(
                        req_store.lock(document.material_request_id)  # type: ignore[arg-type]
                    )
                await stack.enter_async_context(inv_store.lock(*document.skus))
                return await self._post(document, inv_store, req_store)
        except StockLedgerError as e:
            logger.warning(
                "post_receipt_rejected",
                document_number=document.document_number,
                error=e.code,
            )
            raise

    async def _post(
        self,
        document: ReceiptDocument,
        inv_store: IInventoryStore,
        req_store: IMaterialRequestStore | None,
    ) -> PostReceiptResult:
        # 1. Validate all lines
        for line in document.lines:
            self._costing.validate_line(line)

        # 2. Load every record; unknown SKUs reject the whole document
        records: dict[str, StockRecord] = {}
        for sku in sorted(document.skus):
            record = await inv_store.get_record(sku)
            if record is None:
                raise UnknownSkuError(sku)
            records[sku] = record

        # 3. Linked request must exist
        material_request = None
        if req_store is not None:
            request_id = document.material_request_id or ""
            material_request = await req_store.get_request(request_id)
            if material_request is None:
                raise MaterialRequestNotFoundError(request_id)

        # 4. Apply costing line by line
        cost_updates = [
            self._costing.apply_receipt(records[line.sku], line, document.reception_date)
            for line in document.lines
        ]
        for record in records.values():
            await inv_store.save_record(record)

        # 5. Record the document
        document = await inv_store.add_receipt(document)

        # 6. Fulfillment
        fulfillment: list[FulfillmentUpdate] = []
        if material_request is not None and req_store is not None:
            fulfillment = self._fulfillment.apply_receipt(material_request, document)
            material_request = await req_store.save_request(material_request)

        logger.info(
            "receipt_posted",
            receipt_id=document.id,
            document_number=document.document_number,
            total=round(document.total, 2),
            skus=sorted(document.skus),
            material_request_id=document.material_request_id,
        )

        return PostReceiptResult(
            receipt=document,
            cost_updates=cost_updates,
            material_request=material_request,
            fulfillment=fulfillment,
        )

    def to_response(self, result: PostReceiptResult) -> PostReceiptResponse:
        """Convert result to API response."""
        return PostReceiptResponse(
            receipt=receipt_response(result.receipt),
            cost_updates=[
                CostUpdateResponse(
                    sku=u.sku,
                    old_quantity=u.old_quantity,
                    old_avg_cost=u.old_avg_cost,
                    new_quantity=u.new_quantity,
                    new_avg_cost=u.new_avg_cost,
                )
                for u in result.cost_updates
            ],
            material_request=(
                material_request_status_response(result.material_request)
                if result.material_request is not None
                else None
            ),
        )
