"""
Material request fulfillment state machine.

Item statuses are derived from received quantities; the request's
aggregate status is derived from its item statuses. Cancelled items and
requests in a terminal state (totally received, cancelled) are never
moved by automatic derivation. Manual cancellation always wins, but it
never touches items that already recorded receipts.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from stockledger.config import get_logger
from stockledger.core.entities.inventory import ReceiptDocument
from stockledger.core.entities.material_request import (
    MaterialRequest,
    MaterialRequestItem,
    RequestItemStatus,
    RequestStatus,
)
from stockledger.core.exceptions import (
    InvalidMaterialRequestError,
    MaterialRequestClosedError,
    RequestItemNotFoundError,
)

logger = get_logger(__name__)

# Items a manual cancellation may still move to CANCELLED
_CANCELLABLE_ITEM_STATES = frozenset(
    {RequestItemStatus.PENDING, RequestItemStatus.IN_PROCUREMENT}
)


@dataclass
class FulfillmentUpdate:
    """Quantity credited to one request item by a receipt line."""

    item_id: str | None
    sku: str
    applied_quantity: float
    received_quantity: float


class FulfillmentStateMachine:
    """Derives and transitions material request statuses."""

    @staticmethod
    def derive_item_status(item: MaterialRequestItem) -> RequestItemStatus:
        """Status an item should have given its received quantity."""
        if item.status == RequestItemStatus.CANCELLED:
            return RequestItemStatus.CANCELLED
        if item.received_quantity >= item.requested_quantity:
            return RequestItemStatus.RECEIVED
        if item.received_quantity > 0:
            return RequestItemStatus.PARTIALLY_RECEIVED
        if item.status == RequestItemStatus.IN_PROCUREMENT:
            return RequestItemStatus.IN_PROCUREMENT
        return RequestItemStatus.PENDING

    @staticmethod
    def derive_aggregate_status(request: MaterialRequest) -> RequestStatus:
        """Aggregate status implied by the request's current item statuses."""
        if request.is_terminal:
            return request.status

        statuses = [item.status for item in request.items]
        active = [s for s in statuses if s != RequestItemStatus.CANCELLED]

        if all(s == RequestItemStatus.RECEIVED for s in active):
            return RequestStatus.TOTALLY_RECEIVED
        if any(
            s in (RequestItemStatus.PARTIALLY_RECEIVED, RequestItemStatus.RECEIVED)
            for s in active
        ):
            return RequestStatus.PARTIALLY_RECEIVED
        if any(s == RequestItemStatus.IN_PROCUREMENT for s in active):
            return RequestStatus.IN_PROCUREMENT
        if all(s == RequestItemStatus.PENDING for s in active):
            return RequestStatus.OPEN
        return request.status

    def refresh(self, request: MaterialRequest) -> bool:
        """
        Re-derive every item status, then the aggregate status.

        Returns:
            True if the aggregate status changed.
        """
        if request.is_terminal:
            return False

        for item in request.items:
            item.status = self.derive_item_status(item)

        previous = request.status
        request.status = self.derive_aggregate_status(request)
        request.updated_at = datetime.now(UTC)

        if request.status != previous:
            logger.info(
                "material_request_status_changed",
                request_id=request.id,
                old_status=previous.value,
                new_status=request.status.value,
            )
        return request.status != previous

    @staticmethod
    def _match_item(request: MaterialRequest, sku: str) -> MaterialRequestItem | None:
        """First open item expecting ``sku``, else the first non-cancelled one."""
        candidates = [
            item
            for item in request.items
            if item.expected_sku == sku and item.status != RequestItemStatus.CANCELLED
        ]
        for item in candidates:
            if item.outstanding_quantity > 0:
                return item
        return candidates[0] if candidates else None

    def apply_receipt(
        self, request: MaterialRequest, document: ReceiptDocument
    ) -> list[FulfillmentUpdate]:
        """
        Credit a linked receipt document's lines to the request.

        Received quantities are capped at the requested quantity; the
        excess of an over-receipt is not carried anywhere. A request in a
        terminal state only records the link: its items and status stay
        as they are.
        """
        if document.id and document.id not in request.linked_receipt_ids:
            request.linked_receipt_ids.append(document.id)

        if request.is_terminal:
            logger.info(
                "receipt_linked_to_closed_request",
                request_id=request.id,
                receipt_id=document.id,
                status=request.status.value,
            )
            return []

        updates: list[FulfillmentUpdate] = []
        for line in document.lines:
            item = self._match_item(request, line.sku)
            if item is None:
                continue
            before = item.received_quantity
            item.received_quantity = min(item.requested_quantity, before + line.quantity)
            updates.append(
                FulfillmentUpdate(
                    item_id=item.id,
                    sku=line.sku,
                    applied_quantity=item.received_quantity - before,
                    received_quantity=item.received_quantity,
                )
            )

        self.refresh(request)
        return updates

    def cancel(self, request: MaterialRequest) -> None:
        """Manual override: cancel the request and its not-yet-received items."""
        if request.status == RequestStatus.CANCELLED:
            return
        previous = request.status
        for item in request.items:
            if item.status in _CANCELLABLE_ITEM_STATES:
                item.status = RequestItemStatus.CANCELLED
        request.status = RequestStatus.CANCELLED
        request.updated_at = datetime.now(UTC)
        logger.info(
            "material_request_status_changed",
            request_id=request.id,
            old_status=previous.value,
            new_status=request.status.value,
        )

    def _require_item(self, request: MaterialRequest, item_id: str) -> MaterialRequestItem:
        if request.is_terminal:
            raise MaterialRequestClosedError(request.id or "", request.status.value)
        item = request.get_item(item_id)
        if item is None:
            raise RequestItemNotFoundError(request.id or "", item_id)
        return item

    def cancel_item(self, request: MaterialRequest, item_id: str) -> MaterialRequestItem:
        """Cancel a single item that has not received anything yet."""
        item = self._require_item(request, item_id)
        if item.status not in _CANCELLABLE_ITEM_STATES:
            raise InvalidMaterialRequestError(
                f"item {item_id} is {item.status.value} and cannot be cancelled"
            )
        item.status = RequestItemStatus.CANCELLED
        self.refresh(request)
        return item

    def mark_in_procurement(
        self, request: MaterialRequest, item_id: str
    ) -> MaterialRequestItem:
        """Operator marks a pending item as being purchased."""
        item = self._require_item(request, item_id)
        if item.status != RequestItemStatus.PENDING:
            raise InvalidMaterialRequestError(
                f"item {item_id} is {item.status.value}, only pending items can be procured"
            )
        item.status = RequestItemStatus.IN_PROCUREMENT
        self.refresh(request)
        return item
