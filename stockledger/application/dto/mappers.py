"""Entity to response DTO conversion shared by use cases and routes."""

from stockledger.application.dto.responses import (
    AdjustmentResponse,
    ConsumptionLineResponse,
    ConsumptionResponse,
    ItemStatusResponse,
    KardexEntryResponse,
    MaterialRequestItemResponse,
    MaterialRequestResponse,
    MaterialRequestStatusResponse,
    ReceiptLineResponse,
    ReceiptResponse,
    StockRecordResponse,
)
from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    KardexEntry,
    ReceiptDocument,
    StockRecord,
)
from stockledger.core.entities.material_request import MaterialRequest
from stockledger.core.services.reporting import InventoryReporter


def stock_record_response(
    record: StockRecord, reporter: InventoryReporter | None = None
) -> StockRecordResponse:
    reporter = reporter or InventoryReporter()
    return StockRecordResponse(
        sku=record.sku,
        name=record.name,
        unit=record.unit,
        location=record.location,
        quantity_on_hand=record.quantity_on_hand,
        avg_cost=record.avg_cost,
        total_value=record.total_value,
        min_stock=record.min_stock,
        max_stock=record.max_stock,
        stock_status=reporter.stock_status(record).value,
        alert_level=reporter.stock_alert(record).value,
        last_receipt_date=record.last_receipt_date,
        updated_at=record.updated_at,
    )


def kardex_entry_response(entry: KardexEntry) -> KardexEntryResponse:
    return KardexEntryResponse(
        id=entry.id,
        timestamp=entry.timestamp,
        kind=entry.kind.value,
        reference=entry.reference,
        quantity_in=entry.quantity_in,
        quantity_out=entry.quantity_out,
        unit_cost=entry.unit_cost,
        movement_cost=entry.movement_cost,
        balance=entry.balance,
        actor=entry.actor,
    )


def receipt_response(document: ReceiptDocument) -> ReceiptResponse:
    return ReceiptResponse(
        id=document.id,  # type: ignore[arg-type]
        document_type=document.document_type.value,
        document_number=document.document_number,
        provider_id=document.provider_id,
        provider_name=document.provider_name,
        issue_date=document.issue_date,
        reception_date=document.reception_date,
        lines=[
            ReceiptLineResponse(
                sku=line.sku,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_cost=line.unit_cost,
                discount_pct=line.discount_pct,
                line_total=line.line_total,
            )
            for line in document.lines
        ],
        total=document.total,
        material_request_id=document.material_request_id,
        posted_by=document.posted_by,
        created_at=document.created_at,
    )


def consumption_response(consumption: Consumption) -> ConsumptionResponse:
    return ConsumptionResponse(
        id=consumption.id,  # type: ignore[arg-type]
        work_order_ref=consumption.work_order_ref,
        requester_id=consumption.requester_id,
        requester_name=consumption.requester_name,
        actor=consumption.actor,
        timestamp=consumption.timestamp,
        lines=[
            ConsumptionLineResponse(
                sku=line.sku, product_name=line.product_name, quantity=line.quantity
            )
            for line in consumption.lines
        ],
    )


def adjustment_response(
    adjustment: AdjustmentEvent, record: StockRecord
) -> AdjustmentResponse:
    return AdjustmentResponse(
        id=adjustment.id,  # type: ignore[arg-type]
        sku=adjustment.sku,
        delta=adjustment.delta,
        reason=adjustment.reason,
        actor=adjustment.actor,
        timestamp=adjustment.timestamp,
        stock_record=stock_record_response(record),
    )


def material_request_response(request: MaterialRequest) -> MaterialRequestResponse:
    return MaterialRequestResponse(
        id=request.id,  # type: ignore[arg-type]
        requester_id=request.requester_id,
        requester_name=request.requester_name,
        request_date=request.request_date,
        items=[
            MaterialRequestItemResponse(
                id=item.id,  # type: ignore[arg-type]
                description=item.description,
                requested_quantity=item.requested_quantity,
                received_quantity=item.received_quantity,
                expected_sku=item.expected_sku,
                suggested_unit=item.suggested_unit,
                suggested_provider_id=item.suggested_provider_id,
                status=item.status.value,
            )
            for item in request.items
        ],
        status=request.status.value,
        notes=request.notes,
        linked_receipt_ids=list(request.linked_receipt_ids),
        created_at=request.created_at,
        updated_at=request.updated_at,
    )


def material_request_status_response(
    request: MaterialRequest,
) -> MaterialRequestStatusResponse:
    return MaterialRequestStatusResponse(
        request_id=request.id,  # type: ignore[arg-type]
        status=request.status.value,
        items=[
            ItemStatusResponse(
                item_id=item.id,  # type: ignore[arg-type]
                status=item.status.value,
                requested_quantity=item.requested_quantity,
                received_quantity=item.received_quantity,
            )
            for item in request.items
        ],
    )
