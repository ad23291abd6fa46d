"""Inventory report endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from stockledger.api.dependencies import get_reports_use_case
from stockledger.application.dto.responses import (
    ConsumptionReportResponse,
    LeadTimeReportResponse,
    MovementReportEntryResponse,
    StockAlertResponse,
    ValuationReportResponse,
)
from stockledger.application.use_cases import InventoryReportsUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/valuation", response_model=ValuationReportResponse)
async def valuation_report(
    use_case: InventoryReportsUseCase = Depends(get_reports_use_case),
) -> ValuationReportResponse:
    """Stock valuation at weighted average cost."""
    report = await use_case.valuation()
    return use_case.valuation_response(report)


@router.get("/alerts", response_model=list[StockAlertResponse])
async def stock_alerts(
    use_case: InventoryReportsUseCase = Depends(get_reports_use_case),
) -> list[StockAlertResponse]:
    """Products at or approaching their minimum stock."""
    alerts = await use_case.alerts()
    return use_case.alerts_response(alerts)


@router.get("/movements", response_model=list[MovementReportEntryResponse])
async def movements_report(
    date_from: date | None = None,
    date_to: date | None = None,
    sku: str | None = None,
    use_case: InventoryReportsUseCase = Depends(get_reports_use_case),
) -> list[MovementReportEntryResponse]:
    """Movements across products, newest first."""
    entries = await use_case.movements(date_from=date_from, date_to=date_to, sku=sku)
    return use_case.movements_response(entries)


@router.get("/consumptions", response_model=ConsumptionReportResponse)
async def consumptions_report(
    date_from: date | None = None,
    date_to: date | None = None,
    work_order: str | None = Query(default=None, description="Work order substring"),
    requester_id: str | None = None,
    sku: str | None = None,
    category_id: str | None = None,
    actor: str | None = Query(default=None, description="User who recorded it"),
    use_case: InventoryReportsUseCase = Depends(get_reports_use_case),
) -> ConsumptionReportResponse:
    """Consumed products per work order, with total quantity and value."""
    report = await use_case.consumptions(
        date_from=date_from,
        date_to=date_to,
        work_order=work_order,
        requester_id=requester_id,
        sku=sku,
        category_id=category_id,
        actor=actor,
    )
    return use_case.consumptions_response(report)


@router.get("/lead-times", response_model=LeadTimeReportResponse)
async def lead_times_report(
    provider_id: str | None = None,
    use_case: InventoryReportsUseCase = Depends(get_reports_use_case),
) -> LeadTimeReportResponse:
    """Days from document issue to reception, per receipt."""
    lead_times = await use_case.lead_times(provider_id=provider_id)
    return use_case.lead_times_response(lead_times)
