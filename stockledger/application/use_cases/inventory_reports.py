"""Inventory Reports Use Case: valuation, alerts, movements, consumptions and lead times."""

from dataclasses import asdict
from datetime import date

from stockledger.application.dto.mappers import kardex_entry_response
from stockledger.application.dto.responses import (
    ConsumptionReportLineResponse,
    ConsumptionReportResponse,
    LeadTimeReportResponse,
    LeadTimeResponse,
    MovementReportEntryResponse,
    StockAlertResponse,
    ValuationLineResponse,
    ValuationReportResponse,
)
from stockledger.config import get_logger, get_settings
from stockledger.core.entities.inventory import KardexEntry, StockRecord
from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.services.reporting import (
    ConsumptionReport,
    InventoryReporter,
    LeadTime,
    StockAlert,
    ValuationReport,
    average_lead_time,
)

logger = get_logger(__name__)

# Reports cover the whole catalog
_ALL_RECORDS = 1_000_000


class InventoryReportsUseCase:
    """Read-only inventory reports over store snapshots."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        reporter: InventoryReporter | None = None,
    ):
        self._inventory_store = inventory_store
        self._reporter = reporter or InventoryReporter(
            warning_margin=get_settings().inventory.low_stock_warning_margin
        )

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockledger.infrastructure.storage.memory import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _records(self) -> list[StockRecord]:
        store = await self._get_inventory_store()
        return await store.list_records(limit=_ALL_RECORDS)

    async def valuation(self) -> ValuationReport:
        report = self._reporter.valuation(await self._records())
        logger.debug("valuation_report_built", lines=len(report.lines))
        return report

    async def alerts(self) -> list[StockAlert]:
        alerts = self._reporter.stock_alerts(await self._records())
        logger.debug("stock_alerts_built", alerts=len(alerts))
        return alerts

    async def movements(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        sku: str | None = None,
    ) -> list[KardexEntry]:
        """Movement report across products, newest first."""
        store = await self._get_inventory_store()
        entries = self._reporter.movements(
            await self._records(),
            await store.list_receipts(sku=sku),
            await store.list_consumptions(sku=sku),
            await store.list_adjustments(sku=sku),
            date_from=date_from,
            date_to=date_to,
            sku=sku,
        )
        logger.debug("movement_report_built", entries=len(entries), sku=sku)
        return entries

    async def consumptions(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        work_order: str | None = None,
        requester_id: str | None = None,
        sku: str | None = None,
        category_id: str | None = None,
        actor: str | None = None,
    ) -> ConsumptionReport:
        """Consumption lines with totals, newest first."""
        store = await self._get_inventory_store()
        report = self._reporter.consumptions(
            await self._records(),
            await store.list_consumptions(sku=sku),
            date_from=date_from,
            date_to=date_to,
            work_order=work_order,
            requester_id=requester_id,
            sku=sku,
            category_id=category_id,
            actor=actor,
        )
        logger.debug(
            "consumption_report_built",
            lines=len(report.lines),
            total_value=round(report.total_value, 2),
        )
        return report

    async def lead_times(self, provider_id: str | None = None) -> list[LeadTime]:
        store = await self._get_inventory_store()
        return self._reporter.provider_lead_times(
            await store.list_receipts(), provider_id=provider_id
        )

    # Response conversion

    @staticmethod
    def valuation_response(report: ValuationReport) -> ValuationReportResponse:
        return ValuationReportResponse(
            currency=get_settings().inventory.currency,
            lines=[
                ValuationLineResponse(
                    sku=line.sku,
                    name=line.name,
                    unit=line.unit,
                    quantity_on_hand=line.quantity_on_hand,
                    avg_cost=line.avg_cost,
                    total_value=line.total_value,
                )
                for line in report.lines
            ],
            grand_total=report.grand_total,
        )

    @staticmethod
    def alerts_response(alerts: list[StockAlert]) -> list[StockAlertResponse]:
        return [
            StockAlertResponse(
                sku=a.sku,
                name=a.name,
                level=a.level.value,
                quantity_on_hand=a.quantity_on_hand,
                min_stock=a.min_stock,
            )
            for a in alerts
        ]

    @staticmethod
    def movements_response(entries: list[KardexEntry]) -> list[MovementReportEntryResponse]:
        return [
            MovementReportEntryResponse(sku=e.sku, **kardex_entry_response(e).model_dump())
            for e in entries
        ]

    @staticmethod
    def consumptions_response(report: ConsumptionReport) -> ConsumptionReportResponse:
        return ConsumptionReportResponse(
            currency=get_settings().inventory.currency,
            lines=[
                ConsumptionReportLineResponse(**asdict(line)) for line in report.lines
            ],
            total_quantity=report.total_quantity,
            total_value=report.total_value,
        )

    @staticmethod
    def lead_times_response(lead_times: list[LeadTime]) -> LeadTimeReportResponse:
        return LeadTimeReportResponse(
            items=[
                LeadTimeResponse(
                    receipt_id=lt.receipt_id,
                    document_number=lt.document_number,
                    provider_id=lt.provider_id,
                    provider_name=lt.provider_name,
                    issue_date=lt.issue_date,
                    reception_date=lt.reception_date,
                    days=lt.days,
                )
                for lt in lead_times
            ],
            average_days=average_lead_time(lead_times),
        )
