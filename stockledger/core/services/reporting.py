"""
Inventory reporting.

Read-only views over stock records and event histories: low-stock alerts,
stock valuation, the cross-product movement report, the work-order
consumption report and provider lead times. Movement and consumption
valuation follow the Kardex rules (current average cost).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    KardexEntry,
    ReceiptDocument,
    StockRecord,
)
from stockledger.core.services.kardex import KardexReconstructor

DEFAULT_WARNING_MARGIN = 0.15


class StockAlertLevel(str, Enum):
    """Alert level for a product's stock against its minimum."""

    OK = "ok"
    APPROACHING = "approaching"
    LOW = "low"


class StockStatus(str, Enum):
    """Stock position against the min/max thresholds."""

    LOW = "low"
    NORMAL = "normal"
    OVERSTOCK = "overstock"


@dataclass
class StockAlert:
    sku: str
    name: str
    level: StockAlertLevel
    quantity_on_hand: float
    min_stock: float


@dataclass
class ValuationLine:
    sku: str
    name: str
    unit: str
    quantity_on_hand: float
    avg_cost: float
    total_value: float


@dataclass
class ValuationReport:
    lines: list[ValuationLine] = field(default_factory=list)
    grand_total: float = 0.0


@dataclass
class ConsumptionReportLine:
    """One consumed product line, valued at the current average cost."""

    consumption_id: str | None
    work_order_ref: str
    timestamp: datetime
    sku: str
    product_name: str
    category_id: str | None
    unit: str
    quantity: float
    unit_cost: float
    total_cost: float
    requester_id: str | None = None
    requester_name: str | None = None
    actor: str | None = None


@dataclass
class ConsumptionReport:
    lines: list[ConsumptionReportLine] = field(default_factory=list)
    total_quantity: float = 0.0
    total_value: float = 0.0


@dataclass
class LeadTime:
    receipt_id: str | None
    document_number: str
    provider_id: str | None
    provider_name: str | None
    issue_date: date
    reception_date: date
    days: int


class InventoryReporter:
    """Builds inventory reports. Pure: inputs are snapshots, nothing is mutated."""

    def __init__(
        self,
        warning_margin: float = DEFAULT_WARNING_MARGIN,
        kardex: KardexReconstructor | None = None,
    ) -> None:
        self._warning_margin = warning_margin
        self._kardex = kardex or KardexReconstructor()

    def stock_alert(self, record: StockRecord) -> StockAlertLevel:
        """LOW at or below the minimum, APPROACHING within the warning margin above it."""
        minimum = record.min_stock or 0.0
        if minimum <= 0:
            return StockAlertLevel.OK
        if record.quantity_on_hand <= minimum:
            return StockAlertLevel.LOW
        if record.quantity_on_hand <= minimum * (1 + self._warning_margin):
            return StockAlertLevel.APPROACHING
        return StockAlertLevel.OK

    def stock_alerts(self, records: Iterable[StockRecord]) -> list[StockAlert]:
        """Records needing attention, LOW before APPROACHING, then by SKU."""
        alerts = []
        for record in records:
            level = self.stock_alert(record)
            if level == StockAlertLevel.OK:
                continue
            alerts.append(
                StockAlert(
                    sku=record.sku,
                    name=record.name,
                    level=level,
                    quantity_on_hand=record.quantity_on_hand,
                    min_stock=record.min_stock or 0.0,
                )
            )
        alerts.sort(key=lambda a: (a.level != StockAlertLevel.LOW, a.sku))
        return alerts

    @staticmethod
    def stock_status(record: StockRecord) -> StockStatus:
        minimum = record.min_stock or 0.0
        maximum = record.max_stock or 0.0
        if minimum > 0 and record.quantity_on_hand <= minimum:
            return StockStatus.LOW
        if maximum > 0 and record.quantity_on_hand >= maximum:
            return StockStatus.OVERSTOCK
        return StockStatus.NORMAL

    @staticmethod
    def valuation(records: Iterable[StockRecord]) -> ValuationReport:
        """Quantity times average cost per product, plus the grand total."""
        report = ValuationReport()
        for record in records:
            report.lines.append(
                ValuationLine(
                    sku=record.sku,
                    name=record.name,
                    unit=record.unit,
                    quantity_on_hand=record.quantity_on_hand,
                    avg_cost=record.avg_cost,
                    total_value=record.total_value,
                )
            )
        report.grand_total = sum(line.total_value for line in report.lines)
        return report

    def movements(
        self,
        records: Iterable[StockRecord],
        receipts: Sequence[ReceiptDocument],
        consumptions: Sequence[Consumption],
        adjustments: Sequence[AdjustmentEvent],
        date_from: date | None = None,
        date_to: date | None = None,
        sku: str | None = None,
    ) -> list[KardexEntry]:
        """
        Unified movement report across products, newest first.

        Date bounds are inclusive and compare on the movement's UTC date.
        Balances are each product's Kardex running balance.
        """
        entries: list[KardexEntry] = []
        for record in records:
            if sku is not None and record.sku != sku:
                continue
            ledger = self._kardex.build_ledger(
                record.sku, receipts, consumptions, adjustments, record.avg_cost
            )
            for entry in ledger:
                day = entry.timestamp.date()
                if date_from is not None and day < date_from:
                    continue
                if date_to is not None and day > date_to:
                    continue
                entries.append(entry)

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries

    @staticmethod
    def consumptions(
        records: Iterable[StockRecord],
        consumptions: Iterable[Consumption],
        date_from: date | None = None,
        date_to: date | None = None,
        work_order: str | None = None,
        requester_id: str | None = None,
        sku: str | None = None,
        category_id: str | None = None,
        actor: str | None = None,
    ) -> ConsumptionReport:
        """
        Work-order consumption report, one line per consumed product.

        Filters combine with AND. ``work_order`` is a case-insensitive
        substring match; date bounds are inclusive on the UTC date.
        Lines come newest first.
        """
        by_sku = {record.sku: record for record in records}
        needle = work_order.lower() if work_order else None

        report = ConsumptionReport()
        for consumption in consumptions:
            day = consumption.timestamp.date()
            if date_from is not None and day < date_from:
                continue
            if date_to is not None and day > date_to:
                continue
            if needle is not None and needle not in consumption.work_order_ref.lower():
                continue
            if requester_id is not None and consumption.requester_id != requester_id:
                continue
            if actor is not None and consumption.actor != actor:
                continue

            for line in consumption.lines:
                if sku is not None and line.sku != sku:
                    continue
                record = by_sku.get(line.sku)
                if category_id is not None and (
                    record is None or record.category_id != category_id
                ):
                    continue
                unit_cost = record.avg_cost if record is not None else 0.0
                report.lines.append(
                    ConsumptionReportLine(
                        consumption_id=consumption.id,
                        work_order_ref=consumption.work_order_ref,
                        timestamp=consumption.timestamp,
                        sku=line.sku,
                        product_name=(record.name if record else "") or line.product_name or "",
                        category_id=record.category_id if record else None,
                        unit=record.unit if record else "",
                        quantity=line.quantity,
                        unit_cost=unit_cost,
                        total_cost=line.quantity * unit_cost,
                        requester_id=consumption.requester_id,
                        requester_name=consumption.requester_name,
                        actor=consumption.actor,
                    )
                )

        report.lines.sort(key=lambda line: line.timestamp, reverse=True)
        report.total_quantity = sum(line.quantity for line in report.lines)
        report.total_value = sum(line.total_cost for line in report.lines)
        return report

    @staticmethod
    def provider_lead_times(
        receipts: Iterable[ReceiptDocument], provider_id: str | None = None
    ) -> list[LeadTime]:
        """Days from issue to reception per receipt document, newest reception first."""
        lead_times = []
        for document in receipts:
            if document.issue_date is None:
                continue
            if provider_id is not None and document.provider_id != provider_id:
                continue
            lead_times.append(
                LeadTime(
                    receipt_id=document.id,
                    document_number=document.document_number,
                    provider_id=document.provider_id,
                    provider_name=document.provider_name,
                    issue_date=document.issue_date,
                    reception_date=document.reception_date,
                    days=abs((document.reception_date - document.issue_date).days),
                )
            )
        lead_times.sort(key=lambda lt: lt.reception_date, reverse=True)
        return lead_times


def average_lead_time(lead_times: Sequence[LeadTime]) -> float | None:
    if not lead_times:
        return None
    return sum(lt.days for lt in lead_times) / len(lead_times)
