"""
Kardex reconstruction.

Rebuilds a product's chronological movement ledger from the three event
histories (receipts, consumptions, adjustments). The ledger is derived on
demand and never cached; it does not read or modify the live stock record.

Ordering: ascending timestamp. Events sharing a timestamp keep their input
order, with receipts first, then consumptions, then adjustments.
Receipts are dated by reception date (midnight UTC).

Valuation: receipts use the line's own unit cost and discounted line total.
Consumptions and adjustments use the average cost passed in at
reconstruction time, not the cost in effect when they happened.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime

from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    Consumption,
    KardexEntry,
    MovementKind,
    ReceiptDocument,
    as_utc,
)

# The three event variants merged into one ledger
LedgerEvent = ReceiptDocument | Consumption | AdjustmentEvent


@dataclass(frozen=True)
class LedgerMovement:
    """A single SKU movement extracted from one event, before balancing."""

    timestamp: datetime
    kind: MovementKind
    reference: str
    quantity_in: float | None
    quantity_out: float | None
    unit_cost: float
    movement_cost: float
    actor: str | None = None

    @property
    def signed_quantity(self) -> float:
        return (self.quantity_in or 0.0) - (self.quantity_out or 0.0)


def _receipt_movements(sku: str, document: ReceiptDocument) -> Iterator[LedgerMovement]:
    timestamp = as_utc(document.reception_date)
    for line in document.lines:
        if line.sku != sku:
            continue
        yield LedgerMovement(
            timestamp=timestamp,
            kind=MovementKind.RECEIPT,
            reference=document.document_number,
            quantity_in=line.quantity,
            quantity_out=None,
            unit_cost=line.unit_cost,
            movement_cost=line.line_total,
            actor=document.provider_name or document.posted_by,
        )


def _consumption_movements(
    sku: str, consumption: Consumption, avg_cost: float
) -> Iterator[LedgerMovement]:
    for line in consumption.lines:
        if line.sku != sku:
            continue
        yield LedgerMovement(
            timestamp=consumption.timestamp,
            kind=MovementKind.CONSUMPTION,
            reference=consumption.work_order_ref,
            quantity_in=None,
            quantity_out=line.quantity,
            unit_cost=avg_cost,
            movement_cost=line.quantity * avg_cost,
            actor=consumption.requester_name or consumption.actor,
        )


def _adjustment_movements(
    sku: str, adjustment: AdjustmentEvent, avg_cost: float
) -> Iterator[LedgerMovement]:
    if adjustment.sku != sku or adjustment.delta == 0:
        return
    positive = adjustment.delta > 0
    quantity = abs(adjustment.delta)
    yield LedgerMovement(
        timestamp=adjustment.timestamp,
        kind=MovementKind.POSITIVE_ADJUSTMENT if positive else MovementKind.NEGATIVE_ADJUSTMENT,
        reference=adjustment.reason,
        quantity_in=quantity if positive else None,
        quantity_out=None if positive else quantity,
        unit_cost=avg_cost,
        movement_cost=quantity * avg_cost,
        actor=adjustment.actor,
    )


def movements_of(sku: str, event: LedgerEvent, avg_cost: float) -> Iterator[LedgerMovement]:
    """Extract the movements ``event`` contributes to ``sku``'s ledger."""
    if isinstance(event, ReceiptDocument):
        return _receipt_movements(sku, event)
    if isinstance(event, Consumption):
        return _consumption_movements(sku, event, avg_cost)
    if isinstance(event, AdjustmentEvent):
        return _adjustment_movements(sku, event, avg_cost)
    raise TypeError(f"Unsupported ledger event: {type(event).__name__}")


class KardexLedger:
    """
    Ordered, running-balance ledger for one SKU.

    Holds an immutable snapshot of sorted movements; every iteration
    recomputes entries from the start, so it can be replayed any number
    of times with identical results.
    """

    def __init__(self, sku: str, movements: Iterable[LedgerMovement]):
        self.sku = sku
        self._movements: tuple[LedgerMovement, ...] = tuple(movements)

    def __iter__(self) -> Iterator[KardexEntry]:
        balance = 0.0  # no opening balance carried in
        for index, movement in enumerate(self._movements):
            balance += movement.signed_quantity
            yield KardexEntry(
                id=f"kardex-{self.sku}-{index}",
                sku=self.sku,
                timestamp=movement.timestamp,
                kind=movement.kind,
                reference=movement.reference,
                quantity_in=movement.quantity_in,
                quantity_out=movement.quantity_out,
                unit_cost=movement.unit_cost,
                movement_cost=movement.movement_cost,
                balance=balance,
                actor=movement.actor,
            )

    def __len__(self) -> int:
        return len(self._movements)

    @property
    def total_in(self) -> float:
        return sum(m.quantity_in or 0.0 for m in self._movements)

    @property
    def total_out(self) -> float:
        return sum(m.quantity_out or 0.0 for m in self._movements)

    @property
    def final_balance(self) -> float:
        """Balance after the last entry (0 for an empty ledger)."""
        balance = 0.0
        for movement in self._movements:
            balance += movement.signed_quantity
        return balance


class KardexReconstructor:
    """Builds per-SKU Kardex ledgers from event history snapshots."""

    def build_ledger(
        self,
        sku: str,
        receipts: Iterable[ReceiptDocument],
        consumptions: Iterable[Consumption],
        adjustments: Iterable[AdjustmentEvent],
        current_avg_cost: float,
    ) -> KardexLedger:
        """
        Merge the event streams for ``sku`` into a chronological ledger.

        Args:
            sku: Product to reconstruct.
            receipts: Receipt documents in posting order.
            consumptions: Consumptions in recording order.
            adjustments: Adjustments in recording order.
            current_avg_cost: Average cost used to value outgoing movements.

        Returns:
            KardexLedger (lazy; iterate for entries).
        """
        events: list[LedgerEvent] = [*receipts, *consumptions, *adjustments]
        movements = [
            movement
            for event in events
            for movement in movements_of(sku, event, current_avg_cost)
        ]
        # list.sort is stable: equal timestamps keep the input order above
        movements.sort(key=lambda m: m.timestamp)
        return KardexLedger(sku, movements)
