"""
Costing engine.

Applies goods-receipt lines to stock records using moving weighted-average
costing. Cost revaluation is forward-only: receipts are never re-run
backwards, and consumptions or adjustments never revalue stock.
"""

import math
from dataclasses import dataclass
from datetime import date

from stockledger.config import get_logger
from stockledger.core.entities.inventory import ReceiptLine, StockRecord
from stockledger.core.exceptions import InvalidCostError, InvalidQuantityError

logger = get_logger(__name__)


@dataclass
class CostUpdate:
    """Before/after snapshot of one applied receipt line."""

    sku: str
    old_quantity: float
    old_avg_cost: float
    new_quantity: float
    new_avg_cost: float


def weighted_average_cost(
    old_qty: float, old_avg: float, new_qty: float, unit_cost: float
) -> float:
    """
    Moving weighted-average unit cost after receiving ``new_qty`` at ``unit_cost``.

    Falls back to ``unit_cost`` when the combined quantity is not positive.
    The result is clamped to the range of its two inputs so float rounding
    never overshoots either of them.
    """
    total_qty = old_qty + new_qty
    if total_qty <= 0:
        return unit_cost
    avg = (old_qty * old_avg + new_qty * unit_cost) / total_qty
    low, high = min(old_avg, unit_cost), max(old_avg, unit_cost)
    return min(max(avg, low), high)


class CostingEngine:
    """Recomputes quantity and average cost when goods are received."""

    @staticmethod
    def validate_line(line: ReceiptLine) -> None:
        """Reject a receipt line before anything is mutated.

        NaN and infinities are rejected along with out-of-range values.
        """
        if not math.isfinite(line.quantity) or line.quantity <= 0:
            raise InvalidQuantityError(line.quantity, sku=line.sku)
        if not math.isfinite(line.unit_cost) or line.unit_cost < 0:
            raise InvalidCostError(line.unit_cost, sku=line.sku)
        if not 0 <= line.discount_pct <= 100:
            raise InvalidCostError(line.discount_pct, field="discount_pct", sku=line.sku)

    def apply_receipt(
        self,
        record: StockRecord,
        line: ReceiptLine,
        reception_date: date,
    ) -> CostUpdate:
        """
        Apply one receipt line to a stock record in place.

        Args:
            record: Stock record for ``line.sku``.
            line: Receipt line (quantity > 0, unit_cost >= 0).
            reception_date: Reception date of the owning document.

        Returns:
            CostUpdate describing the change.
        """
        self.validate_line(line)

        old_qty = record.quantity_on_hand
        old_avg = record.avg_cost
        new_avg = weighted_average_cost(old_qty, old_avg, line.quantity, line.unit_cost)

        record.quantity_on_hand = old_qty + line.quantity
        record.avg_cost = new_avg
        record.last_receipt_date = reception_date

        logger.debug(
            "receipt_line_costed",
            sku=record.sku,
            old_qty=old_qty,
            new_qty=record.quantity_on_hand,
            new_avg=round(new_avg, 4),
        )

        return CostUpdate(
            sku=record.sku,
            old_quantity=old_qty,
            old_avg_cost=old_avg,
            new_quantity=record.quantity_on_hand,
            new_avg_cost=new_avg,
        )
