"""
Movement mutator.

Applies work-order consumptions and manual adjustments to stock records.
Neither kind of movement touches the average cost. Every check runs
before the record is changed, so a rejected movement leaves it intact.
"""

import math

from stockledger.config import get_logger
from stockledger.core.entities.inventory import (
    AdjustmentEvent,
    ConsumptionLine,
    StockRecord,
)
from stockledger.core.exceptions import (
    InsufficientStockError,
    InvalidAdjustmentError,
    InvalidQuantityError,
    NegativeResultingStockError,
)

logger = get_logger(__name__)


class MovementMutator:
    """Decrements and increments on-hand quantity for non-receipt movements."""

    @staticmethod
    def check_consumption(record: StockRecord, quantity: float) -> None:
        """Raise unless ``quantity`` can be taken from ``record``."""
        if not math.isfinite(quantity) or quantity <= 0:
            raise InvalidQuantityError(quantity, sku=record.sku)
        if quantity > record.quantity_on_hand:
            raise InsufficientStockError(
                sku=record.sku,
                requested=quantity,
                available=record.quantity_on_hand,
            )

    def apply_consumption(self, record: StockRecord, line: ConsumptionLine) -> StockRecord:
        """Take a consumed quantity out of stock."""
        self.check_consumption(record, line.quantity)
        record.quantity_on_hand -= line.quantity
        logger.debug(
            "consumption_applied",
            sku=record.sku,
            qty=line.quantity,
            remaining_qty=record.quantity_on_hand,
        )
        return record

    @staticmethod
    def check_adjustment(record: StockRecord, adjustment: AdjustmentEvent) -> None:
        """Raise unless the adjustment is well formed and keeps stock >= 0."""
        if not math.isfinite(adjustment.delta):
            raise InvalidAdjustmentError("delta must be a finite number", sku=adjustment.sku)
        if adjustment.delta == 0:
            raise InvalidAdjustmentError("delta must not be zero", sku=adjustment.sku)
        if not adjustment.reason or not adjustment.reason.strip():
            raise InvalidAdjustmentError("reason is required", sku=adjustment.sku)
        if record.quantity_on_hand + adjustment.delta < 0:
            raise NegativeResultingStockError(
                sku=record.sku,
                delta=adjustment.delta,
                available=record.quantity_on_hand,
            )

    def apply_adjustment(self, record: StockRecord, adjustment: AdjustmentEvent) -> StockRecord:
        """Add a signed delta to stock."""
        self.check_adjustment(record, adjustment)
        record.quantity_on_hand += adjustment.delta
        logger.debug(
            "adjustment_applied",
            sku=record.sku,
            delta=adjustment.delta,
            new_qty=record.quantity_on_hand,
        )
        return record

    def reverse_consumption(self, record: StockRecord, line: ConsumptionLine) -> StockRecord:
        """
        Credit a previously consumed quantity back to stock.

        Used when a consumption is deleted. Average cost stays as it is.
        """
        if not math.isfinite(line.quantity) or line.quantity <= 0:
            raise InvalidQuantityError(line.quantity, sku=record.sku)
        record.quantity_on_hand += line.quantity
        logger.debug(
            "consumption_reversed",
            sku=record.sku,
            qty=line.quantity,
            new_qty=record.quantity_on_hand,
        )
        return record
