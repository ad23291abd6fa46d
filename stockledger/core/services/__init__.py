"""
Core business logic services.

Layer-pure, synchronous services that depend only on:
- stockledger/core/entities/*
- stockledger/core/exceptions.py

NO infrastructure imports. Serialization of concurrent mutations is the
caller's job (see the store ``lock`` methods).
"""

from stockledger.core.services.costing import CostingEngine, CostUpdate, weighted_average_cost
from stockledger.core.services.fulfillment import FulfillmentStateMachine, FulfillmentUpdate
from stockledger.core.services.kardex import KardexLedger, KardexReconstructor, LedgerMovement
from stockledger.core.services.movements import MovementMutator
from stockledger.core.services.reporting import (
    ConsumptionReport,
    ConsumptionReportLine,
    InventoryReporter,
    LeadTime,
    StockAlert,
    StockAlertLevel,
    StockStatus,
    ValuationLine,
    ValuationReport,
    average_lead_time,
)

__all__ = [
    # Costing
    "CostingEngine",
    "CostUpdate",
    "weighted_average_cost",
    # Movements
    "MovementMutator",
    # Kardex
    "KardexReconstructor",
    "KardexLedger",
    "LedgerMovement",
    # Fulfillment
    "FulfillmentStateMachine",
    "FulfillmentUpdate",
    # Reporting
    "InventoryReporter",
    "StockAlert",
    "StockAlertLevel",
    "StockStatus",
    "ValuationLine",
    "ValuationReport",
    "ConsumptionReport",
    "ConsumptionReportLine",
    "LeadTime",
    "average_lead_time",
]
