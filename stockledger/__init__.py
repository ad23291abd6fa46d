"""Warehouse inventory ledger: costing, stock movements, Kardex and material requests."""

__version__ = "1.0.0"
