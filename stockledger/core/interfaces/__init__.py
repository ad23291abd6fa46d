"""Core interfaces (ports) for dependency injection."""

from stockledger.core.interfaces.inventory_store import IInventoryStore
from stockledger.core.interfaces.material_request_store import IMaterialRequestStore

__all__ = [
    "IInventoryStore",
    "IMaterialRequestStore",
]
