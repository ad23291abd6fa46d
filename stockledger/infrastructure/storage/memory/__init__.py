"""In-memory storage implementations."""

from stockledger.infrastructure.storage.memory.inventory_store import MemoryInventoryStore
from stockledger.infrastructure.storage.memory.locks import KeyedLock
from stockledger.infrastructure.storage.memory.material_request_store import (
    MemoryMaterialRequestStore,
)

# Singleton instances
_inventory_store: MemoryInventoryStore | None = None
_material_request_store: MemoryMaterialRequestStore | None = None


async def get_inventory_store() -> MemoryInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = MemoryInventoryStore()
    return _inventory_store


async def get_material_request_store() -> MemoryMaterialRequestStore:
    """Get singleton material request store instance."""
    global _material_request_store
    if _material_request_store is None:
        _material_request_store = MemoryMaterialRequestStore()
    return _material_request_store


def reset_stores() -> None:
    """Drop the singleton stores (for testing)."""
    global _inventory_store, _material_request_store
    _inventory_store = None
    _material_request_store = None


__all__ = [
    "KeyedLock",
    "MemoryInventoryStore",
    "MemoryMaterialRequestStore",
    "get_inventory_store",
    "get_material_request_store",
    "reset_stores",
]
