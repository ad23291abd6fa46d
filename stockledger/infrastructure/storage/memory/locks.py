"""
Per-key asyncio locks.

Serializes mutations per key (SKU or material request id) without a
global lock, so unrelated keys proceed concurrently.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager


class KeyedLock:
    """
    A lazily created ``asyncio.Lock`` per key.

    Usage:
        async with locks.acquire("SKU-1", "SKU-2"):
            ...
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def acquire(self, *keys: str) -> AsyncIterator[None]:
        """
        Hold the locks for all ``keys`` for the duration of the block.

        Keys are de-duplicated and taken in sorted order so two callers
        locking overlapping key sets cannot deadlock.
        """
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self._lock_for(key))
            yield
