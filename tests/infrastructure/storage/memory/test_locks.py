"""Tests for per-key asyncio locks."""

import asyncio

from stockledger.infrastructure.storage.memory import KeyedLock


class TestKeyedLock:
    async def test_same_key_is_serialized(self):
        locks = KeyedLock()
        order: list[str] = []
        entered = asyncio.Event()

        async def first():
            async with locks.acquire("A"):
                entered.set()
                await asyncio.sleep(0.01)
                order.append("first")

        async def second():
            await entered.wait()
            async with locks.acquire("A"):
                order.append("second")

        await asyncio.gather(first(), second())
        assert order == ["first", "second"]

    async def test_other_keys_proceed(self):
        locks = KeyedLock()
        async with locks.acquire("A"):
            await asyncio.wait_for(self._enter(locks, "B"), timeout=1)

    async def test_duplicate_keys_taken_once(self):
        locks = KeyedLock()
        await asyncio.wait_for(self._enter(locks, "A", "A"), timeout=1)

    async def test_overlapping_sets_do_not_deadlock(self):
        locks = KeyedLock()

        async def hold(*keys: str):
            async with locks.acquire(*keys):
                await asyncio.sleep(0.01)

        await asyncio.wait_for(asyncio.gather(hold("A", "B"), hold("B", "A")), timeout=1)

    @staticmethod
    async def _enter(locks: KeyedLock, *keys: str) -> None:
        async with locks.acquire(*keys):
            pass
