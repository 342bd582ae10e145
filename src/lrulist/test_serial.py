import asyncio

import pytest
from lrulist.memory_store import MemoryStore
from lrulist.ordered_cache import OrderedCache
from lrulist.serial import SerialOrderedCache


class SlowStore(MemoryStore):
    """Takes longer to write keys that appear earlier in `delays`."""

    def __init__(self, delays):
        super().__init__()
        self.delays = delays
        self.in_flight = 0
        self.max_in_flight = 0

    async def set(self, key, value):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(key, 0))
            await super().set(key, value)
        finally:
            self.in_flight -= 1


@pytest.mark.asyncio
async def test_overlapping_puts_complete_in_call_order():
    store = SlowStore({"a": 0.05, "b": 0.0})
    cache = SerialOrderedCache(OrderedCache(store, limit=5))

    await asyncio.gather(cache.put("a", 1), cache.put("b", 2))

    assert cache.to_ordered_keys() == ["a", "b"]
    assert store.max_in_flight == 1
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_unserialized_puts_follow_store_completion_order():
    store = SlowStore({"a": 0.05, "b": 0.0})
    cache = OrderedCache(store, limit=5)

    await asyncio.gather(cache.put("a", 1), cache.put("b", 2))

    # Without the wrapper the faster store call is linked first.
    assert cache.to_ordered_keys() == ["b", "a"]
    assert store.max_in_flight == 2


@pytest.mark.asyncio
async def test_delegates_every_operation():
    cache = SerialOrderedCache(OrderedCache(MemoryStore(), limit=2))

    await cache.put("a", 1)
    await cache.put("b", 2)
    assert await cache.get("a") == 1
    evicted = await cache.put("c", 3)
    assert evicted.key == "b"
    assert "b" not in cache

    await cache.remove("c")
    await cache.put("a", 4)
    assert cache.to_ordered_keys() == ["a", "a"]
    assert await cache.compact() == 1

    assert (await cache.evict_oldest()).key == "a"
    assert await cache.evict_oldest() is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_failure_releases_lock():
    class FailingStore(MemoryStore):
        async def set(self, key, value):
            if key == "bad":
                raise RuntimeError("nope")
            await super().set(key, value)

    cache = SerialOrderedCache(OrderedCache(FailingStore(), limit=2))
    with pytest.raises(RuntimeError):
        await cache.put("bad", 1)

    await asyncio.wait_for(cache.put("good", 2), timeout=1)
    assert cache.to_ordered_keys() == ["good"]
