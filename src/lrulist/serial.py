import asyncio
from typing import Generic, Hashable, List, Optional, TypeVar

from .entry import Entry
from .ordered_cache import OrderedCache

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SerialOrderedCache(Generic[K, V]):
    """
    Runs the operations of an `OrderedCache` one at a time.

    `OrderedCache` mutates its chain after awaiting the store, so two overlapping
    calls can splice entries against a stale tail. This wrapper holds a single
    `asyncio.Lock` across each call, including the store await, so calls complete
    in the order they acquired the lock.
    """

    def __init__(self, cache: OrderedCache[K, V]):
        self.cache = cache
        self._lock = asyncio.Lock()

    async def put(self, key: K, value: V) -> Optional[Entry[K]]:
        async with self._lock:
            return await self.cache.put(key, value)

    async def get(self, key: K) -> Optional[V]:
        async with self._lock:
            return await self.cache.get(key)

    async def remove(self, key: K) -> None:
        async with self._lock:
            await self.cache.remove(key)

    async def evict_oldest(self) -> Optional[Entry[K]]:
        async with self._lock:
            return await self.cache.evict_oldest()

    async def compact(self) -> int:
        # Waits for in-flight calls so it never unlinks an entry mid-operation.
        async with self._lock:
            return self.cache.compact()

    def to_ordered_keys(self) -> List[K]:
        return self.cache.to_ordered_keys()

    def __len__(self) -> int:
        return len(self.cache)

    def __contains__(self, key: object) -> bool:
        return key in self.cache
