"""
A storage agnostic LRU ordering.

`OrderedCache` keeps keys in a doubly-linked chain ordered from least to most
recently used, plus an index from key to the entry representing it. Values live
in an external `Store`; every operation awaits the store first and only touches
the chain once the store call has returned. If the store raises, the chain is
left as it was and the exception reaches the caller untouched.

    head                                                        tail
    ______            ______            ______            ______
   |  A   |.newer => |  B   |.newer => |  C   |.newer => |  D   |
   |______| <= older.|______| <= older.|______| <= older.|______|

    evicted <--                                      --> appended

The cache does no locking. Two calls that overlap on the same instance can
interleave their mutations; callers with concurrent traffic should go through
`lrulist.serial.SerialOrderedCache` or their own queue.
"""

import logging
from typing import Dict, Generic, Hashable, Iterator, List, Optional, TypeVar

from .entry import Entry
from .store import Store

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_LIMIT = 100

log = logging.getLogger(__name__)


class OrderedCache(Generic[K, V]):
    """
    An LRU ordering of keys whose values are kept in `store`.

    Putting a key that is already present appends a new entry and points the
    index at it. The previous entry stays in the chain as an orphan: it can no
    longer be read, promoted or removed by key, but it still takes a slot of
    `limit` until eviction reaches it (or `compact` drops it).

    Args:
        store: The backing store. Required.
        limit: Maximum number of chain slots. Must be a positive integer.
    """

    def __init__(self, store: Store[K, V], limit: int = DEFAULT_LIMIT):
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        self.store = store
        self.limit = limit
        # Live keys only. Orphans are counted in _length.
        self.size = 0
        self.head: Optional[Entry[K]] = None
        self.tail: Optional[Entry[K]] = None
        self.index: Dict[K, Entry[K]] = {}
        self._length = 0

    @property
    def chain_length(self) -> int:
        """Number of entries in the chain, orphans included."""
        return self._length

    async def put(self, key: K, value: V) -> Optional[Entry[K]]:
        """
        Store `value` and append `key` as the most recently used.

        When the chain outgrows `limit`, an orphan at the head is dropped without
        a store call; otherwise the oldest live key is evicted. Returns the entry
        evicted from the store, or None. A store failure during the eviction
        propagates after the new key has already been appended.
        """
        await self.store.set(key, value)

        previous = self.index.get(key)
        replaces_live = previous is not None and self._is_linked(previous)

        entry = Entry(key)
        self._append(entry)
        self.index[key] = entry
        if not replaces_live:
            self.size += 1

        if self._length <= self.limit:
            return None
        self._drop_orphaned_head(stop_at=self.limit)
        if self._length <= self.limit:
            return None
        return await self.evict_oldest()

    async def evict_oldest(self) -> Optional[Entry[K]]:
        """
        Remove the least recently used live key from the chain and the store.

        The head is detached before the store delete is awaited. If the delete
        raises, the entry stays unlinked while its key is still in `index`.
        """
        self._drop_orphaned_head()

        entry = self.head
        if entry is None:
            return None

        self._unlink(entry)
        self.size -= 1
        log.debug("Evicting %r", entry.key)

        await self.store.delete(entry.key)

        if self.index.get(entry.key) is entry:
            del self.index[entry.key]
        return entry

    async def get(self, key: K) -> Optional[V]:
        """
        Read `key` from the store and mark it most recently used.

        Returns None, discarding whatever the store returned, when `key` is not a
        live key of this cache.
        """
        value = await self.store.get(key)

        entry = self.index.get(key)
        if entry is None or not self._is_linked(entry):
            return None

        if entry is not self.tail:
            self._unlink(entry)
            self._append(entry)
        return value

    async def remove(self, key: K) -> None:
        """Delete `key` from the store, then from the chain. Removing an unknown key is a no-op."""
        await self.store.delete(key)

        entry = self.index.pop(key, None)
        if entry is None:
            return

        if self._is_linked(entry):
            self._unlink(entry)
            self.size -= 1

    def to_ordered_keys(self) -> List[K]:
        """Keys from least to most recently used, orphans included."""
        keys = []
        entry = self.head
        while entry is not None:
            keys.append(entry.key)
            entry = entry.newer
        return keys

    def compact(self) -> int:
        """Unlink every orphaned entry. Does not call the store. Returns the number dropped."""
        dropped = 0
        entry = self.head
        while entry is not None:
            following = entry.newer
            if self.index.get(entry.key) is not entry:
                self._unlink(entry)
                dropped += 1
            entry = following
        if dropped:
            log.debug("Compacted %d orphaned entries", dropped)
        return dropped

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        entry = self.index.get(key)  # type: ignore[arg-type]
        return entry is not None and self._is_linked(entry)

    def __iter__(self) -> Iterator[K]:
        return iter(self.to_ordered_keys())

    def _is_linked(self, entry: Entry[K]) -> bool:
        return entry.older is not None or entry.newer is not None or self.head is entry

    def _append(self, entry: Entry[K]) -> None:
        entry.older = self.tail
        entry.newer = None
        if self.tail is not None:
            self.tail.newer = entry
        else:
            self.head = entry
        self.tail = entry
        self._length += 1

    def _unlink(self, entry: Entry[K]) -> None:
        # Callers only pass linked entries.
        self._length -= 1
        if entry.older is not None:
            entry.older.newer = entry.newer
        elif self.head is entry:
            self.head = entry.newer

        if entry.newer is not None:
            entry.newer.older = entry.older
        elif self.tail is entry:
            self.tail = entry.older

        entry.detach()

    def _drop_orphaned_head(self, stop_at: int = 0) -> None:
        # The stored value under an orphan's key belongs to its live entry, so no store call.
        while (
            self._length > stop_at
            and self.head is not None
            and self.index.get(self.head.key) is not self.head
        ):
            log.debug("Dropping orphaned entry for %r", self.head.key)
            self._unlink(self.head)
