"""
A storage agnostic LRU ordering for asyncio programs. `lrulist` keeps the
least-to-most-recently-used order of keys and leaves the values to any store
that can `set`, `get` and `delete` them.

### Quickstart

```python
import asyncio

from lrulist import MemoryStore, OrderedCache


async def main():
    cache = OrderedCache(MemoryStore(), limit=2)
    await cache.put("a", 1)
    await cache.put("b", 2)
    await cache.get("a")
    evicted = await cache.put("c", 3)  # evicts "b"
    print(evicted.key, cache.to_ordered_keys())  # b ['a', 'c']


asyncio.run(main())
```

Any object with `async set/get/delete` methods works as a store. Plain
functions can be adapted with `FunctionStore`.
"""

from .config import CacheConfig, create_cache
from .disk_store import DiskStore
from .entry import Entry
from .errors import StoreError
from .memory_store import MemoryStore
from .ordered_cache import DEFAULT_LIMIT, OrderedCache
from .serial import SerialOrderedCache
from .store import FunctionStore, Store
from .version import VERSION

__version__ = VERSION
