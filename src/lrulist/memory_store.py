"""
A module providing an in-memory `Store` implementation.

This module contains a generic dict-backed store that can hold key-value pairs of any
type. It does no ordering or eviction of its own; put an `OrderedCache` in front of it
to bound it.
"""

from typing import Dict, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MemoryStore(Generic[K, V]):
    """
    A dict-backed store.

    Values are kept as given, without copying, so mutating a stored object is visible
    to later reads.
    """

    def __init__(self):
        self._data: Dict[K, V] = {}

    async def set(self, key: K, value: V) -> None:
        """
        Stores a value, replacing any previous value for the key.

        Args:
            key: The key to store.
            value: The value to store.
        """
        self._data[key] = value

    async def get(self, key: K) -> Optional[V]:
        """
        Retrieves a value.

        Args:
            key: The key to look up.

        Returns:
            The stored value, or None if the key is not present.
        """
        return self._data.get(key)

    async def delete(self, key: K) -> None:
        """Removes a value. Missing keys are ignored."""
        self._data.pop(key, None)

    def clear(self) -> None:
        """Removes all values."""
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
