from typing import Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)


class Entry(Generic[K]):
    """A node of the ordering chain. Holds a key and the links to its neighbors, never a value."""

    __slots__ = ("key", "older", "newer")

    def __init__(self, key: K):
        self.key = key
        self.older: Optional["Entry[K]"] = None
        self.newer: Optional["Entry[K]"] = None

    def detach(self) -> None:
        self.older = None
        self.newer = None

    def __repr__(self) -> str:
        return f"Entry({self.key!r})"
