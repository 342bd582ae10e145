"""
The storage contract an `OrderedCache` sits in front of.

An `OrderedCache` never holds values. Everything it knows about a value's
existence comes from awaiting one of the three coroutines below, and it only
updates its ordering after the coroutine returns without raising.
"""

import inspect
from typing import Any, Awaitable, Callable, Generic, Hashable, Optional, TypeVar, Union

from typing_extensions import Protocol, runtime_checkable

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@runtime_checkable
class Store(Protocol[K, V]):
    async def set(self, key: K, value: V) -> None:
        """Persist `value` under `key`. Raise to signal failure."""
        ...

    async def get(self, key: K) -> Optional[V]:
        """Fetch the value for `key`, or `None` if nothing is stored. Raise to signal failure."""
        ...

    async def delete(self, key: K) -> None:
        """Remove the value for `key`. Deleting a missing key is not an error."""
        ...


MaybeAwaitable = Union[Any, Awaitable[Any]]


async def _resolve(result: MaybeAwaitable) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class FunctionStore(Generic[K, V]):
    """
    Adapts three plain callables into a `Store`.

    Each callable may be a regular function or a coroutine function. Failures are
    signalled by raising, exactly like a hand-written store.

    Example:
        backing = {}
        store = FunctionStore(
            set=backing.__setitem__,
            get=backing.get,
            delete=lambda k: backing.pop(k, None),
        )
    """

    def __init__(
        self,
        set: Callable[[K, V], MaybeAwaitable],
        get: Callable[[K], MaybeAwaitable],
        delete: Callable[[K], MaybeAwaitable],
    ):
        self._set = set
        self._get = get
        self._delete = delete

    async def set(self, key: K, value: V) -> None:
        await _resolve(self._set(key, value))

    async def get(self, key: K) -> Optional[V]:
        return await _resolve(self._get(key))

    async def delete(self, key: K) -> None:
        await _resolve(self._delete(key))
