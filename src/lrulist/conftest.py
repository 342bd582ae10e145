import os

import pytest

from lrulist.memory_store import MemoryStore

LRULIST_ENV_VARS = ("LRULIST_LIMIT", "LRULIST_BACKEND", "LRULIST_CACHE_DIR", "LRULIST_LOG_WARNINGS")


class FlakyStore(MemoryStore):
    """A MemoryStore that records calls and fails the operations named in `failing`."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self.failing = set()

    def _record(self, operation, key):
        self.calls.append((operation, key))
        if operation in self.failing:
            raise RuntimeError(f"{operation} failed for {key}")

    async def set(self, key, value):
        self._record("set", key)
        await super().set(key, value)

    async def get(self, key):
        self._record("get", key)
        return await super().get(key)

    async def delete(self, key):
        self._record("delete", key)
        await super().delete(key)


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture(autouse=True)
def clean_lrulist_env():
    """
    Hide any LRULIST_* variables from the developer's environment for the duration of a test,
    so config tests see only what they set themselves.
    """
    saved = {name: os.environ.pop(name) for name in LRULIST_ENV_VARS if name in os.environ}
    try:
        yield
    finally:
        for name in LRULIST_ENV_VARS:
            os.environ.pop(name, None)
        os.environ.update(saved)
