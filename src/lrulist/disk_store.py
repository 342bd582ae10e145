"""
A module providing a persistent disk-based `Store` implementation.

This module contains a generic disk store that can hold serializable objects of any type.
Each value is persisted as a gzip-compressed JSON file whose name is the sha256 of its key.
The store does no eviction; ordering and capacity are the job of the `OrderedCache` in front
of it. File I/O runs on a worker thread so awaiting the store never blocks the event loop.
"""

import asyncio
import gzip
import hashlib
import json
import logging
import os
from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import StoreError

T = TypeVar("T")


log = logging.getLogger(__name__)


class DiskStore(Generic[T]):
    """
    A persistent filesystem-based store.

    Unlike a cache, write failures are not swallowed: a failed write must reach the
    `OrderedCache` so that it does not record a key whose value was never persisted.
    Read and delete failures are raised for the same reason. Only a missing file is
    treated as "no value".
    """

    def __init__(
        self,
        cache_dir: str,
        serializer: Optional[Callable[[T], Any]] = None,
        deserializer: Optional[Callable[[Any], T]] = None,
        log_warnings: bool = True,
        mkdirs: bool = True,
    ):
        """
        Creates a new DiskStore instance.

        Args:
            cache_dir: Directory where value files will be stored.
            serializer: Optional function to convert values to JSON-serializable format.
            deserializer: Optional function to convert JSON-deserialized data back to original type.
                         Should be the inverse of serializer.
            log_warnings: Log failed reads and writes before raising.
            mkdirs: Create `cache_dir` on first write if it does not exist.

        Example:
            # Store dataclass instances through their dict form.
            store = DiskStore[Point](
                cache_dir="cache",
                serializer=dataclasses.asdict,
                deserializer=lambda d: Point(**d),
            )
        """
        self._dir = cache_dir
        self._serializer = serializer
        self._deserializer = deserializer
        self._log_warnings = log_warnings
        self._mkdirs = mkdirs

    def _get_entry_path(self, key: str) -> str:
        """Gets the file path for a stored value."""
        k = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self._dir, k)

    async def set(self, key: str, value: T) -> None:
        """
        Stores a value on disk.

        Raises:
            StoreError: If the value cannot be serialized or written.
        """
        await asyncio.to_thread(self._write, key, value)

    async def get(self, key: str) -> Optional[T]:
        """
        Retrieves a value from disk.

        Returns:
            The stored value, or None if no file exists for the key.

        Raises:
            StoreError: If the file exists but cannot be read or decoded.
        """
        return await asyncio.to_thread(self._read, key)

    async def delete(self, key: str) -> None:
        """
        Removes a value from disk. Missing files are ignored.

        Raises:
            StoreError: If the file exists but cannot be removed.
        """
        await asyncio.to_thread(self._unlink, key)

    def _write(self, key: str, value: T) -> None:
        try:
            # mkdirs exists only to make it easy to simulate write errors
            if self._mkdirs:
                os.makedirs(self._dir, exist_ok=True)
            file_path = self._get_entry_path(key)

            if self._serializer is not None:
                value = self._serializer(value)
            data = json.dumps(value).encode("utf-8")

            with gzip.open(file_path, "wb") as f:
                f.write(data)
        except Exception as e:
            if self._log_warnings:
                log.warning(f"Failed to write to disk store: {e}")
            raise StoreError("write", key, str(e)) from e

    def _read(self, key: str) -> Optional[T]:
        try:
            with gzip.open(self._get_entry_path(key), "rb") as f:
                data = json.loads(f.read().decode("utf-8"))
            if self._deserializer is not None:
                data = self._deserializer(data)
            return data
        except FileNotFoundError:
            return None
        except Exception as e:
            if self._log_warnings:
                log.warning(f"Unexpected error reading from disk store: {e}")
            raise StoreError("read", key, str(e)) from e

    def _unlink(self, key: str) -> None:
        try:
            os.unlink(self._get_entry_path(key))
        except FileNotFoundError:
            return
        except Exception as e:
            if self._log_warnings:
                log.warning(f"Failed to delete from disk store: {e}")
            raise StoreError("delete", key, str(e)) from e
