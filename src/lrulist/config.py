"""
Configuration for building an `OrderedCache` over one of the built-in stores.

Settings come from explicit arguments first, then from `LRULIST_*` environment
variables (a `.env` file in the working directory is loaded with python-dotenv),
then from the defaults below.
"""

import dataclasses
import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

from .disk_store import DiskStore
from .memory_store import MemoryStore
from .ordered_cache import DEFAULT_LIMIT, OrderedCache
from .util import coalesce

BACKENDS = ("memory", "disk")
DEFAULT_CACHE_DIR = os.path.join(os.path.expanduser("~"), ".cache", "lrulist")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_limit(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"Invalid cache limit: {raw!r}")
    try:
        limit = int(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid cache limit: {raw!r}") from e
    if limit < 1:
        raise ValueError(f"Cache limit must be positive, got {limit}")
    return limit


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {raw!r}")


@dataclasses.dataclass
class CacheConfig:
    limit: int = DEFAULT_LIMIT
    backend: str = "memory"
    cache_dir: str = DEFAULT_CACHE_DIR
    log_warnings: bool = True

    def __post_init__(self):
        self.limit = _parse_limit(self.limit)
        self.log_warnings = _parse_bool(self.log_warnings)
        if not isinstance(self.backend, str):
            raise ValueError(f"Invalid backend: {self.backend!r}")
        self.backend = self.backend.strip().lower()
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {', '.join(BACKENDS)}")

    @classmethod
    def from_env(
        cls,
        limit: Optional[int] = None,
        backend: Optional[str] = None,
        cache_dir: Optional[str] = None,
        log_warnings: Optional[bool] = None,
        dotenv_path: Optional[str] = None,
    ) -> "CacheConfig":
        """
        Build a config from arguments, falling back to the environment.

        Variables already set in the environment take precedence over the `.env` file.
        """
        load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))
        return cls(
            limit=coalesce(limit, os.environ.get("LRULIST_LIMIT"), DEFAULT_LIMIT),
            backend=coalesce(backend, os.environ.get("LRULIST_BACKEND"), "memory"),
            cache_dir=coalesce(cache_dir, os.environ.get("LRULIST_CACHE_DIR"), DEFAULT_CACHE_DIR),
            log_warnings=coalesce(log_warnings, os.environ.get("LRULIST_LOG_WARNINGS"), True),
        )


def create_cache(config: Optional[CacheConfig] = None) -> OrderedCache:
    """Create an empty `OrderedCache` over the store named by `config` (or the environment)."""
    if config is None:
        config = CacheConfig.from_env()

    if config.backend == "disk":
        store = DiskStore(cache_dir=config.cache_dir, log_warnings=config.log_warnings)
    else:
        store = MemoryStore()
    return OrderedCache(store, limit=config.limit)
