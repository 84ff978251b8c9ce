# src/cache/base_cache_store.py - v2
"""Abstract cache store interface.

Every operation takes option functions (see cachestore.cache.options)
instead of positional parameters. Lifecycle: NEW -> READY (init) ->
CLOSED (close). Data operations are only valid on a READY store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cachestore.cache.models import CacheModel, CacheStoreInfo
from cachestore.cache.options import (
    CacheStoreDeleteOption,
    CacheStoreGetOption,
    CacheStoreListOption,
    CacheStoreOption,
    CacheStoreOptions,
    CacheStoreSetOption,
)


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def init(self, *opts: CacheStoreOption) -> None:
        """Apply deferred options and establish the backend handle."""

    @abstractmethod
    async def get(self, *opts: CacheStoreGetOption) -> CacheModel | None:
        """Retrieve an entry. Returns None when the key does not exist."""

    @abstractmethod
    async def set(self, *opts: CacheStoreSetOption) -> None:
        """Store an entry, replacing any previous value under the key."""

    @abstractmethod
    async def list(
        self, *opts: CacheStoreListOption
    ) -> tuple[list[CacheModel], int]:
        """List entries, optionally restricted to one tenant prefix.

        Entries that fail to decrypt MAY be silently omitted. The count is
        the number of entries returned, not the number of keys scanned.
        """

    @abstractmethod
    async def delete(self, *opts: CacheStoreDeleteOption) -> None:
        """Remove an entry. Missing keys are not an error."""

    @abstractmethod
    async def total(self) -> int:
        """Number of entries in the active namespace (0 without a handle)."""

    @abstractmethod
    async def info(self) -> CacheStoreInfo:
        """Snapshot of store type, item count and redacted connection info."""

    @abstractmethod
    async def reset(self) -> None:
        """Remove every entry in the active namespace. Irreversible."""

    @abstractmethod
    async def close(self) -> None:
        """Release the backend handle. Safe to call more than once."""

    @property
    @abstractmethod
    def options(self) -> CacheStoreOptions:
        """Store-lifetime options."""

    async def __aenter__(self) -> BaseCacheStore:
        await self.init()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
