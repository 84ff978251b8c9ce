# src/cache/memory_store.py - v1
"""In-process cache store (CACHESTORE_BACKEND=memory).

Uses the memory backend adapter, no external dependency. Data lives as
long as the store object; handles reopened after close() see the same
entries.
"""

from __future__ import annotations

from cachestore.cache.backends.memory_backend import MemoryBackendAdapter
from cachestore.cache.options import CacheStoreOption
from cachestore.cache.store import CacheStore


class MemoryCacheStore(CacheStore):
    """Cache store keeping entries in process memory."""

    def __init__(self, *opts: CacheStoreOption, db: int = 0) -> None:
        self.adapter = MemoryBackendAdapter(db=db)
        super().__init__(self.adapter, *opts)
