# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation."""

from __future__ import annotations

import logging

from cachestore.cache.base_cache_store import BaseCacheStore
from cachestore.cache.crypto import AesGcmCryptoService
from cachestore.cache.options import CacheStoreOption, with_crypto_service
from cachestore.config.settings import Settings

logger = logging.getLogger(__name__)


def create_cache_store(
    settings: Settings | None = None, *opts: CacheStoreOption
) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    The store is returned uninitialized; call ``init()`` (or use it as an
    async context manager) before any data operation.

    Args:
        settings: Application settings. Defaults to the memory backend.
        *opts: Extra store options, applied after the settings-derived ones.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.backend

    store_opts: list[CacheStoreOption] = []
    if settings is not None and settings.encryption_key:
        store_opts.append(
            with_crypto_service(AesGcmCryptoService.from_string(settings.encryption_key))
        )
    store_opts.extend(opts)

    if backend == "memory":
        from cachestore.cache.memory_store import MemoryCacheStore
        db = 0 if settings is None else settings.redis_db
        return MemoryCacheStore(*store_opts, db=db)

    if backend == "redis":
        from cachestore.cache.redis_store import RedisCacheStore
        logger.debug(
            "Creating redis cache store for %s (db %d)",
            settings.redis_address, settings.redis_db,
        )
        return RedisCacheStore(
            settings.redis_address,
            settings.redis_password,
            settings.redis_db,
            *store_opts,
            username=settings.redis_username,
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")
