# src/cache/redis_store.py - v2
"""Redis-based cache store (CACHESTORE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Talks to one Redis database; entries are shared with any other client of
that database.
"""

from __future__ import annotations

from cachestore.cache.backends.redis_backend import RedisBackendAdapter
from cachestore.cache.options import CacheStoreOption
from cachestore.cache.store import CacheStore


class RedisCacheStore(CacheStore):
    """Cache store backed by one Redis database.

    Args:
        address: ``host:port`` of the Redis server.
        password: Redis password, masked in every descriptor.
        db: Numeric database index used as the namespace.
        *opts: Store options applied at construction.
        username: Optional ACL user name.
    """

    def __init__(
        self,
        address: str = "localhost:6379",
        password: str = "",
        db: int = 0,
        *opts: CacheStoreOption,
        username: str = "",
    ) -> None:
        super().__init__(
            RedisBackendAdapter(address, password=password, db=db, username=username),
            *opts,
        )
