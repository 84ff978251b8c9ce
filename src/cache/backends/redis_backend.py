# src/cache/backends/redis_backend.py - v2
"""Redis backend adapter (CACHESTORE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Uses the asyncio client. The connection is lazy: building the client does
not contact the server, the first command does.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from cachestore.cache.backends.base_backend import BaseBackendAdapter, BaseBackendHandle

logger = logging.getLogger(__name__)

_DEFAULT_PORT = 6379


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (port optional) into its parts.

    Raises:
        ValueError: If the port is not numeric.
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, _DEFAULT_PORT
    if not port.isdigit():
        raise ValueError(f"Invalid redis address {address!r}: port must be numeric")
    return host or "localhost", int(port)


class RedisBackendHandle(BaseBackendHandle):
    """Handle wrapping one ``redis.asyncio.Redis`` client."""

    def __init__(self, client: Any) -> None:
        self._client = client
        self._closed = False

    async def get(self, key: str) -> bytes | None:
        return await self._client.get(key)

    async def set(self, key: str, data: bytes, ttl: timedelta | None) -> None:
        if ttl is not None and ttl > timedelta(0):
            px = max(1, int(ttl.total_seconds() * 1000))
            await self._client.set(key, data, px=px)
        else:
            await self._client.set(key, data)

    async def keys(self, pattern: str = "*") -> list[str]:
        raw = await self._client.keys(pattern)
        # Non UTF-8 bytes survive as lone surrogates so callers can skip them
        return [
            k.decode("utf-8", errors="surrogateescape") if isinstance(k, bytes) else k
            for k in raw
        ]

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def count(self) -> int:
        return int(await self._client.dbsize())

    async def flush(self) -> None:
        await self._client.flushdb()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()


class RedisBackendAdapter(BaseBackendAdapter):
    """Backend adapter for a single Redis database."""

    store_type = "redis"

    def __init__(
        self,
        address: str = "localhost:6379",
        password: str = "",
        db: int = 0,
        username: str = "",
    ) -> None:
        super().__init__(address, password=password, db=db, username=username)
        self._host, self._port = parse_address(address)

    def connect(self) -> RedisBackendHandle:
        try:
            import redis.asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        client = aioredis.Redis(
            host=self._host,
            port=self._port,
            username=self.username or None,
            password=self.password or None,
            db=self.db,
        )
        logger.debug("Created redis client for %s", self.describe())
        return RedisBackendHandle(client)
