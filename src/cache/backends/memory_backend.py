# src/cache/backends/memory_backend.py - v1
"""In-process backend adapter (CACHESTORE_BACKEND=memory).

Keeps one dict per numeric namespace inside the adapter, so every handle
created by the same adapter sees the same data, like clients of one server.
No external dependency. Intended for tests and local runs.
"""

from __future__ import annotations

import fnmatch
import logging
import time
from datetime import timedelta

from cachestore.cache.backends.base_backend import BaseBackendAdapter, BaseBackendHandle

logger = logging.getLogger(__name__)

# key -> (raw value, monotonic deadline or None)
_Namespace = dict[str, tuple[bytes, float | None]]


class MemoryBackendHandle(BaseBackendHandle):
    """Handle over one namespace of a MemoryBackendAdapter."""

    def __init__(self, namespace: _Namespace) -> None:
        self._data = namespace
        self._closed = False

    async def get(self, key: str) -> bytes | None:
        self._check_open()
        self._expire(key)
        item = self._data.get(key)
        return None if item is None else item[0]

    async def set(self, key: str, data: bytes, ttl: timedelta | None) -> None:
        self._check_open()
        deadline = None
        if ttl is not None and ttl > timedelta(0):
            deadline = time.monotonic() + ttl.total_seconds()
        self._data[key] = (bytes(data), deadline)

    async def keys(self, pattern: str = "*") -> list[str]:
        self._check_open()
        self._expire_all()
        return [k for k in list(self._data) if fnmatch.fnmatchcase(k, pattern)]

    async def delete(self, key: str) -> None:
        self._check_open()
        self._data.pop(key, None)

    async def count(self) -> int:
        self._check_open()
        self._expire_all()
        return len(self._data)

    async def flush(self) -> None:
        self._check_open()
        self._data.clear()

    async def close(self) -> None:
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise ConnectionError("memory backend handle is closed")

    def _expire(self, key: str) -> None:
        item = self._data.get(key)
        if item is not None and item[1] is not None and item[1] <= time.monotonic():
            del self._data[key]

    def _expire_all(self) -> None:
        now = time.monotonic()
        expired = [k for k, (_, d) in self._data.items() if d is not None and d <= now]
        for key in expired:
            del self._data[key]


class MemoryBackendAdapter(BaseBackendAdapter):
    """Backend adapter keeping all namespaces in process memory."""

    store_type = "memory"

    def __init__(
        self,
        address: str = "local",
        password: str = "",
        db: int = 0,
        username: str = "",
    ) -> None:
        super().__init__(address, password=password, db=db, username=username)
        self._namespaces: dict[int, _Namespace] = {}

    def connect(self) -> MemoryBackendHandle:
        logger.debug("Opening memory namespace %d", self.db)
        return MemoryBackendHandle(self._namespaces.setdefault(self.db, {}))

    def namespace(self, db: int | None = None) -> _Namespace:
        """Raw namespace dict; lets tests tamper with stored bytes."""
        return self._namespaces.setdefault(self.db if db is None else db, {})
