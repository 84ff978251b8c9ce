# src/cache/backends/base_backend.py - v1
"""Abstract backend adapter and connection handle interfaces.

A cache store talks to its key-value backend only through these two
interfaces. The adapter carries the connection settings and hands out a
handle; the handle performs the round trips.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta


class BaseBackendHandle(ABC):
    """Live (possibly lazy) connection to a key-value namespace.

    Must be safe for concurrent use by multiple callers.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Return the raw value, or None when the key does not exist."""

    @abstractmethod
    async def set(self, key: str, data: bytes, ttl: timedelta | None) -> None:
        """Store raw bytes. A None or non-positive TTL means no expiry."""

    @abstractmethod
    async def keys(self, pattern: str = "*") -> list[str]:
        """Enumerate keys matching a glob-style pattern."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Must not fail when the key is missing."""

    @abstractmethod
    async def count(self) -> int:
        """Number of keys in the namespace."""

    @abstractmethod
    async def flush(self) -> None:
        """Remove every key in the namespace."""

    @abstractmethod
    async def close(self) -> None:
        """Release the connection. Idempotent."""


class BaseBackendAdapter(ABC):
    """Connection settings plus a factory for backend handles."""

    store_type: str = "backend"

    def __init__(
        self,
        address: str,
        password: str = "",
        db: int = 0,
        username: str = "",
    ) -> None:
        self.address = address
        self.password = password
        self.db = db
        self.username = username

    @abstractmethod
    def connect(self) -> BaseBackendHandle:
        """Create a handle. Lazy: reachability is not verified here."""

    def describe(self) -> str:
        """Connection descriptor with the password masked."""
        return f"{self.store_type}://{self.username}:***@{self.address}/{self.db}"
