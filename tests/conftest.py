# tests/conftest.py - v2
"""Shared test fixtures for all unit tests.

Stores run against the in-process memory backend; the Redis client is
mocked where it is used. No external services required.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from cachestore.cache.crypto import AesGcmCryptoService
from cachestore.cache.memory_store import MemoryCacheStore
from cachestore.cache.options import with_crypto_service
from cachestore.logging.context import clear_context

# 32-byte key for AES-256
TEST_KEY = b"01234567890123456789012345678901"


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


# === FIXTURES: Crypto ===


@pytest.fixture
def crypto_service() -> AesGcmCryptoService:
    """AES-256-GCM service with a fixed key."""
    return AesGcmCryptoService(TEST_KEY)


# === FIXTURES: Stores ===


@pytest_asyncio.fixture
async def memory_store() -> AsyncIterator[MemoryCacheStore]:
    """Initialized plain memory store, closed after the test."""
    store = MemoryCacheStore()
    await store.init()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def encrypted_store(
    crypto_service: AesGcmCryptoService,
) -> AsyncIterator[MemoryCacheStore]:
    """Initialized memory store with AES-GCM value encryption."""
    store = MemoryCacheStore(with_crypto_service(crypto_service), db=1)
    await store.init()
    yield store
    await store.close()
