"""Cache store contract, option functions and concrete stores."""

from cachestore.cache.base_cache_store import BaseCacheStore
from cachestore.cache.crypto import AesGcmCryptoService, CryptoService
from cachestore.cache.errors import (
    CacheStoreError,
    ConfigurationError,
    CryptoError,
    SerializationError,
    StoreClosedError,
    StoreNotReadyError,
)
from cachestore.cache.memory_store import MemoryCacheStore
from cachestore.cache.models import CacheModel, CacheStoreInfo
from cachestore.cache.options import (
    with_attribute,
    with_crypto_service,
    with_expiration,
    with_key,
    with_key_value,
    with_tenant_uuid,
)
from cachestore.cache.redis_store import RedisCacheStore
from cachestore.cache.store import CacheStore

__all__ = [
    "AesGcmCryptoService",
    "BaseCacheStore",
    "CacheModel",
    "CacheStore",
    "CacheStoreError",
    "CacheStoreInfo",
    "ConfigurationError",
    "CryptoError",
    "CryptoService",
    "MemoryCacheStore",
    "RedisCacheStore",
    "SerializationError",
    "StoreClosedError",
    "StoreNotReadyError",
    "with_attribute",
    "with_crypto_service",
    "with_expiration",
    "with_key",
    "with_key_value",
    "with_tenant_uuid",
]
