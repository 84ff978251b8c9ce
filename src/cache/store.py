# src/cache/store.py - v1
"""Backend-independent cache store: options, value envelope, tenant filter.

CacheStore implements the whole BaseCacheStore contract on top of any
BaseBackendAdapter. Concrete stores (RedisCacheStore, MemoryCacheStore)
only choose the adapter.

Tenant convention: keys may start with ``"<tenantUuid>-"``. Nothing
enforces it; list() uses it as a plain prefix filter.

Enumeration reads every key of the namespace and fetches the matching ones
one by one (N+1 round trips, no pagination). This is a known scalability
ceiling of the store, not a tuning knob.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from cachestore.cache.backends.base_backend import BaseBackendAdapter, BaseBackendHandle
from cachestore.cache.base_cache_store import BaseCacheStore
from cachestore.cache.crypto import CryptoEnvelope, decode_value, encode_value
from cachestore.cache.errors import (
    ConfigurationError,
    CryptoError,
    StoreClosedError,
    StoreNotReadyError,
)
from cachestore.cache.models import CacheModel, CacheStoreInfo
from cachestore.cache.options import (
    CacheStoreDeleteOption,
    CacheStoreDeleteOptions,
    CacheStoreGetOption,
    CacheStoreGetOptions,
    CacheStoreListOption,
    CacheStoreListOptions,
    CacheStoreOption,
    CacheStoreOptions,
    CacheStoreSetOption,
    CacheStoreSetOptions,
    apply_options,
)
from cachestore.logging.context import log_context

logger = logging.getLogger(__name__)

TENANT_SEPARATOR = "-"


class StoreState(str, enum.Enum):
    NEW = "new"
    READY = "ready"
    CLOSED = "closed"


def tenant_prefix(tenant_uuid: str) -> str:
    """Key prefix selecting one tenant's entries."""
    if tenant_uuid.endswith(TENANT_SEPARATOR):
        return tenant_uuid
    return tenant_uuid + TENANT_SEPARATOR


def _is_valid_key(key: str) -> bool:
    """Keys written by other clients may be empty or carry escaped raw bytes."""
    if not key:
        return False
    try:
        key.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class CacheStore(BaseCacheStore):
    """Cache store delegating storage to a backend adapter.

    Options given to the constructor are applied immediately; a rejected
    option makes the constructor raise ConfigurationError. Options given to
    init() are applied before the handle is created.
    """

    def __init__(self, adapter: BaseBackendAdapter, *opts: CacheStoreOption) -> None:
        self._adapter = adapter
        self._options = apply_options(CacheStoreOptions(), opts)
        self._handle: BaseBackendHandle | None = None
        self._envelope: CryptoEnvelope | None = None
        self._state = StoreState.NEW

    # --- Lifecycle ---

    async def init(self, *opts: CacheStoreOption) -> None:
        previous = self._options.crypto_service
        apply_options(self._options, opts)
        # Fixed once the store has been initialized, closing does not unlock it
        if self._state is not StoreState.NEW and self._options.crypto_service is not previous:
            self._options.crypto_service = previous
            raise ConfigurationError(
                f"'{self}' crypto service cannot be changed after init"
            )

        if self._handle is None:
            self._handle = self._adapter.connect()
        service = self._options.crypto_service
        self._envelope = CryptoEnvelope(service, str(self)) if service is not None else None
        self._state = StoreState.READY
        logger.debug(
            "Cache store %s ready (encryption=%s)", self, self._envelope is not None
        )

    async def close(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        self._state = StoreState.CLOSED
        logger.debug("Closing cache store %s", self)
        await handle.close()

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def options(self) -> CacheStoreOptions:
        return self._options

    @property
    def encrypted(self) -> bool:
        """True when values pass through the crypto envelope."""
        return self._options.crypto_service is not None

    # --- Data operations ---

    async def get(self, *opts: CacheStoreGetOption) -> CacheModel | None:
        get_opts = apply_options(CacheStoreGetOptions(), opts)
        if not get_opts.key:
            raise ConfigurationError("get requires a key")
        handle = self._require_handle("get")

        raw = await handle.get(get_opts.key)
        if raw is None:
            return None
        return CacheModel(key=get_opts.key, value=self._decode(raw))

    async def set(self, *opts: CacheStoreSetOption) -> None:
        set_opts = apply_options(CacheStoreSetOptions(), opts)
        if not set_opts.key:
            raise ConfigurationError("set requires a key")
        if not set_opts.has_value:
            raise ConfigurationError("set requires a value")
        handle = self._require_handle("set")

        # Encrypt before anything is written
        payload = self._encode(set_opts.value)
        await handle.set(set_opts.key, payload, set_opts.expiration)

    async def list(
        self, *opts: CacheStoreListOption
    ) -> tuple[list[CacheModel], int]:
        list_opts = apply_options(CacheStoreListOptions(), opts)
        handle = self._require_handle("list")

        prefix = tenant_prefix(list_opts.tenant_uuid) if list_opts.tenant_uuid else ""
        items: list[CacheModel] = []
        with log_context(store=str(self), tenant=list_opts.tenant_uuid or None):
            for key in await handle.keys("*"):
                if prefix and not key.startswith(prefix):
                    continue
                if not _is_valid_key(key):
                    logger.warning("Skipping entry %r: key is empty or not UTF-8", key)
                    continue
                raw = await handle.get(key)
                if raw is None:
                    # Expired or deleted since enumeration
                    continue
                try:
                    value = self._decode(raw)
                except CryptoError as e:
                    logger.warning("Skipping entry %r: %s", key, e)
                    continue
                items.append(CacheModel(key=key, value=value))
        return items, len(items)

    async def delete(self, *opts: CacheStoreDeleteOption) -> None:
        delete_opts = apply_options(CacheStoreDeleteOptions(), opts)
        if not delete_opts.key:
            raise ConfigurationError("delete requires a key")
        handle = self._require_handle("delete")
        await handle.delete(delete_opts.key)

    async def total(self) -> int:
        if self._handle is None:
            return 0
        return await self._handle.count()

    async def info(self) -> CacheStoreInfo:
        return CacheStoreInfo(
            store_type=self._adapter.store_type,
            num_items=await self.total(),
            connection_info=str(self),
        )

    async def reset(self) -> None:
        handle = self._require_handle("reset")
        logger.debug("Flushing namespace of %s", self)
        await handle.flush()

    def __str__(self) -> str:
        return self._adapter.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self}, state={self._state.value})"

    # --- Internals ---

    def _require_handle(self, operation: str) -> BaseBackendHandle:
        if self._handle is not None:
            return self._handle
        if self._state is StoreState.CLOSED:
            raise StoreClosedError(str(self), operation)
        raise StoreNotReadyError(str(self), operation)

    def _encode(self, value: Any) -> bytes:
        if self._envelope is not None:
            return self._envelope.seal(value)
        return encode_value(value)

    def _decode(self, raw: bytes) -> Any:
        if self._envelope is not None:
            return self._envelope.open(raw)
        return decode_value(raw)
