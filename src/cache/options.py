# src/cache/options.py - v1
"""Option bags and option functions for cache stores.

Every bag starts empty and is filled by applying option functions left to
right. An option function receives the bag, mutates it and returns it, or
raises ConfigurationError. The first rejection aborts the whole sequence;
options applied before it stay applied.

Usage:
    store = MemoryCacheStore(
        with_attribute("owner", "billing"),
        with_crypto_service(AesGcmCryptoService(key)),
    )
    await store.set(with_key_value("tenant1-session", {"user": "jd"}),
                    with_expiration(timedelta(minutes=5)))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Iterable, TypeVar

from cachestore.cache.crypto import CryptoService
from cachestore.cache.errors import ConfigurationError

DEFAULT_EXPIRATION = timedelta(seconds=60)

# Marks a Set bag whose value has not been supplied yet.
_UNSET: Any = object()


@dataclass
class CacheStoreOptions:
    """Store-lifetime configuration.

    ``attributes`` keeps insertion order and is never interpreted by the
    store. The crypto service is shared with the caller, not owned.
    """

    attributes: dict[str, Any] = field(default_factory=dict)
    crypto_service: CryptoService | None = None


@dataclass
class CacheStoreGetOptions:
    key: str = ""


@dataclass
class CacheStoreSetOptions:
    key: str = ""
    value: Any = _UNSET
    expiration: timedelta = DEFAULT_EXPIRATION

    @property
    def has_value(self) -> bool:
        return self.value is not _UNSET


@dataclass
class CacheStoreListOptions:
    tenant_uuid: str = ""


@dataclass
class CacheStoreDeleteOptions:
    key: str = ""


CacheStoreOption = Callable[[CacheStoreOptions], CacheStoreOptions]
CacheStoreGetOption = Callable[[CacheStoreGetOptions], CacheStoreGetOptions]
CacheStoreSetOption = Callable[[CacheStoreSetOptions], CacheStoreSetOptions]
CacheStoreListOption = Callable[[CacheStoreListOptions], CacheStoreListOptions]
CacheStoreDeleteOption = Callable[[CacheStoreDeleteOptions], CacheStoreDeleteOptions]

T = TypeVar("T")


def apply_options(bag: T, opts: Iterable[Callable[[T], T]]) -> T:
    """Apply option functions in order, stopping at the first rejection.

    Raises:
        ConfigurationError: Raised by the first option that rejects the bag.
    """
    for opt in opts:
        bag = opt(bag)
    return bag


# --- Store options ---


def with_attribute(name: str, value: Any) -> CacheStoreOption:
    """Insert or overwrite a caller-defined attribute."""

    def _apply(opts: CacheStoreOptions) -> CacheStoreOptions:
        opts.attributes[name] = value
        return opts

    return _apply


def with_crypto_service(service: CryptoService | None) -> CacheStoreOption:
    """Attach the crypto capability that switches on value encryption."""

    def _apply(opts: CacheStoreOptions) -> CacheStoreOptions:
        if service is None:
            raise ConfigurationError("crypto service must not be None")
        if not (callable(getattr(service, "encrypt", None))
                and callable(getattr(service, "decrypt", None))):
            raise ConfigurationError(
                f"crypto service {type(service).__name__} must provide "
                "encrypt() and decrypt()"
            )
        opts.crypto_service = service
        return opts

    return _apply


# --- Per-call options ---


def with_key(key: str) -> Callable[[Any], Any]:
    """Select the key for a Get or Delete call."""

    def _apply(opts: Any) -> Any:
        if not key:
            raise ConfigurationError("key must not be empty")
        opts.key = key
        return opts

    return _apply


def with_key_value(key: str, value: Any) -> CacheStoreSetOption:
    """Set key and value of a Set call at once."""

    def _apply(opts: CacheStoreSetOptions) -> CacheStoreSetOptions:
        if not key:
            raise ConfigurationError("key must not be empty")
        opts.key = key
        opts.value = value
        return opts

    return _apply


def with_expiration(expiration: timedelta | float) -> CacheStoreSetOption:
    """Override the default TTL of a Set call.

    Seconds are accepted as well as timedelta. A non-positive duration
    stores the entry without expiration.
    """

    def _apply(opts: CacheStoreSetOptions) -> CacheStoreSetOptions:
        if isinstance(expiration, timedelta):
            opts.expiration = expiration
        elif isinstance(expiration, (int, float)) and not isinstance(expiration, bool):
            try:
                opts.expiration = timedelta(seconds=expiration)
            except (OverflowError, ValueError) as e:
                raise ConfigurationError(
                    f"expiration out of range: {expiration!r}"
                ) from e
        else:
            raise ConfigurationError(
                f"expiration must be a timedelta or seconds, got {type(expiration).__name__}"
            )
        return opts

    return _apply


def with_tenant_uuid(tenant_uuid: str) -> CacheStoreListOption:
    """Restrict a List call to keys prefixed with the tenant identifier."""

    def _apply(opts: CacheStoreListOptions) -> CacheStoreListOptions:
        opts.tenant_uuid = tenant_uuid
        return opts

    return _apply

