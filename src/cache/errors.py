# src/cache/errors.py - v1
"""Exception hierarchy for cache stores.

Not-found is never an exception: ``get`` returns ``None``. Backend errors
(e.g. ``redis.exceptions.ConnectionError``) are not wrapped and reach the
caller unchanged.
"""

from __future__ import annotations


class CacheStoreError(Exception):
    """Base class for all errors raised by cachestore itself."""


class ConfigurationError(CacheStoreError):
    """An option function rejected its input or a required field is missing."""


class StoreStateError(CacheStoreError):
    """A data operation was attempted outside the READY state."""


class StoreNotReadyError(StoreStateError):
    """The store has not been initialized yet."""

    def __init__(self, store: str, operation: str):
        self.store = store
        self.operation = operation
        super().__init__(f"'{store}' {operation} failed: store is not initialized")


class StoreClosedError(StoreStateError):
    """The store has been closed."""

    def __init__(self, store: str, operation: str):
        self.store = store
        self.operation = operation
        super().__init__(f"'{store}' {operation} failed: store is closed")


class CryptoError(CacheStoreError):
    """Encryption or decryption of a value failed."""


class SerializationError(CryptoError):
    """A value could not be encoded to, or decoded from, its byte form."""
