# src/logging/context.py - v2
"""Contextual logging support: attach store and tenant to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

_store: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "store", default=None
)
_tenant: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tenant", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    store: str | None = None
    tenant: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(store=_store.get(), tenant=_tenant.get())


def set_store_context(store: str) -> None:
    """Set the redacted descriptor of the store being used."""
    _store.set(store)


def set_tenant_context(tenant: str | None) -> None:
    """Set the tenant whose keys are being processed."""
    _tenant.set(tenant)


@contextmanager
def log_context(store: str | None = None, tenant: str | None = None) -> Iterator[LogContext]:
    """Scope store/tenant context to a block, restoring previous values."""
    store_token = _store.set(store)
    tenant_token = _tenant.set(tenant)
    try:
        yield get_context()
    finally:
        _tenant.reset(tenant_token)
        _store.reset(store_token)


def clear_context() -> None:
    """Reset all context variables."""
    _store.set(None)
    _tenant.set(None)
