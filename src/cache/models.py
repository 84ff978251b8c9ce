# src/cache/models.py - v2
"""Cache domain models: CacheModel, CacheStoreInfo and the CacheValue alias."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, Field

# JSON-like payload accepted by every store. Nested containers hold the
# same kinds of values.
CacheValue = Union[str, bool, int, float, list[Any], dict[str, Any], None]


class CacheModel(BaseModel):
    """Single key-value entry as handed back by a cache store.

    ``expired_at`` is only meaningful when writing. Stores do not read the
    remaining TTL back from the backend, so returned entries carry ``None``.
    """

    key: str = Field(min_length=1)
    value: Any = None
    expired_at: datetime | None = None


class CacheStoreInfo(BaseModel):
    """Read-only snapshot of a store: type tag, item count, redacted DSN."""

    store_type: str
    num_items: int = 0
    connection_info: str = ""
