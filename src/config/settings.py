# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings. Every field maps
to a ``CACHESTORE_``-prefixed environment variable, e.g.
``CACHESTORE_REDIS_ADDRESS=cache.internal:6379``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cachestore.cache.crypto import decode_key
from cachestore.cache.errors import ConfigurationError

__all__ = ["ConfigurationError", "Settings", "load_settings"]


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CACHESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Backend ===
    backend: Literal["redis", "memory"] = "redis"
    redis_address: str = "localhost:6379"
    redis_username: str = ""
    redis_password: str = ""
    redis_db: int = 0

    # === Entries ===
    default_expiration_s: float = 60.0

    # === Encryption ===
    # Hex or base64 AES key (16, 24 or 32 bytes). Empty disables encryption.
    encryption_key: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("redis_db")
    @classmethod
    def validate_redis_db(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("redis_db must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.backend == "redis":
            _, sep, port = self.redis_address.rpartition(":")
            if not sep or not port.isdigit():
                errors.append(
                    f"REDIS_ADDRESS must be host:port, got {self.redis_address!r}"
                )

        if self.encryption_key:
            try:
                decode_key(self.encryption_key)
            except ValueError as e:
                errors.append(f"ENCRYPTION_KEY invalid: {e}")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-command config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
