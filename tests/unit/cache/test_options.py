# tests/unit/cache/test_options.py - v1
"""Tests for cache/options.py - option bags and option functions."""

from __future__ import annotations

from datetime import timedelta

import pytest

from cachestore.cache.errors import ConfigurationError
from cachestore.cache.options import (
    DEFAULT_EXPIRATION,
    CacheStoreDeleteOptions,
    CacheStoreGetOptions,
    CacheStoreListOptions,
    CacheStoreOptions,
    CacheStoreSetOptions,
    apply_options,
    with_attribute,
    with_crypto_service,
    with_expiration,
    with_key,
    with_key_value,
    with_tenant_uuid,
)


class _FakeCrypto:
    def encrypt(self, plaintext: bytes) -> bytes:
        return plaintext

    def decrypt(self, ciphertext: bytes) -> bytes:
        return ciphertext


class TestDefaults:
    def test_store_options_empty(self):
        opts = CacheStoreOptions()
        assert opts.attributes == {}
        assert opts.crypto_service is None

    def test_set_defaults(self):
        opts = CacheStoreSetOptions()
        assert opts.key == ""
        assert opts.has_value is False
        assert opts.expiration == DEFAULT_EXPIRATION == timedelta(seconds=60)

    def test_bags_are_independent(self):
        a = CacheStoreOptions()
        b = CacheStoreOptions()
        a.attributes["x"] = 1
        assert b.attributes == {}


class TestStoreOptions:
    def test_with_attribute(self):
        opts = apply_options(CacheStoreOptions(), [with_attribute("key1", "value")])
        assert opts.attributes.get("key1") == "value"
        assert opts.attributes.get("missing") is None

    def test_attribute_overwrite_keeps_order(self):
        opts = apply_options(
            CacheStoreOptions(),
            [with_attribute("a", 1), with_attribute("b", 2), with_attribute("a", 3)],
        )
        assert list(opts.attributes.items()) == [("a", 3), ("b", 2)]

    def test_with_crypto_service(self):
        service = _FakeCrypto()
        opts = apply_options(CacheStoreOptions(), [with_crypto_service(service)])
        assert opts.crypto_service is service

    def test_with_crypto_service_none(self):
        with pytest.raises(ConfigurationError, match="must not be None"):
            apply_options(CacheStoreOptions(), [with_crypto_service(None)])

    def test_with_crypto_service_invalid(self):
        with pytest.raises(ConfigurationError, match="encrypt"):
            apply_options(CacheStoreOptions(), [with_crypto_service(object())])  # type: ignore[arg-type]


class TestCallOptions:
    def test_with_key_get(self):
        opts = apply_options(CacheStoreGetOptions(), [with_key("k1")])
        assert opts.key == "k1"

    def test_with_key_delete(self):
        opts = apply_options(CacheStoreDeleteOptions(), [with_key("k1")])
        assert opts.key == "k1"

    def test_with_key_empty(self):
        with pytest.raises(ConfigurationError, match="empty"):
            apply_options(CacheStoreGetOptions(), [with_key("")])

    def test_with_key_value(self):
        opts = apply_options(CacheStoreSetOptions(), [with_key_value("k", {"a": 1})])
        assert opts.key == "k"
        assert opts.value == {"a": 1}
        assert opts.has_value is True

    def test_with_key_value_none_value_counts_as_set(self):
        opts = apply_options(CacheStoreSetOptions(), [with_key_value("k", None)])
        assert opts.has_value is True

    def test_with_key_value_empty_key(self):
        with pytest.raises(ConfigurationError):
            apply_options(CacheStoreSetOptions(), [with_key_value("", "v")])

    def test_with_expiration_timedelta(self):
        opts = apply_options(
            CacheStoreSetOptions(), [with_expiration(timedelta(milliseconds=100))]
        )
        assert opts.expiration == timedelta(milliseconds=100)

    def test_with_expiration_seconds(self):
        opts = apply_options(CacheStoreSetOptions(), [with_expiration(2.5)])
        assert opts.expiration == timedelta(seconds=2.5)

    def test_with_expiration_non_positive_passes_through(self):
        opts = apply_options(CacheStoreSetOptions(), [with_expiration(0)])
        assert opts.expiration == timedelta(0)

    def test_with_expiration_rejects_other_types(self):
        with pytest.raises(ConfigurationError, match="expiration"):
            apply_options(CacheStoreSetOptions(), [with_expiration("60")])  # type: ignore[arg-type]

    @pytest.mark.parametrize("seconds", [1e20, float("nan")])
    def test_with_expiration_rejects_unrepresentable(self, seconds):
        with pytest.raises(ConfigurationError, match="out of range"):
            apply_options(CacheStoreSetOptions(), [with_expiration(seconds)])

    def test_with_tenant_uuid(self):
        opts = apply_options(CacheStoreListOptions(), [with_tenant_uuid("tenant1")])
        assert opts.tenant_uuid == "tenant1"


class TestApplyOptions:
    def test_first_error_stops_application(self):
        calls: list[str] = []

        def record(name):
            def _apply(opts):
                calls.append(name)
                return opts
            return _apply

        opts = CacheStoreOptions()
        with pytest.raises(ConfigurationError):
            apply_options(
                opts,
                [record("a"), with_attribute("kept", True), with_crypto_service(None), record("b")],
            )
        assert calls == ["a"]
        # Options before the rejection stay applied
        assert opts.attributes["kept"] is True

    def test_last_option_wins(self):
        opts = apply_options(
            CacheStoreSetOptions(),
            [with_key_value("k", "v1"), with_key_value("k", "v2")],
        )
        assert opts.value == "v2"
