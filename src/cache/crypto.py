# src/cache/crypto.py - v1
"""Value envelope: canonical encoding plus optional encryption.

Values crossing the store boundary are serialized to compact JSON. When a
crypto service is attached, the JSON bytes are encrypted before they reach
the backend and decrypted after they come back. Decryption canonicalizes
numbers: integers come back as floats (42 -> 42.0).
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any, Protocol, runtime_checkable

from cachestore.cache.errors import CryptoError, SerializationError

_NONCE_SIZE = 12
_TAG_SIZE = 16
_VALID_KEY_SIZES = (16, 24, 32)


@runtime_checkable
class CryptoService(Protocol):
    """Authenticated encryption capability shared with a store."""

    def encrypt(self, plaintext: bytes) -> bytes: ...

    def decrypt(self, ciphertext: bytes) -> bytes: ...


class AesGcmCryptoService:
    """AES-GCM crypto service (AES-128/192/256 depending on key length).

    Ciphertext layout: nonce (12 bytes) || encrypted data || tag (16 bytes).
    """

    def __init__(self, key: bytes) -> None:
        if len(key) not in _VALID_KEY_SIZES:
            raise ValueError(
                f"AES key must be 16, 24 or 32 bytes, got {len(key)}"
            )
        try:
            from cryptography.hazmat.primitives.ciphers.aead import AESGCM
        except ImportError as e:
            raise ImportError(
                "cryptography package required: pip install cryptography"
            ) from e

        self._aesgcm = AESGCM(key)
        self._key_size = len(key)

    @classmethod
    def from_string(cls, secret: str) -> AesGcmCryptoService:
        """Build a service from a hex or base64 encoded key."""
        return cls(decode_key(secret))

    @property
    def key_size(self) -> int:
        return self._key_size

    def encrypt(self, plaintext: bytes) -> bytes:
        nonce = os.urandom(_NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, plaintext, None)

    def decrypt(self, ciphertext: bytes) -> bytes:
        from cryptography.exceptions import InvalidTag

        if len(ciphertext) < _NONCE_SIZE + _TAG_SIZE:
            raise CryptoError(
                f"ciphertext too short: {len(ciphertext)} bytes"
            )
        nonce, data = ciphertext[:_NONCE_SIZE], ciphertext[_NONCE_SIZE:]
        try:
            return self._aesgcm.decrypt(nonce, data, None)
        except InvalidTag as e:
            raise CryptoError("ciphertext failed authentication") from e


def decode_key(secret: str) -> bytes:
    """Decode a hex or base64 key string into raw key bytes.

    Raises:
        ValueError: If the string is neither, or decodes to a bad length.
    """
    secret = secret.strip()
    candidates: list[bytes] = []
    try:
        candidates.append(bytes.fromhex(secret))
    except ValueError:
        pass
    try:
        candidates.append(base64.b64decode(secret, validate=True))
    except (binascii.Error, ValueError):
        pass
    for key in candidates:
        if len(key) in _VALID_KEY_SIZES:
            return key
    raise ValueError(
        "encryption key must be hex or base64 encoding 16, 24 or 32 bytes"
    )


def encode_value(value: Any) -> bytes:
    """Serialize a value to its canonical byte form (compact JSON).

    Raises:
        SerializationError: If the value is not JSON-serializable.
    """
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal value: {e}") from e


def decode_value(data: bytes) -> Any:
    """Decode bytes written by encode_value.

    Data that is not valid JSON (written by a foreign client) is returned as
    its raw text, or as the raw bytes when it is not UTF-8 either.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return data
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class CryptoEnvelope:
    """Encrypt-on-write / decrypt-on-read wrapper around a crypto service.

    ``context`` is the redacted descriptor of the owning store; it prefixes
    every error message so failures can be traced to a backend without
    leaking credentials.
    """

    def __init__(self, service: CryptoService, context: str) -> None:
        self._service = service
        self._context = context

    def seal(self, value: Any) -> bytes:
        """Serialize and encrypt a value.

        Raises:
            SerializationError: Value cannot be encoded or encodes to nothing.
            CryptoError: The crypto service failed.
        """
        try:
            payload = encode_value(value)
        except SerializationError as e:
            raise SerializationError(f"'{self._context}' {e}") from e
        if len(payload) < 1:
            raise SerializationError(f"'{self._context}' failed: value is empty")
        try:
            return self._service.encrypt(payload)
        except Exception as e:
            raise CryptoError(
                f"'{self._context}' failed to encrypt value: {e}"
            ) from e

    def open(self, ciphertext: bytes) -> Any:
        """Decrypt and deserialize a stored value.

        Raises:
            CryptoError: Empty input, decryption failure or malformed payload.
        """
        if len(ciphertext) < 1:
            raise CryptoError(f"'{self._context}' failed: encrypted value is empty")
        try:
            plaintext = self._service.decrypt(ciphertext)
        except Exception as e:
            raise CryptoError(
                f"'{self._context}' failed to decrypt value: {e}"
            ) from e
        try:
            return json.loads(plaintext.decode("utf-8"), parse_int=float)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SerializationError(
                f"'{self._context}' failed to unmarshal value: {e}"
            ) from e
