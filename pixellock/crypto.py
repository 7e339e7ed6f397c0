"""AES-GCM encryption primitives and key handling."""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16
_VALID_AES_KEY_SIZES = frozenset({16, 24, 32})


class InvalidKeyError(ValueError):
    """Raised when a key is malformed or has the wrong length."""


class DecryptionError(ValueError):
    """Raised when ciphertext cannot be authenticated or decrypted."""


def _cipher(key: bytes) -> AESGCM:
    if len(key) not in _VALID_AES_KEY_SIZES:
        raise InvalidKeyError(
            f"failed to create cipher: invalid key size {len(key)}"
        )
    return AESGCM(bytes(key))


def generate_random_key() -> bytes:
    """Return a fresh random AES-256 key."""
    return os.urandom(KEY_SIZE)


def encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt with AES-GCM; the random nonce is prepended to the result."""
    cipher = _cipher(key)
    nonce = os.urandom(NONCE_SIZE)
    return nonce + cipher.encrypt(nonce, bytes(plaintext), None)


def decrypt(key: bytes, ciphertext: bytes) -> bytes:
    """Decrypt data produced by :func:`encrypt`."""
    cipher = _cipher(key)
    if len(ciphertext) < NONCE_SIZE:
        raise DecryptionError("ciphertext too short")
    nonce, body = bytes(ciphertext[:NONCE_SIZE]), bytes(ciphertext[NONCE_SIZE:])
    try:
        return cipher.decrypt(nonce, body, None)
    except InvalidTag as exc:
        raise DecryptionError("failed to open GCM: message authentication failed") from exc


def encode_key(key: bytes) -> str:
    """Return the standard base64 text form of a key."""
    return base64.b64encode(key).decode("ascii")


def decode_key(text: str) -> bytes:
    """Decode a base64 key and check that it is an AES-256 key."""
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        key = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidKeyError(f"failed to decode key: {exc}") from exc
    if len(key) != KEY_SIZE:
        raise InvalidKeyError(
            f"invalid key size: key must be {KEY_SIZE} bytes when base64 decoded"
        )
    return key