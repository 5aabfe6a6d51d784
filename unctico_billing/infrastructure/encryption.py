"""Authenticated encryption for stored billing files."""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from unctico_billing.domain.errors import PersistenceError

NONCE_SIZE = 12
_KEY_SIZES = (16, 24, 32)


class AesGcmCipher:
    """AES-GCM cipher storing ``nonce || ciphertext`` blobs.

    A fresh random nonce is drawn for every encryption. Decrypting data that
    was modified, or encrypted with another key, raises ``PersistenceError``.
    """

    def __init__(self, key: bytes) -> None:
        if len(key) not in _KEY_SIZES:
            raise ValueError(
                "Encryption key must be 16, 24 or 32 bytes, "
                f"got {len(key)}"
            )
        self._aead = AESGCM(key)

    @classmethod
    def from_encoded_key(cls, encoded_key: str) -> "AesGcmCipher":
        """Build a cipher from a url-safe base64 key.

        Raises:
            ValueError: When the key is not valid base64 or has a bad size.
        """
        try:
            key = base64.urlsafe_b64decode(encoded_key.strip())
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Encryption key is not valid base64") from exc
        return cls(key)

    @staticmethod
    def generate_key() -> str:
        return base64.urlsafe_b64encode(AESGCM.generate_key(256)).decode()

    def encrypt(self, plaintext: bytes) -> bytes:
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._aead.encrypt(nonce, plaintext, None)

    def decrypt(self, blob: bytes) -> bytes:
        if len(blob) <= NONCE_SIZE:
            raise PersistenceError("Encrypted data is truncated")
        nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            return self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as exc:
            raise PersistenceError(
                "Encrypted data failed authentication"
            ) from exc


__all__ = ["AesGcmCipher", "NONCE_SIZE"]
