"""EncryptionService — envelope encryption with a silent degradation chain."""

from __future__ import annotations

import binascii
import logging

from secure_storage.config import resolve_passphrase
from secure_storage.crypto.aesgcm import AesGcmCipher, aead_available
from secure_storage.crypto.base import Cipher
from secure_storage.crypto.fallback import Base64Cipher, b64decode_text, b64encode_text

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 100_000


def select_cipher(passphrase: str, iterations: int) -> Cipher:
    """Pick the strongest cipher the running crypto backend supports."""
    if aead_available():
        return AesGcmCipher(passphrase, iterations)
    logger.warning("AES-GCM is unavailable; values will only be base64-encoded")
    return Base64Cipher()


class EncryptionService:
    """Encrypts and decrypts storage values.

    The cipher is chosen once, here, by probing the crypto backend.  Neither
    :meth:`encrypt` nor :meth:`decrypt` ever raises: a failing cipher
    degrades to base64 and the degradation is logged as a warning.

    Parameters:
        passphrase: Key-derivation secret.  Falls back to the
                    ``SECURE_STORAGE_ENCRYPTION_KEY`` environment variable,
                    then to a weak built-in constant.
        iterations: PBKDF2 iteration count.
        cipher:     Explicit cipher, bypassing the capability probe.
    """

    def __init__(
        self,
        passphrase: str | None = None,
        iterations: int | None = None,
        cipher: Cipher | None = None,
    ) -> None:
        resolved, is_default = resolve_passphrase(passphrase)
        if is_default:
            logger.warning(
                "No encryption passphrase configured; using the built-in default. "
                "Set SECURE_STORAGE_ENCRYPTION_KEY in production."
            )
        self.iterations = iterations or DEFAULT_ITERATIONS
        self._cipher = cipher or select_cipher(resolved, self.iterations)

    @property
    def cipher(self) -> Cipher:
        return self._cipher

    async def encrypt(self, plaintext: str) -> str:
        """Return the envelope for *plaintext*, or its base64 on cipher failure."""
        try:
            return await self._cipher.seal(plaintext)
        except Exception:
            logger.warning(
                "Encryption with %s failed; storing base64-encoded plaintext instead",
                self._cipher.name,
                exc_info=True,
            )
            return b64encode_text(plaintext)

    async def decrypt(self, envelope: str) -> str:
        """Return the plaintext inside *envelope*.

        On cipher failure, tries plain base64 decoding; if that fails too,
        *envelope* comes back unchanged.
        """
        try:
            return await self._cipher.open(envelope)
        except Exception:
            logger.warning(
                "Decryption with %s failed; falling back to base64 decoding",
                self._cipher.name,
                exc_info=True,
            )
        try:
            return b64decode_text(envelope)
        except (binascii.Error, ValueError):
            return envelope
