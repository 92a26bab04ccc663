"""AesGcmCipher — PBKDF2-HMAC-SHA256 key derivation plus AES-256-GCM.

Envelope layout (before base64)::

    salt (16 bytes) || iv (12 bytes) || ciphertext + GCM tag

A fresh salt and IV are drawn for every ``seal`` call, so sealing the same
plaintext twice never yields the same envelope.
"""

from __future__ import annotations

import asyncio
import base64
import os

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from secure_storage.crypto.base import Cipher
from secure_storage.exceptions import EnvelopeError

SALT_LEN = 16
IV_LEN = 12
KEY_LEN = 32
HEADER_LEN = SALT_LEN + IV_LEN


def derive_key(passphrase: str, salt: bytes, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LEN,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def split_envelope(raw: bytes) -> tuple[bytes, bytes, bytes]:
    """Split a decoded envelope into ``(salt, iv, ciphertext)``."""
    if len(raw) < HEADER_LEN:
        raise EnvelopeError(f"Envelope is {len(raw)} bytes, expected at least {HEADER_LEN}")
    return raw[:SALT_LEN], raw[SALT_LEN:HEADER_LEN], raw[HEADER_LEN:]


def aead_available() -> bool:
    """Probe the installed crypto backend with a throwaway AES-GCM seal."""
    try:
        AESGCM(os.urandom(KEY_LEN)).encrypt(os.urandom(IV_LEN), b"probe", None)
        PBKDF2HMAC(algorithm=hashes.SHA256(), length=KEY_LEN, salt=b"0" * SALT_LEN, iterations=1)
    except (UnsupportedAlgorithm, InternalError):
        return False
    return True


class AesGcmCipher(Cipher):
    """Authenticated encryption keyed from a passphrase.

    Parameters:
        passphrase: Secret input to key derivation.  Never stored.
        iterations: PBKDF2 iteration count.
    """

    name = "aes-256-gcm"

    def __init__(self, passphrase: str, iterations: int) -> None:
        if iterations < 1:
            raise ValueError("iterations must be a positive integer")
        self._passphrase = passphrase
        self.iterations = iterations

    @property
    def secure(self) -> bool:
        return True

    def _seal_sync(self, plaintext: str) -> str:
        salt = os.urandom(SALT_LEN)
        key = derive_key(self._passphrase, salt, self.iterations)
        iv = os.urandom(IV_LEN)
        ciphertext = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        return base64.b64encode(salt + iv + ciphertext).decode("ascii")

    def _open_sync(self, envelope: str) -> str:
        salt, iv, ciphertext = split_envelope(base64.b64decode(envelope, validate=True))
        key = derive_key(self._passphrase, salt, self.iterations)
        return AESGCM(key).decrypt(iv, ciphertext, None).decode("utf-8")

    async def seal(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._seal_sync, plaintext)

    async def open(self, envelope: str) -> str:
        return await asyncio.to_thread(self._open_sync, envelope)
