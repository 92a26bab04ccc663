"""Envelope encryption for stored values."""

from secure_storage.crypto.aesgcm import AesGcmCipher, aead_available
from secure_storage.crypto.base import Cipher
from secure_storage.crypto.fallback import Base64Cipher
from secure_storage.crypto.service import EncryptionService, select_cipher

__all__ = [
    "AesGcmCipher",
    "Base64Cipher",
    "Cipher",
    "EncryptionService",
    "aead_available",
    "select_cipher",
]
