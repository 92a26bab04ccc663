"""Tests for EncryptionService — cipher selection and the degradation chain."""

import base64
import logging

import pytest

from secure_storage.config import ENCRYPTION_KEY_ENV
from secure_storage.crypto import AesGcmCipher, Base64Cipher, Cipher, EncryptionService
from secure_storage.crypto import service as service_module


class BrokenCipher(Cipher):
    name = "broken"

    async def seal(self, plaintext: str) -> str:
        raise RuntimeError("seal failed")

    async def open(self, envelope: str) -> str:
        raise RuntimeError("open failed")


def b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


# ── cipher selection ─────────────────────────────────────────


def test_selects_aes_gcm_when_available():
    service = EncryptionService("pw", iterations=1_000)
    assert isinstance(service.cipher, AesGcmCipher)
    assert service.cipher.iterations == 1_000


def test_default_iterations():
    assert EncryptionService("pw").iterations == 100_000


def test_falls_back_to_base64_when_aead_unavailable(monkeypatch, caplog):
    monkeypatch.setattr(service_module, "aead_available", lambda: False)
    with caplog.at_level(logging.WARNING):
        service = EncryptionService("pw")
    assert isinstance(service.cipher, Base64Cipher)
    assert service.cipher.secure is False
    assert "AES-GCM is unavailable" in caplog.text


async def test_fallback_cipher_is_plain_base64():
    service = EncryptionService("pw", cipher=Base64Cipher())
    assert await service.encrypt("light") == b64("light")
    assert await service.decrypt(b64("light")) == "light"


def test_warns_about_default_passphrase(caplog):
    with caplog.at_level(logging.WARNING):
        EncryptionService(iterations=1_000)
    assert "No encryption passphrase configured" in caplog.text


def test_no_warning_with_env_passphrase(monkeypatch, caplog):
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, "env-secret")
    with caplog.at_level(logging.WARNING):
        EncryptionService(iterations=1_000)
    assert "No encryption passphrase configured" not in caplog.text


async def test_env_passphrase_is_used(monkeypatch):
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, "env-secret")
    envelope = await EncryptionService(iterations=1_000).encrypt("abc123")
    assert await AesGcmCipher("env-secret", 1_000).open(envelope) == "abc123"


# ── round trip ───────────────────────────────────────────────


async def test_encrypt_decrypt():
    service = EncryptionService("pw", iterations=1_000)
    envelope = await service.encrypt("abc123")
    assert envelope != "abc123"
    assert await service.decrypt(envelope) == "abc123"


# ── degradation chain ────────────────────────────────────────


async def test_encrypt_failure_degrades_to_base64(caplog):
    service = EncryptionService("pw", cipher=BrokenCipher())
    with caplog.at_level(logging.WARNING):
        assert await service.encrypt("abc123") == b64("abc123")
    assert "Encryption with broken failed" in caplog.text


async def test_decrypt_failure_tries_base64(caplog):
    service = EncryptionService("pw", cipher=BrokenCipher())
    with caplog.at_level(logging.WARNING):
        assert await service.decrypt(b64("abc123")) == "abc123"
    assert "Decryption with broken failed" in caplog.text


async def test_decrypt_returns_input_as_last_resort():
    service = EncryptionService("pw", cipher=BrokenCipher())
    assert await service.decrypt("not base64!") == "not base64!"


async def test_decrypt_plain_value_under_aes():
    service = EncryptionService("pw", iterations=1_000)
    # Too short for an envelope and not valid base64
    assert await service.decrypt("light") == "light"


async def test_decrypt_with_wrong_passphrase_never_raises():
    envelope = await EncryptionService("one", iterations=1_000).encrypt("abc123")
    result = await EncryptionService("two", iterations=1_000).decrypt(envelope)
    assert result != "abc123"


@pytest.mark.parametrize("text", ["", "x", "héllo"])
async def test_base64_fallback_round_trip(text):
    service = EncryptionService("pw", cipher=BrokenCipher())
    assert await service.decrypt(await service.encrypt(text)) == text
