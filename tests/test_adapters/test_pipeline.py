"""Tests for the shared adapter pipeline (BaseStorageAdapter)."""

import base64
import logging

import pytest

from secure_storage import EncryptionPolicy, LocalStorageAdapter
from secure_storage.config import DEPLOYMENT_MODE_ENV
from secure_storage.crypto import Base64Cipher, EncryptionService

FAST_ITERATIONS = 1_000
PASSPHRASE = "test-passphrase"


class CountingCipher(Base64Cipher):
    name = "counting"

    def __init__(self):
        self.opened = 0
        self.sealed = 0

    async def seal(self, plaintext: str) -> str:
        self.sealed += 1
        return await super().seal(plaintext)

    async def open(self, envelope: str) -> str:
        self.opened += 1
        return await super().open(envelope)


class RaisingService(EncryptionService):
    async def decrypt(self, envelope: str) -> str:
        raise RuntimeError("decrypt exploded")


@pytest.fixture
def cipher():
    return CountingCipher()


@pytest.fixture
def adapter(local_store, secure_policy, cipher):
    return LocalStorageAdapter(
        local_store,
        secure_policy,
        EncryptionService(PASSPHRASE, FAST_ITERATIONS, cipher=cipher),
    )


# ── process_for_storage ──────────────────────────────────────


async def test_strings_are_stored_verbatim(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    assert await adapter.process_for_storage("k", "light") == "light"


async def test_other_values_are_json(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    assert await adapter.process_for_storage("k", {"a": [1, 2]}) == '{"a": [1, 2]}'
    assert await adapter.process_for_storage("k", 42) == "42"
    assert await adapter.process_for_storage("k", None) == "null"


async def test_encrypts_when_policy_says_so(adapter, cipher):
    raw = await adapter.process_for_storage("k", {"a": 1})
    assert cipher.sealed == 1
    assert base64.b64decode(raw).decode() == '{"a": 1}'


async def test_force_true_encrypts_with_disabled_policy(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    raw = await adapter.process_for_storage("nextapp_theme", "dark-mode-value", force=True)
    assert "dark-mode-value" not in raw
    assert await adapter.encryption.decrypt(raw) == "dark-mode-value"


async def test_force_false_never_encrypts(adapter, cipher):
    raw = await adapter.process_for_storage("nextapp_auth_token", "abc123", force=False)
    assert raw == "abc123"
    assert cipher.sealed == 0


# ── process_from_storage ─────────────────────────────────────


async def test_plain_json_is_parsed(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    assert await adapter.process_from_storage("k", '{"a": 1}') == {"a": 1}


async def test_plain_non_json_is_literal(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    assert await adapter.process_from_storage("k", "light") == "light"


async def test_decrypted_non_json_is_literal(adapter):
    raw = await adapter.process_for_storage("k", "abc123")
    assert await adapter.process_from_storage("k", raw) == "abc123"


async def test_decrypt_failure_falls_back_to_raw_json(local_store, secure_policy):
    adapter = LocalStorageAdapter(
        local_store, secure_policy, RaisingService(PASSPHRASE, FAST_ITERATIONS)
    )
    assert await adapter.process_from_storage("k", '{"a": 1}') == {"a": 1}
    assert await adapter.process_from_storage("j", "light") == "light"


async def test_cache_hit_skips_decryption(adapter, cipher):
    raw = await adapter.process_for_storage("k", "abc123")
    assert await adapter.process_from_storage("k", raw) == "abc123"
    assert await adapter.process_from_storage("k", raw) == "abc123"
    assert cipher.opened == 1


async def test_cache_disabled(local_store, cipher):
    policy = EncryptionPolicy(
        enabled=True, should_encrypt_key=None, cache_decrypted=False, iterations=FAST_ITERATIONS
    )
    adapter = LocalStorageAdapter(
        local_store, policy, EncryptionService(PASSPHRASE, FAST_ITERATIONS, cipher=cipher)
    )
    raw = await adapter.process_for_storage("k", "abc123")
    await adapter.process_from_storage("k", raw)
    await adapter.process_from_storage("k", raw)
    assert cipher.opened == 2
    assert len(adapter.cache) == 0


async def test_cache_respects_policy_bound(local_store):
    policy = EncryptionPolicy(cache_max_entries=2)
    adapter = LocalStorageAdapter(local_store, policy)
    for key in ["a", "b", "c"]:
        await adapter.set(key, key)
    assert len(adapter.cache) == 2


async def test_write_caches_a_copy(adapter, local_store):
    value = {"items": [1]}
    await adapter.set("cart", value)
    value["items"].append(2)
    assert (await adapter.get("cart")).value == {"items": [1]}


async def test_read_returns_a_copy(local_store, plain_policy):
    await local_store.set_item("cart", '{"items": [1]}')
    adapter = LocalStorageAdapter(local_store, plain_policy)

    first = (await adapter.get("cart")).value
    first["items"].append(99)
    second = (await adapter.get("cart")).value
    second["items"].append(100)

    assert (await adapter.get("cart")).value == {"items": [1]}
    assert await local_store.get_item("cart") == '{"items": [1]}'


# ── error handling ───────────────────────────────────────────


async def test_errors_become_failures_and_are_logged(caplog):
    adapter = LocalStorageAdapter(None)
    with caplog.at_level(logging.ERROR):
        result = await adapter.get("k")
    assert not result.success
    assert "[Storage Error]" in caplog.text


async def test_errors_not_logged_in_production(monkeypatch, caplog):
    monkeypatch.setenv(DEPLOYMENT_MODE_ENV, "production")
    adapter = LocalStorageAdapter(None)
    with caplog.at_level(logging.ERROR):
        result = await adapter.get("k")
    assert not result.success
    assert "[Storage Error]" not in caplog.text


async def test_unserializable_value_is_a_failure(local_store, plain_policy):
    adapter = LocalStorageAdapter(local_store, plain_policy)
    result = await adapter.set("k", object())
    assert not result.success
    assert isinstance(result.error, TypeError)


async def test_encryption_service_is_built_lazily(local_store, caplog):
    adapter = LocalStorageAdapter(local_store, EncryptionPolicy())
    with caplog.at_level(logging.WARNING):
        await adapter.set("nextapp_theme", "dark")
        await adapter.get("nextapp_theme")
    assert adapter._encryption is None
    assert "No encryption passphrase configured" not in caplog.text
