"""End-to-end tests for the storage factory functions."""

import base64
from urllib.parse import unquote

import pytest

from secure_storage import (
    ClientContext,
    RequestContext,
    StorageUnavailableError,
    create_balanced_storage,
    create_secure_storage,
    create_storage,
    create_storage_from_preset,
)

FAST = {"iterations": 1_000, "passphrase": "test-passphrase"}


def raw_cookie(ctx, name):
    for cookie in ctx.cookies.jar:
        if cookie.name == name:
            return unquote(cookie.value)
    return None


async def test_secure_storage_encrypts_auth_token(client_ctx):
    storage = create_secure_storage(client_ctx)

    assert (await storage.cookies.set("nextapp_auth_token", "abc123")).success

    raw = raw_cookie(client_ctx, "nextapp_auth_token")
    assert raw != "abc123"
    assert len(base64.b64decode(raw, validate=True)) >= 28
    assert (await storage.cookies.get("nextapp_auth_token")).value == "abc123"


async def test_standard_storage_writes_plain_values(client_ctx, local_store):
    storage = create_storage(client_ctx)

    await storage.cookies.set("nextapp_theme", "light")
    await storage.local.set("nextapp_theme", "light")

    assert raw_cookie(client_ctx, "nextapp_theme") == "light"
    assert await local_store.get_item("nextapp_theme") == "light"


async def test_removing_never_set_key_succeeds(client_ctx):
    storage = create_storage(client_ctx)
    assert (await storage.cookies.remove("nextapp_never_set")).success
    assert (await storage.local.remove("nextapp_never_set")).success


async def test_balanced_storage_encrypts_selectively(client_ctx, local_store):
    storage = create_balanced_storage(client_ctx, FAST)

    await storage.local.set("nextapp_theme", "dark")
    await storage.local.set("nextapp_credit_card", "4111")

    assert await local_store.get_item("nextapp_theme") == "dark"
    assert await local_store.get_item("nextapp_credit_card") != "4111"
    assert (await storage.local.get("nextapp_credit_card")).value == "4111"


@pytest.mark.parametrize("preset", ["disabled", "secure", "balanced"])
@pytest.mark.parametrize("adapter", ["cookies", "local"])
async def test_round_trip_under_every_preset(preset, adapter, client_ctx):
    storage = create_storage_from_preset(preset, client_ctx, FAST)
    target = getattr(storage, adapter)
    value = {"user": "alice", "roles": ["admin"], "active": True}

    assert (await target.set("nextapp_user_profile", value)).success
    assert (await target.get("nextapp_user_profile")).value == value

    fresh = getattr(create_storage_from_preset(preset, client_ctx, FAST), adapter)
    assert (await fresh.get("nextapp_user_profile")).value == value


async def test_adapters_share_one_policy(client_ctx):
    storage = create_secure_storage(client_ctx, FAST)
    assert storage.cookies.policy is storage.local.policy
    assert storage.cookies.policy.iterations == 1_000
    assert storage.cookies.policy.enabled


async def test_overrides_enable_standard_storage(client_ctx):
    storage = create_storage(client_ctx, {**FAST, "enabled": True})
    await storage.cookies.set("nextapp_auth_token", "abc123")
    assert raw_cookie(client_ctx, "nextapp_auth_token") != "abc123"


async def test_local_unavailable_in_server_context(request_ctx):
    storage = create_storage(request_ctx)
    result = await storage.local.get("nextapp_theme")
    assert not result.success
    assert isinstance(result.error, StorageUnavailableError)


async def test_server_context_uses_headers(response):
    storage = create_storage(RequestContext(cookie_header="nextapp_theme=dark", response=response))
    assert (await storage.cookies.get("nextapp_theme")).value == "dark"
    await storage.cookies.set("nextapp_locale", "en")
    assert response.set_cookie_headers[0].startswith("nextapp_locale=en;")


async def test_context_defaults_to_in_memory_store():
    storage = create_storage(ClientContext())
    assert (await storage.local.set("nextapp_theme", "dark")).success
    assert (await storage.local.get("nextapp_theme")).value == "dark"


def test_unknown_preset():
    with pytest.raises(ValueError, match="Unknown preset 'paranoid'"):
        create_storage_from_preset("paranoid")
