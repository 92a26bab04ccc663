"""
secure_storage — Basic usage

One storage object, two physical stores. Values are JSON-serialized,
encrypted when the policy says so, and every call returns a
StorageResult instead of raising.
"""

import asyncio
from datetime import UTC, datetime

from secure_storage import (
    COOKIE_KEYS,
    LOCAL_STORAGE_KEYS,
    ClientContext,
    HeaderResponse,
    RequestContext,
    create_balanced_storage,
    create_secure_storage,
    create_storage,
    secure_cookie_options,
)


def show(label: str, ctx: ClientContext) -> None:
    print(f"  {label}")
    for cookie in ctx.cookies.jar:
        print(f"    cookie {cookie.name} = {cookie.value[:48]}")


async def standard_example() -> None:
    # ──────────────────────────────────────
    #  No encryption
    # ──────────────────────────────────────
    ctx = ClientContext(domain="app.example.com")
    storage = create_storage(ctx)

    await storage.cookies.set(COOKIE_KEYS["THEME"], "dark")
    await storage.local.set(
        LOCAL_STORAGE_KEYS["USER_SETTINGS"], {"font_size": "medium", "color_scheme": "system"}
    )

    theme = await storage.cookies.get(COOKIE_KEYS["THEME"])
    settings = await storage.local.get(LOCAL_STORAGE_KEYS["USER_SETTINGS"])
    print(f"  theme={theme.value}  settings={settings.value}")
    show("jar:", ctx)


async def secure_example() -> None:
    # ──────────────────────────────────────
    #  Encrypt every key (100 000 PBKDF2 iterations)
    # ──────────────────────────────────────
    ctx = ClientContext(domain="app.example.com")
    storage = create_secure_storage(ctx, {"passphrase": "example-passphrase"})

    await storage.cookies.set(COOKIE_KEYS["AUTH_TOKEN"], "eyJhbGciOiJIUzI1NiJ9...", secure_cookie_options())
    await storage.local.set(
        LOCAL_STORAGE_KEYS["USER_SETTINGS"],
        {"email": "user@example.com", "preferences": {"notifications": True}},
    )

    token = await storage.cookies.get(COOKIE_KEYS["AUTH_TOKEN"])
    settings = await storage.local.get(LOCAL_STORAGE_KEYS["USER_SETTINGS"])
    print(f"  token available={token.value is not None}  email={settings.value['email']}")
    show("jar (ciphertext):", ctx)


async def balanced_example() -> None:
    # ──────────────────────────────────────
    #  Encrypt only keys that look sensitive
    # ──────────────────────────────────────
    ctx = ClientContext(domain="app.example.com")
    storage = create_balanced_storage(ctx, {"passphrase": "example-passphrase"})

    await storage.cookies.set(COOKIE_KEYS["AUTH_TOKEN"], "eyJhbGciOiJIUzI1NiJ9...")  # encrypted
    await storage.cookies.set(COOKIE_KEYS["THEME"], "light")  # plain
    await storage.local.set(LOCAL_STORAGE_KEYS["LAST_VISIT"], datetime.now(UTC).isoformat())

    # Per-call overrides win over the key patterns
    await storage.local.set("app_metrics", {"usage": "high"}, force_encrypt=True)
    await storage.local.set("public_user_count", 42, force_encrypt=False)

    show("jar:", ctx)
    for key in await ctx.local_store.keys():
        print(f"    local  {key} = {(await ctx.local_store.get_item(key))[:48]}")


async def custom_example() -> None:
    # ──────────────────────────────────────
    #  Custom predicate and passphrase
    # ──────────────────────────────────────
    tokens = {COOKIE_KEYS["AUTH_TOKEN"], COOKIE_KEYS["REFRESH_TOKEN"]}
    ctx = ClientContext()
    storage = create_storage(
        ctx,
        {
            "enabled": True,
            "iterations": 5_000,
            "should_encrypt_key": lambda key: key in tokens,
            "passphrase": "my-custom-app-encryption-key",
        },
    )

    await storage.cookies.set(COOKIE_KEYS["AUTH_TOKEN"], "secret-token")  # encrypted
    await storage.cookies.set(COOKIE_KEYS["THEME"], "dark")  # plain
    show("jar:", ctx)


async def server_example() -> None:
    # ──────────────────────────────────────
    #  One inbound request, Set-Cookie out
    # ──────────────────────────────────────
    response = HeaderResponse()
    ctx = RequestContext(cookie_header="nextapp_theme=dark; nextapp_locale=en", response=response)
    storage = create_balanced_storage(ctx, {"passphrase": "example-passphrase"})

    theme = await storage.cookies.get(COOKIE_KEYS["THEME"])
    await storage.cookies.set(COOKIE_KEYS["AUTH_TOKEN"], "new-auth-token", secure_cookie_options())
    await storage.cookies.remove(COOKIE_KEYS["LOCALE"])

    # Not available on the server
    cleared = await storage.cookies.clear()
    local = await storage.local.get(LOCAL_STORAGE_KEYS["CART_ITEMS"])

    print(f"  theme from request={theme.value}")
    for header in response.set_cookie_headers:
        print(f"    Set-Cookie: {header[:80]}")
    print(f"  clear -> {type(cleared.error).__name__}")
    print(f"  local -> {type(local.error).__name__}")


async def main():
    for title, example in [
        ("Standard", standard_example),
        ("Secure", secure_example),
        ("Balanced", balanced_example),
        ("Custom", custom_example),
        ("Server", server_example),
    ]:
        print(f"\n{title}")
        await example()


if __name__ == "__main__":
    asyncio.run(main())
