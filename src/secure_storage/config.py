"""Storage configuration: environment lookups, key catalogue and cookie options."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Literal

ENCRYPTION_KEY_ENV = "SECURE_STORAGE_ENCRYPTION_KEY"
DEPLOYMENT_MODE_ENV = "SECURE_STORAGE_ENV"

# Weak default, not a secret.  Deployments are expected to set ENCRYPTION_KEY_ENV.
DEFAULT_PASSPHRASE = "default-secure-key-change-in-production"

# Prefix for storage keys to avoid collisions with other applications
STORAGE_PREFIX = "nextapp_"

COOKIE_KEYS = {
    "AUTH_TOKEN": f"{STORAGE_PREFIX}auth_token",
    "REFRESH_TOKEN": f"{STORAGE_PREFIX}refresh_token",
    "USER_ID": f"{STORAGE_PREFIX}user_id",
    "THEME": f"{STORAGE_PREFIX}theme",
    "LOCALE": f"{STORAGE_PREFIX}locale",
    "CONSENT": f"{STORAGE_PREFIX}cookie_consent",
}

LOCAL_STORAGE_KEYS = {
    "USER_SETTINGS": f"{STORAGE_PREFIX}user_settings",
    "LAST_VISIT": f"{STORAGE_PREFIX}last_visit",
    "RECENT_SEARCHES": f"{STORAGE_PREFIX}recent_searches",
    "CART_ITEMS": f"{STORAGE_PREFIX}cart_items",
    "FORM_DRAFT": f"{STORAGE_PREFIX}form_draft",
}

SEVEN_DAYS = 60 * 60 * 24 * 7

SameSite = Literal["strict", "lax", "none"]


def deployment_mode() -> str:
    """Return the configured deployment mode (``development`` when unset)."""
    return os.getenv(DEPLOYMENT_MODE_ENV, "development").strip().lower()


def is_production() -> bool:
    return deployment_mode() == "production"


def resolve_passphrase(passphrase: str | None = None) -> tuple[str, bool]:
    """Pick the passphrase to derive keys from.

    Returns:
        ``(passphrase, is_default)`` where ``is_default`` flags the weak
        built-in constant.
    """
    if passphrase:
        return passphrase, False
    from_env = os.getenv(ENCRYPTION_KEY_ENV, "")
    if from_env:
        return from_env, False
    return DEFAULT_PASSPHRASE, True


@dataclass(frozen=True)
class CookieOptions:
    """Attributes applied to a cookie write or removal.

    Every field is optional; ``None`` means "not configured" so that
    :meth:`merge` can layer caller options over the defaults.

    Attributes:
        path:      ``Path`` attribute.
        domain:    ``Domain`` attribute.
        expires:   Absolute expiry (aware ``datetime``) or seconds from now.
                   Takes precedence over ``max_age``.
        max_age:   Lifetime in seconds.
        secure:    Send only over HTTPS.
        http_only: Hide from client-side scripts.
        same_site: ``"strict"``, ``"lax"`` or ``"none"``.
    """

    path: str | None = None
    domain: str | None = None
    expires: datetime | int | None = None
    max_age: int | None = None
    secure: bool | None = None
    http_only: bool | None = None
    same_site: SameSite | None = None

    def merge(self, overrides: CookieOptions | dict[str, Any] | None) -> CookieOptions:
        """Return a copy with every configured field of *overrides* applied."""
        if overrides is None:
            return self
        if isinstance(overrides, dict):
            overrides = CookieOptions(**overrides)
        changes = {
            f.name: getattr(overrides, f.name)
            for f in fields(overrides)
            if getattr(overrides, f.name) is not None
        }
        return replace(self, **changes)


def default_cookie_options() -> CookieOptions:
    """Defaults merged under every cookie write and removal."""
    return CookieOptions(
        path="/",
        max_age=SEVEN_DAYS,
        secure=is_production(),
        http_only=False,
        same_site="lax",
    )


def secure_cookie_options() -> CookieOptions:
    """Options for sensitive cookies such as auth tokens."""
    return default_cookie_options().merge(CookieOptions(http_only=True, same_site="strict"))
