"""Storage factory — wires a policy preset into both adapters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from secure_storage.adapters.cookies import CookieAdapter
from secure_storage.adapters.local import LocalStorageAdapter
from secure_storage.context import ClientContext, RequestContext
from secure_storage.policy import (
    BALANCED_POLICY,
    DISABLED_POLICY,
    PRESETS,
    SECURE_POLICY,
    EncryptionPolicy,
)

Context = ClientContext | RequestContext | None


@dataclass(frozen=True)
class Storage:
    """The pair of adapters handed to application code."""

    cookies: CookieAdapter
    local: LocalStorageAdapter


def _build(context: Context, policy: EncryptionPolicy) -> Storage:
    local_store = context.local_store if isinstance(context, ClientContext) else None
    return Storage(
        cookies=CookieAdapter(context, policy),
        local=LocalStorageAdapter(local_store, policy),
    )


def _apply(preset: EncryptionPolicy, overrides: Mapping[str, Any] | None) -> EncryptionPolicy:
    return preset.with_overrides(**overrides) if overrides else preset


def create_storage(
    context: Context = None,
    overrides: Mapping[str, Any] | None = None,
) -> Storage:
    """Create cookie and local storage, unencrypted unless *overrides* say otherwise.

    Parameters:
        context:   :class:`ClientContext` for an interactive session,
                   :class:`RequestContext` for a server request.
        overrides: Policy fields layered over :data:`DISABLED_POLICY`.
    """
    return _build(context, _apply(DISABLED_POLICY, overrides))


def create_secure_storage(
    context: Context = None,
    overrides: Mapping[str, Any] | None = None,
) -> Storage:
    """Create storage that encrypts every key with 100 000 PBKDF2 iterations."""
    return _build(context, _apply(SECURE_POLICY, overrides))


def create_balanced_storage(
    context: Context = None,
    overrides: Mapping[str, Any] | None = None,
) -> Storage:
    """Create storage that encrypts only keys that look sensitive."""
    return _build(context, _apply(BALANCED_POLICY, overrides))


def create_storage_from_preset(
    preset: str,
    context: Context = None,
    overrides: Mapping[str, Any] | None = None,
) -> Storage:
    """Create storage from a preset name (``disabled``, ``secure``, ``balanced``)."""
    try:
        policy = PRESETS[preset]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}'. Available: {', '.join(sorted(PRESETS))}"
        ) from None
    return _build(context, _apply(policy, overrides))
