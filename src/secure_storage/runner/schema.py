# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of
``python -m secure_storage.runner``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class LocalStoreConfigSchema(BaseModel):
    """Device-local store configuration (client mode only).

    Attributes:
        type: Store type ("memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
        origin: Origin scope inside the database file
    """

    type: Literal["memory", "sqlite"] = "memory"
    path: str = ""
    origin: str = "default"


class CookieOptionsSchema(BaseModel):
    """Cookie attributes for a single set/remove operation."""

    path: str | None = None
    domain: str | None = None
    expires: datetime | int | None = None
    max_age: int | None = None
    secure: bool | None = None
    http_only: bool | None = None
    same_site: Literal["strict", "lax", "none"] | None = None


class PolicyOverridesSchema(BaseModel):
    """Encryption policy fields layered over the chosen preset.

    Attributes:
        enabled: Master encryption switch
        iterations: PBKDF2 iteration count
        passphrase: Key-derivation secret
        cache_decrypted: Whether adapters cache decoded values
        cache_max_entries: LRU bound of the decoded-value cache
        encrypt_patterns: Substrings selecting the keys to encrypt
    """

    enabled: bool | None = None
    iterations: int | None = None
    passphrase: str | None = None
    cache_decrypted: bool | None = None
    cache_max_entries: int | None = None
    encrypt_patterns: list[str] | None = None


class OperationSchema(BaseModel):
    """One storage call.

    Attributes:
        adapter: Target adapter ("cookies" or "local")
        op: Operation name
        key: Storage key (ignored by clear)
        value: Value to write (set only)
        options: Cookie attributes (set/remove)
        force_encrypt: Per-call encryption override (set only)
    """

    adapter: Literal["cookies", "local"]
    op: Literal["get", "set", "remove", "clear"]
    key: str = ""
    value: Any = None
    options: CookieOptionsSchema | None = None
    force_encrypt: bool | None = None


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        preset: Encryption preset ("disabled", "secure" or "balanced")
        overrides: Policy overrides applied over the preset
        mode: Execution mode ("client" or "server")
        cookies: Initial cookie jar contents (client mode)
        domain: Host of the client session (client mode)
        cookie_header: Inbound Cookie header (server mode)
        local: Device-local store configuration (client mode)
        operations: Storage calls, executed in order
    """

    preset: Literal["disabled", "secure", "balanced"] = "disabled"
    overrides: PolicyOverridesSchema = Field(default_factory=PolicyOverridesSchema)
    mode: Literal["client", "server"] = "client"
    cookies: dict[str, str] = Field(default_factory=dict)
    domain: str = ""
    cookie_header: str | None = None
    local: LocalStoreConfigSchema = Field(default_factory=LocalStoreConfigSchema)
    operations: list[OperationSchema] = Field(default_factory=list)


class OperationResultSchema(BaseModel):
    """Outcome of one storage call."""

    adapter: str
    op: str
    key: str = ""
    success: bool
    value: Any = None
    error: str = ""
    error_type: str = ""


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema,
    even on errors.

    Attributes:
        success: Whether every operation succeeded
        results: Per-operation outcomes, in input order
        set_cookie: Accumulated Set-Cookie headers (server mode)
        cookies: Final raw cookie jar contents (client mode)
        policy: Exported encryption policy
        error: Error message (on failure before any operation ran)
        error_type: Error class name (on failure before any operation ran)
    """

    success: bool
    results: list[OperationResultSchema] = Field(default_factory=list)
    set_cookie: list[str] = Field(default_factory=list)
    cookies: dict[str, str] = Field(default_factory=dict)
    policy: dict[str, Any] = Field(default_factory=dict)
    error: str = ""
    error_type: str = ""
