"""Adapter ABCs — the public storage contract and its shared pipeline."""

from __future__ import annotations

import copy
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from secure_storage.adapters.cache import MISSING, ValueCache
from secure_storage.config import CookieOptions, is_production
from secure_storage.crypto.service import EncryptionService
from secure_storage.policy import DISABLED_POLICY, EncryptionPolicy
from secure_storage.result import StorageResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

OptionsArg = CookieOptions | dict[str, Any] | None


def parse_or_literal(text: str) -> Any:
    """JSON-decode *text*, or return it untouched if it is not JSON."""
    try:
        return json.loads(text)
    except ValueError:
        return text


class StorageAdapter(ABC):
    """The four-method contract shared by every physical store.

    No method raises; each returns a :class:`StorageResult`.
    """

    @abstractmethod
    async def get(self, key: str) -> StorageResult[Any]:
        """Read *key*.  An absent key is a success with ``value=None``."""
        ...

    @abstractmethod
    async def set(
        self,
        key: str,
        value: Any,
        options: OptionsArg = None,
        force_encrypt: bool | None = None,
    ) -> StorageResult[None]:
        """Write *value* under *key*.

        *force_encrypt* overrides the policy for this one write.
        """
        ...

    @abstractmethod
    async def remove(self, key: str, options: OptionsArg = None) -> StorageResult[None]:
        """Delete *key*.  Removing an absent key succeeds."""
        ...

    @abstractmethod
    async def clear(self) -> StorageResult[None]:
        """Delete everything this adapter can see."""
        ...


class BaseStorageAdapter(StorageAdapter):
    """Serialization, selective encryption and caching common to all adapters.

    Subclasses implement the ``_get`` / ``_set`` / ``_remove`` / ``_clear``
    hooks against their physical store; the public methods wrap them so
    that any exception becomes a failed :class:`StorageResult`.

    Parameters:
        policy:     Encryption policy.  Defaults to :data:`DISABLED_POLICY`.
        encryption: Explicit encryption service.  Built from the policy on
                    first use when omitted.
    """

    def __init__(
        self,
        policy: EncryptionPolicy | None = None,
        encryption: EncryptionService | None = None,
    ) -> None:
        self.policy = policy or DISABLED_POLICY
        self._encryption = encryption
        self.cache = ValueCache(self.policy.cache_max_entries)

    @property
    def encryption(self) -> EncryptionService:
        if self._encryption is None:
            self._encryption = EncryptionService(
                passphrase=self.policy.passphrase,
                iterations=self.policy.iterations,
            )
        return self._encryption

    # ── physical-store hooks ─────────────────────────────────

    @abstractmethod
    async def _get(self, key: str) -> Any: ...

    @abstractmethod
    async def _set(
        self, key: str, value: Any, options: OptionsArg, force_encrypt: bool | None
    ) -> None: ...

    @abstractmethod
    async def _remove(self, key: str, options: OptionsArg) -> None: ...

    @abstractmethod
    async def _clear(self) -> None: ...

    # ── public contract ──────────────────────────────────────

    async def get(self, key: str) -> StorageResult[Any]:
        return await self._safe_execute(lambda: self._get(key))

    async def set(
        self,
        key: str,
        value: Any,
        options: OptionsArg = None,
        force_encrypt: bool | None = None,
    ) -> StorageResult[None]:
        return await self._safe_execute(lambda: self._set(key, value, options, force_encrypt))

    async def remove(self, key: str, options: OptionsArg = None) -> StorageResult[None]:
        return await self._safe_execute(lambda: self._remove(key, options))

    async def clear(self) -> StorageResult[None]:
        return await self._safe_execute(self._clear)

    # ── pipeline ─────────────────────────────────────────────

    def should_encrypt(self, key: str, force: bool | None = None) -> bool:
        return self.policy.should_encrypt(key, force)

    async def process_for_storage(self, key: str, value: Any, force: bool | None = None) -> str:
        """Serialize *value* and encrypt it if the policy says so."""
        text = value if isinstance(value, str) else json.dumps(value)

        if self.should_encrypt(key, force):
            return await self.encryption.encrypt(text)
        return text

    async def process_from_storage(self, key: str, raw: str, force: bool | None = None) -> Any:
        """Turn a persisted string back into a value.

        A cache hit skips decryption entirely.  Callers always receive
        their own copy, never the cached object.
        """
        if self.policy.cache_decrypted:
            cached = self.cache.get(key)
            if cached is not MISSING:
                return copy.deepcopy(cached)

        if self.should_encrypt(key, force):
            try:
                value = parse_or_literal(await self.encryption.decrypt(raw))
            except Exception:
                logger.debug("Decryption of %r raised; reading the raw value", key, exc_info=True)
                value = parse_or_literal(raw)
        else:
            value = parse_or_literal(raw)

        if self.policy.cache_decrypted:
            self.cache.set(key, copy.deepcopy(value))
        return value

    def remember(self, key: str, value: Any) -> None:
        """Cache the value just written under *key*."""
        if self.policy.cache_decrypted:
            self.cache.set(key, copy.deepcopy(value))

    def forget(self, key: str) -> None:
        self.cache.delete(key)

    def clear_cache(self) -> None:
        self.cache.clear()

    async def _safe_execute(self, operation: Callable[[], Awaitable[T]]) -> StorageResult[T]:
        """Run *operation*, converting any exception into a failed result."""
        try:
            return StorageResult.ok(await operation())
        except Exception as exc:
            if not is_production():
                logger.error("[Storage Error] %s: %s", type(exc).__name__, exc, exc_info=True)
            return StorageResult.fail(exc)
