"""LocalStorageAdapter — device-local persistence for interactive sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from secure_storage.adapters.base import BaseStorageAdapter, OptionsArg
from secure_storage.exceptions import StorageUnavailableError

if TYPE_CHECKING:
    from secure_storage.crypto.service import EncryptionService
    from secure_storage.policy import EncryptionPolicy
    from secure_storage.stores.base import LocalStore

_PROBE_KEY = "__storage_test__"


class LocalStorageAdapter(BaseStorageAdapter):
    """Adapter over an origin-scoped :class:`LocalStore`.

    Every operation first probes the store with a disposable write and
    delete; a missing, disabled or full store turns into a failed result.
    Cookie options are accepted for interface compatibility and ignored.

    Parameters:
        store:      The device-local store.  ``None`` outside an
                    interactive session.
        policy:     Encryption policy.
        encryption: Explicit encryption service (mostly for tests).
    """

    def __init__(
        self,
        store: LocalStore | None = None,
        policy: EncryptionPolicy | None = None,
        encryption: EncryptionService | None = None,
    ) -> None:
        super().__init__(policy, encryption)
        self.store = store

    async def _available_store(self) -> LocalStore:
        if self.store is None:
            raise StorageUnavailableError("Local storage not available")
        try:
            await self.store.set_item(_PROBE_KEY, _PROBE_KEY)
            await self.store.remove_item(_PROBE_KEY)
        except Exception as exc:
            raise StorageUnavailableError(f"Local storage not available: {exc}") from exc
        return self.store

    async def _get(self, key: str) -> Any:
        store = await self._available_store()
        raw = await store.get_item(key)
        if raw is None:
            return None
        return await self.process_from_storage(key, raw)

    async def _set(
        self, key: str, value: Any, options: OptionsArg, force_encrypt: bool | None
    ) -> None:
        store = await self._available_store()
        processed = await self.process_for_storage(key, value, force_encrypt)
        await store.set_item(key, processed)
        self.remember(key, value)

    async def _remove(self, key: str, options: OptionsArg) -> None:
        store = await self._available_store()
        await store.remove_item(key)
        self.forget(key)

    async def _clear(self) -> None:
        """Wipe the whole origin, not only keys written through this adapter."""
        store = await self._available_store()
        await store.clear()
        self.clear_cache()
