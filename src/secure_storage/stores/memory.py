"""InMemoryLocalStore — zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

from secure_storage.exceptions import StoreError
from secure_storage.stores.base import LocalStore


class InMemoryLocalStore(LocalStore):
    """In-memory store.  Data is lost on process exit.

    Parameters:
        quota:    Maximum total length (keys plus values, in characters).
                  Writes that would exceed it fail.  ``None`` = unlimited.
        disabled: Simulate a store the user agent refuses to open.
    """

    def __init__(self, quota: int | None = None, *, disabled: bool = False) -> None:
        self._data: dict[str, str] = {}
        self.quota = quota
        self.disabled = disabled

    def _check_enabled(self, operation: str) -> None:
        if self.disabled:
            raise StoreError(operation, "store is disabled")

    def _usage_with(self, key: str, value: str) -> int:
        usage = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
        return usage + len(key) + len(value)

    async def get_item(self, key: str) -> str | None:
        self._check_enabled("get_item")
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._check_enabled("set_item")
        if self.quota is not None and self._usage_with(key, value) > self.quota:
            raise StoreError("set_item", f"quota of {self.quota} exceeded")
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._check_enabled("remove_item")
        self._data.pop(key, None)

    async def clear(self) -> None:
        self._check_enabled("clear")
        self._data.clear()

    async def keys(self) -> list[str]:
        self._check_enabled("keys")
        return list(self._data.keys())
