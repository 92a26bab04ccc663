"""LocalStore protocol — origin-scoped string key/value persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LocalStore(ABC):
    """Abstract base for all device-local storage backends.

    A store holds the data of exactly one *origin*.  It is completely
    agnostic to what is being stored — values are opaque strings that the
    adapter pipeline has already serialized (and possibly encrypted).

    Implementations raise :class:`~secure_storage.exceptions.StoreError`
    when the store is disabled or full.
    """

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the stored string, or ``None`` if not found."""
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Create or overwrite a value."""
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete a value.  No-op if the key does not exist."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Delete every key of the origin."""
        ...

    @abstractmethod
    async def keys(self) -> list[str]:
        """Return all keys of the origin."""
        ...
