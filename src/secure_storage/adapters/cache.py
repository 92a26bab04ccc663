"""ValueCache — per-adapter map of decoded values."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any

MISSING: Any = object()


class ValueCache:
    """Decoded values keyed by storage key, with an optional LRU bound.

    One instance belongs to exactly one adapter; it is never shared or
    persisted.

    Parameters:
        max_entries: Evict the least recently used entry beyond this size.
                     ``None`` leaves the cache unbounded.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self.max_entries = max_entries

    def get(self, key: str) -> Any:
        """Return the cached value, or :data:`MISSING` on a miss."""
        if key not in self._entries:
            return MISSING
        self._entries.move_to_end(key)
        return self._entries[key]

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
