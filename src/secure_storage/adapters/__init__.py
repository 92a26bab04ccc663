"""Storage adapters over the physical stores."""

from secure_storage.adapters.base import BaseStorageAdapter, StorageAdapter
from secure_storage.adapters.cache import ValueCache
from secure_storage.adapters.cookies import CookieAdapter
from secure_storage.adapters.local import LocalStorageAdapter

__all__ = [
    "BaseStorageAdapter",
    "CookieAdapter",
    "LocalStorageAdapter",
    "StorageAdapter",
    "ValueCache",
]
