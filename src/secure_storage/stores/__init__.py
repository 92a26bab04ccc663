"""Device-local storage backends."""

from secure_storage.stores.base import LocalStore
from secure_storage.stores.memory import InMemoryLocalStore
from secure_storage.stores.sqlite import SQLiteLocalStore

__all__ = ["InMemoryLocalStore", "LocalStore", "SQLiteLocalStore"]
