"""SQLiteLocalStore — durable, single-file storage backend using aiosqlite."""

from __future__ import annotations

import aiosqlite

from secure_storage.exceptions import StoreError
from secure_storage.stores.base import LocalStore

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS local_storage (
    origin TEXT NOT NULL,
    key    TEXT NOT NULL,
    value  TEXT NOT NULL,
    PRIMARY KEY (origin, key)
)
"""


class SQLiteLocalStore(LocalStore):
    """Persistent store backed by a single SQLite file.

    Several origins may share one file; every query is scoped to
    ``origin``, so :meth:`clear` never touches another origin's data.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
        origin:  Scope of this store inside the file.
    """

    def __init__(self, db_path: str = "local_storage.db", origin: str = "default") -> None:
        self._db_path = db_path
        self.origin = origin
        self._db: aiosqlite.Connection | None = None

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is None:
            try:
                self._db = await aiosqlite.connect(self._db_path)
                await self._db.execute(_CREATE_TABLE)
                await self._db.commit()
            except aiosqlite.Error as exc:
                self._db = None
                raise StoreError("connect", str(exc)) from exc
        return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── LocalStore protocol ──────────────────────────────────

    async def get_item(self, key: str) -> str | None:
        db = await self._connect()
        cursor = await db.execute(
            "SELECT value FROM local_storage WHERE origin = ? AND key = ?",
            (self.origin, key),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        value: str = row[0]
        return value

    async def set_item(self, key: str, value: str) -> None:
        db = await self._connect()
        try:
            await db.execute(
                "INSERT OR REPLACE INTO local_storage (origin, key, value) VALUES (?, ?, ?)",
                (self.origin, key, value),
            )
            await db.commit()
        except aiosqlite.Error as exc:
            raise StoreError("set_item", str(exc)) from exc

    async def remove_item(self, key: str) -> None:
        db = await self._connect()
        await db.execute(
            "DELETE FROM local_storage WHERE origin = ? AND key = ?",
            (self.origin, key),
        )
        await db.commit()

    async def clear(self) -> None:
        db = await self._connect()
        await db.execute(
            "DELETE FROM local_storage WHERE origin = ?",
            (self.origin,),
        )
        await db.commit()

    async def keys(self) -> list[str]:
        db = await self._connect()
        cursor = await db.execute(
            "SELECT key FROM local_storage WHERE origin = ?",
            (self.origin,),
        )
        rows = await cursor.fetchall()
        return [row[0] for row in rows]
