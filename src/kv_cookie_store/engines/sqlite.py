"""SQLiteEngine — durable, single-file engine backed by aiosqlite."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import AsyncIterator
from typing import Any

import aiosqlite

from kv_cookie_store.engines.base import Engine, Key, Record

logger = logging.getLogger(__name__)

_SEPARATOR = b"\x00"
_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def encode_key(key: Key) -> bytes:
    """Pack *key* into a BLOB whose byte order matches the tuple order.

    Every segment is UTF-8 encoded and terminated by ``\\x00``, so a key
    prefix is always a byte prefix and sorts before any of its extensions.
    """
    parts = []
    for segment in key:
        if "\x00" in segment:
            raise ValueError(f"Key segment may not contain NUL: {segment!r}")
        parts.append(segment.encode("utf-8") + _SEPARATOR)
    return b"".join(parts)


def decode_key(blob: bytes) -> Key:
    return tuple(part.decode("utf-8") for part in blob.split(_SEPARATOR)[:-1])


def _load_value(text: str) -> Any:
    """Parse a stored value.  Text that is not JSON is handed back unchanged
    so the caller can reject it as an undecodable record."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Stored value is not valid JSON", extra={"value_prefix": text[:32]})
        return text


def _prefix_range(prefix: Key) -> tuple[bytes, bytes | None]:
    """Return the half-open byte range ``[low, high)`` holding every key under *prefix*."""
    low = encode_key(prefix)
    if not low:
        return low, None
    return low, low[:-1] + b"\x01"


class SQLiteEngine(Engine):
    """Persistent engine backed by a single SQLite file.

    Parameters:
        db_path:   Path to the SQLite database file.  Use ``":memory:"``
                   for an in-memory database (useful for testing).
        table:     Table holding the key-value pairs.
        page_size: Rows fetched per round trip while scanning.
    """

    atomic_range_delete = True

    def __init__(
        self,
        db_path: str = "cookies.db",
        table: str = "cookie_kv",
        page_size: int = 128,
    ) -> None:
        if not _TABLE_NAME.match(table):
            raise ValueError(f"Invalid table name: {table!r}")
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._db_path = db_path
        self._table = table
        self._page_size = page_size
        self._db: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()

    async def _connect(self) -> aiosqlite.Connection:
        if self._db is not None:
            return self._db
        async with self._connect_lock:
            if self._db is None:
                db = await aiosqlite.connect(self._db_path)
                await db.execute(
                    f"CREATE TABLE IF NOT EXISTS {self._table} ("
                    "key BLOB PRIMARY KEY, value TEXT NOT NULL)"
                )
                await db.commit()
                self._db = db
        return self._db

    async def close(self) -> None:
        async with self._connect_lock:
            if self._db:
                await self._db.close()
                self._db = None

    # ── Engine protocol ──────────────────────────────────────

    async def get(self, key: Key) -> Record | None:
        db = await self._connect()
        cursor = await db.execute(
            f"SELECT value FROM {self._table} WHERE key = ?",
            (encode_key(key),),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        result: Record = _load_value(row[0])
        return result

    async def set(self, key: Key, record: Record) -> None:
        db = await self._connect()
        await db.execute(
            f"INSERT OR REPLACE INTO {self._table} (key, value) VALUES (?, ?)",
            (encode_key(key), json.dumps(record)),
        )
        await db.commit()

    async def delete(self, key: Key) -> None:
        db = await self._connect()
        await db.execute(
            f"DELETE FROM {self._table} WHERE key = ?",
            (encode_key(key),),
        )
        await db.commit()

    async def scan(self, prefix: Key) -> AsyncIterator[tuple[Key, Record]]:
        db = await self._connect()
        low, high = _prefix_range(prefix)
        after: bytes | None = None
        while True:
            query = f"SELECT key, value FROM {self._table} WHERE key >= ?"
            params: list[bytes | int] = [low]
            if high is not None:
                query += " AND key < ?"
                params.append(high)
            if after is not None:
                query += " AND key > ?"
                params.append(after)
            query += " ORDER BY key LIMIT ?"
            params.append(self._page_size)

            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            for blob, value in rows:
                yield decode_key(blob), _load_value(value)
            if len(rows) < self._page_size:
                return
            after = rows[-1][0]

    async def delete_prefix(self, prefix: Key) -> int:
        db = await self._connect()
        low, high = _prefix_range(prefix)
        if high is None:
            cursor = await db.execute(f"DELETE FROM {self._table}")
        else:
            cursor = await db.execute(
                f"DELETE FROM {self._table} WHERE key >= ? AND key < ?",
                (low, high),
            )
        await db.commit()
        logger.debug(
            "Deleted prefix range",
            extra={"prefix": prefix, "deleted": cursor.rowcount},
        )
        return cursor.rowcount
