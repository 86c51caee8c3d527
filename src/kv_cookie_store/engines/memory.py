"""InMemoryEngine — zero-config, dict-backed engine for development and testing."""

from __future__ import annotations

from bisect import bisect_left, insort
from collections.abc import AsyncIterator

from kv_cookie_store.engines.base import Engine, Key, Record
from kv_cookie_store.exceptions import EngineClosedError


class InMemoryEngine(Engine):
    """In-memory engine using a dict plus a sorted key list.  Data is lost on process exit.

    Range deletes run without yielding to the event loop, so no other
    coroutine can observe or write into a half-deleted region.
    """

    atomic_range_delete = True

    def __init__(self) -> None:
        self._data: dict[Key, Record] = {}
        self._keys: list[Key] = []
        self._closed = False

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise EngineClosedError(operation)

    def _region(self, prefix: Key) -> tuple[int, int]:
        start = bisect_left(self._keys, prefix)
        end = start
        size = len(prefix)
        while end < len(self._keys) and self._keys[end][:size] == prefix:
            end += 1
        return start, end

    async def get(self, key: Key) -> Record | None:
        self._check_open("get")
        return self._data.get(key)

    async def set(self, key: Key, record: Record) -> None:
        self._check_open("set")
        if key not in self._data:
            insort(self._keys, key)
        self._data[key] = record

    async def delete(self, key: Key) -> None:
        self._check_open("delete")
        if self._data.pop(key, None) is not None:
            del self._keys[bisect_left(self._keys, key)]

    async def scan(self, prefix: Key) -> AsyncIterator[tuple[Key, Record]]:
        self._check_open("scan")
        start, end = self._region(prefix)
        for key in self._keys[start:end]:
            record = self._data.get(key)
            # deleted by someone else since the region was read
            if record is not None:
                yield key, record

    async def delete_prefix(self, prefix: Key) -> int:
        self._check_open("delete_prefix")
        start, end = self._region(prefix)
        for key in self._keys[start:end]:
            del self._data[key]
        del self._keys[start:end]
        return end - start

    async def close(self) -> None:
        self._closed = True
