"""Engine protocol — ordered key-value persistence with prefix scans."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any, ClassVar

logger = logging.getLogger(__name__)

Key = tuple[str, ...]
Record = dict[str, Any]


class Engine(ABC):
    """Abstract base for all key-value engines.

    Keys are ordered tuples of string segments; records are JSON-compatible
    dicts.  The engine knows nothing about cookies; it only has to keep
    keys in tuple order so that any key prefix denotes a contiguous region.
    """

    #: ``True`` when :meth:`delete_prefix` removes the whole region in a
    #: single operation that concurrent writers cannot interleave with.
    atomic_range_delete: ClassVar[bool] = False

    @abstractmethod
    async def get(self, key: Key) -> Record | None:
        """Return the stored record, or ``None`` if not found."""
        ...

    @abstractmethod
    async def set(self, key: Key, record: Record) -> None:
        """Create or overwrite a record."""
        ...

    @abstractmethod
    async def delete(self, key: Key) -> None:
        """Delete a record.  No-op if the key does not exist."""
        ...

    @abstractmethod
    def scan(self, prefix: Key) -> AsyncIterator[tuple[Key, Record]]:
        """Yield ``(key, record)`` pairs whose key starts with *prefix*, in key order.

        Every call starts a fresh scan over the current contents.
        """
        ...

    async def delete_prefix(self, prefix: Key) -> int:
        """Delete every record under *prefix* and return how many were removed.

        The default reads the key set first, then deletes one key at a
        time.  It is **not** atomic: a record written under *prefix* after
        the scan survives, and a record rewritten between the scan and its
        delete is lost.  Engines with a native range delete override this
        and set :attr:`atomic_range_delete`.
        """
        keys = [key async for key, _ in self.scan(prefix)]
        for key in keys:
            await self.delete(key)
        logger.debug(
            "Deleted prefix one key at a time",
            extra={"prefix": prefix, "deleted": len(keys)},
        )
        return len(keys)

    async def close(self) -> None:  # noqa: B027
        """Release any resources held by the engine."""
