"""Key-value engines for cookie persistence."""

from kv_cookie_store.engines.base import Engine, Key, Record
from kv_cookie_store.engines.memory import InMemoryEngine
from kv_cookie_store.engines.sqlite import SQLiteEngine

__all__ = ["Engine", "InMemoryEngine", "Key", "Record", "SQLiteEngine"]
