"""kv_cookie_store — persist an HTTP cookie jar in an ordered key-value store.

Cookies are keyed by ``(domain, path, name)`` under a namespace prefix.
Lookups walk the request host's parent domains and apply RFC 6265
path matching, so a jar sees exactly the cookies it would see in memory.
"""

import logging

from kv_cookie_store.config import EngineConfig, StoreConfig, create_cookie_index, create_engine
from kv_cookie_store.cookie import Cookie, decode_cookie, encode_cookie
from kv_cookie_store.engines import Engine, InMemoryEngine, SQLiteEngine
from kv_cookie_store.exceptions import (
    CookieDecodeError,
    CookieStoreError,
    EngineClosedError,
    EngineError,
    StoreConfigError,
)
from kv_cookie_store.index import CookieIndex, CookieStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Cookie",
    "CookieDecodeError",
    "CookieIndex",
    "CookieStore",
    "CookieStoreError",
    "Engine",
    "EngineClosedError",
    "EngineConfig",
    "EngineError",
    "InMemoryEngine",
    "SQLiteEngine",
    "StoreConfig",
    "StoreConfigError",
    "create_cookie_index",
    "create_engine",
    "decode_cookie",
    "encode_cookie",
]
