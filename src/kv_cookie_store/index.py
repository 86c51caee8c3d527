"""CookieIndex — cookie storage on top of an ordered key-value engine.

Every cookie lives under ``prefix + (domain, path, name)``.  Because the
engine keeps keys in tuple order, ``prefix + (domain,)`` is the region of
all cookies for one exact domain and ``prefix + (domain, path)`` the region
for one exact domain and path.  Lookups for a request host walk the host's
parent domains (down to the public suffix boundary) and scan each domain
region, filtering stored paths with the RFC 6265 path-match rule.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from kv_cookie_store.cookie import Cookie, decode_cookie, encode_cookie
from kv_cookie_store.exceptions import CookieDecodeError
from kv_cookie_store.matching import canonical_domain, path_match, permute_domain

if TYPE_CHECKING:
    from kv_cookie_store.engines.base import Engine, Key, Record

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = ("cookies",)


@runtime_checkable
class CookieStore(Protocol):
    """The operations a cookie jar needs from its backing store."""

    async def find_cookie(
        self, domain: str | None, path: str | None, name: str | None
    ) -> Cookie | None: ...

    async def find_cookies(
        self,
        domain: str | None,
        path: str | None = None,
        allow_special_use_domain: bool = False,
    ) -> list[Cookie]: ...

    async def get_all_cookies(self) -> list[Cookie]: ...

    async def put_cookie(self, cookie: Cookie) -> None: ...

    async def update_cookie(self, old_cookie: Cookie, new_cookie: Cookie) -> None: ...

    async def remove_cookie(
        self, domain: str | None, path: str | None, name: str | None
    ) -> None: ...

    async def remove_cookies(self, domain: str | None, path: str | None = None) -> None: ...

    async def remove_all_cookies(self) -> None: ...


class CookieIndex:
    """Stores cookies in an :class:`Engine` under a fixed namespace prefix.

    Parameters:
        engine: Backing key-value engine.  Engine errors propagate unchanged.
        prefix: Key segments every cookie key starts with.  Lets several
                jars share one engine.
    """

    def __init__(self, engine: Engine, prefix: Sequence[str] = DEFAULT_PREFIX) -> None:
        self._engine = engine
        self._prefix: Key = tuple(prefix)

    # ── keys ─────────────────────────────────────────────────

    def _key(self, *segments: str) -> Key:
        return self._prefix + segments

    def _decode(self, key: Key, record: Record) -> Cookie | None:
        try:
            return decode_cookie(record)
        except CookieDecodeError as exc:
            logger.warning(
                "Skipping undecodable cookie record",
                extra={"key": key, "error": str(exc.__cause__ or exc)},
            )
            return None

    # ── reads ────────────────────────────────────────────────

    async def find_cookie(
        self, domain: str | None, path: str | None, name: str | None
    ) -> Cookie | None:
        """Return the cookie stored under exactly ``(domain, path, name)``, or ``None``."""
        domain = canonical_domain(domain)
        if domain is None or path is None or name is None:
            return None
        key = self._key(domain, path, name)
        record = await self._engine.get(key)
        if record is None:
            return None
        return self._decode(key, record)

    async def find_cookies(
        self,
        domain: str | None,
        path: str | None = None,
        allow_special_use_domain: bool = False,
    ) -> list[Cookie]:
        """Return every cookie that domain-matches *domain* and path-matches *path*.

        * *domain* is expanded to its parent domains, never crossing the
          public suffix boundary.  *allow_special_use_domain* lets names
          under ``.local``, ``.test`` and friends expand as well.
        * A missing *path* selects cookies for every path.
        * Results follow domain order (registrable domain first), then key
          order within each domain.  Undecodable records are skipped.
        """
        domain = canonical_domain(domain)
        if not domain:
            return []

        domains = permute_domain(domain, allow_special_use_domain) or [domain]
        key_size = len(self._prefix) + 3
        results: list[Cookie] = []
        for candidate in domains:
            async for key, record in self._engine.scan(self._key(candidate)):
                if len(key) != key_size:
                    continue
                if path and not path_match(path, key[-2]):
                    continue
                cookie = self._decode(key, record)
                if cookie is not None:
                    results.append(cookie)
        return results

    async def get_all_cookies(self) -> list[Cookie]:
        """Return every cookie in the namespace, in key order."""
        cookies: list[Cookie] = []
        async for key, record in self._engine.scan(self._prefix):
            cookie = self._decode(key, record)
            if cookie is not None:
                cookies.append(cookie)
        return cookies

    # ── writes ───────────────────────────────────────────────

    async def put_cookie(self, cookie: Cookie) -> None:
        """Store *cookie*, replacing any cookie with the same domain, path and name.

        Cookies without a domain, path or name are dropped silently.
        """
        identity = cookie.identity
        if identity is None:
            logger.debug("Dropping cookie without a complete identity", extra={"cookie": cookie.name})
            return
        await self._engine.set(self._key(*identity), encode_cookie(cookie))

    async def update_cookie(self, old_cookie: Cookie, new_cookie: Cookie) -> None:
        """Store *new_cookie* in place of *old_cookie*.

        Only *new_cookie*'s identity is used.  If it differs from
        *old_cookie*'s, the old record stays in the store as well.
        """
        await self.put_cookie(new_cookie)

    # ── deletes ──────────────────────────────────────────────

    async def remove_cookie(
        self, domain: str | None, path: str | None, name: str | None
    ) -> None:
        """Delete the cookie stored under exactly ``(domain, path, name)``.  Idempotent."""
        domain = canonical_domain(domain)
        if domain is None or path is None or name is None:
            return
        await self._engine.delete(self._key(domain, path, name))

    async def remove_cookies(self, domain: str | None, path: str | None = None) -> None:
        """Delete every cookie stored under exactly *domain* and *path*.

        No domain or path matching is applied: sub-domains and other paths
        are untouched.  Without a *path*, all paths of *domain* go.  Only
        atomic when the engine has ``atomic_range_delete``.
        """
        domain = canonical_domain(domain)
        if domain is None:
            return
        prefix = self._key(domain) if path is None else self._key(domain, path)
        deleted = await self._engine.delete_prefix(prefix)
        logger.debug(
            "Removed cookies",
            extra={"domain": domain, "path": path, "deleted": deleted},
        )

    async def remove_all_cookies(self) -> None:
        """Delete every cookie in the namespace."""
        deleted = await self._engine.delete_prefix(self._prefix)
        logger.debug("Removed all cookies", extra={"prefix": self._prefix, "deleted": deleted})

    # ── introspection ────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def prefix(self) -> Key:
        return self._prefix
