"""Cookie — the record that flows through the store, and its JSON codec."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kv_cookie_store.exceptions import CookieDecodeError
from kv_cookie_store.matching import canonical_domain


class Cookie(BaseModel):
    """A single HTTP cookie as held by a cookie jar.

    Only ``domain``, ``path`` and ``name`` mean anything to the store: together
    they form the cookie's identity.  Every other attribute is carried
    through untouched.

    Attributes:
        name:            Cookie name (the key of the ``name=value`` pair).
        value:           Cookie value.
        domain:          Canonical domain the cookie is scoped to.
        path:            Path the cookie is scoped to.
        expires:         Absolute expiry time from the ``Expires`` attribute.
        max_age:         Lifetime in seconds from the ``Max-Age`` attribute.
        secure:          ``Secure`` flag.
        http_only:       ``HttpOnly`` flag.
        same_site:       ``SameSite`` policy, if any.
        host_only:       ``True`` when the cookie had no ``Domain`` attribute.
        path_is_default: ``True`` when the path was derived from the request URL.
        creation:        When the cookie was created.  Auto-set to *now* (UTC).
        last_accessed:   When the cookie was last sent.
        extensions:      Unrecognised ``Set-Cookie`` attributes, verbatim.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    name: str | None = None
    value: str = ""
    domain: str | None = None
    path: str | None = None
    expires: datetime | None = None
    max_age: int | None = None
    secure: bool = False
    http_only: bool = False
    same_site: Literal["strict", "lax", "none"] | None = None
    host_only: bool | None = None
    path_is_default: bool | None = None
    creation: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_accessed: datetime | None = None
    extensions: list[str] = Field(default_factory=list)

    @field_validator("domain")
    @classmethod
    def _canonicalize_domain(cls, value: str | None) -> str | None:
        return canonical_domain(value)

    @property
    def identity(self) -> tuple[str, str, str] | None:
        """``(domain, path, name)``, or ``None`` if any part is missing."""
        if self.domain is None or self.path is None or self.name is None:
            return None
        return self.domain, self.path, self.name


def encode_cookie(cookie: Cookie) -> dict[str, Any]:
    """Serialize *cookie* into a JSON-compatible record."""
    return cookie.model_dump(mode="json", exclude_none=True)


def decode_cookie(record: Any) -> Cookie:
    """Rebuild a :class:`Cookie` from a stored record.

    Raises:
        CookieDecodeError: If *record* is not a valid cookie record.
    """
    try:
        return Cookie.model_validate(record)
    except ValidationError as exc:
        raise CookieDecodeError(record, f"{exc.error_count()} validation error(s)") from exc
