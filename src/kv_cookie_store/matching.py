"""RFC 6265 domain and path matching primitives."""

from __future__ import annotations

import ipaddress
from functools import lru_cache

from publicsuffixlist import PublicSuffixList

# RFC 6761 special-use names that are not on the public suffix list's ICANN
# section but must not be treated as registrable on their own.
SPECIAL_USE_DOMAINS = frozenset({"local", "example", "invalid", "localhost", "test"})


@lru_cache(maxsize=1)
def _suffix_list() -> PublicSuffixList:
    return PublicSuffixList()


def canonical_domain(domain: str | None) -> str | None:
    """Return *domain* trimmed, without leading or trailing dots, lower-cased and IDNA-encoded."""
    if domain is None:
        return None
    domain = domain.strip().strip(".").lower()
    if domain.isascii():
        return domain
    try:
        return domain.encode("idna").decode("ascii")
    except UnicodeError:
        return domain


def _is_ip_address(domain: str) -> bool:
    try:
        ipaddress.ip_address(domain.strip("[]"))
    except ValueError:
        return False
    return True


def registrable_domain(domain: str, allow_special_use_domain: bool = False) -> str | None:
    """Return the shortest suffix of *domain* a cookie may be scoped to.

    This is the public suffix plus one label (``example.co.uk`` for
    ``www.example.co.uk``).  Returns ``None`` when *domain* is itself a
    public suffix, or when it sits under a special-use TLD and
    *allow_special_use_domain* is not set.
    """
    labels = domain.split(".")
    if labels[-1] in SPECIAL_USE_DOMAINS:
        if not allow_special_use_domain:
            return None
        return ".".join(labels[-2:])
    return _suffix_list().privatesuffix(domain)


def permute_domain(domain: str, allow_special_use_domain: bool = False) -> list[str] | None:
    """Return every domain a cookie visible to *domain* may be stored under.

    The list starts at the registrable domain and grows one label at a time
    up to *domain* itself, so a request for ``a.b.example.com`` yields
    ``["example.com", "b.example.com", "a.b.example.com"]``.  Nothing above
    the public suffix boundary is ever included.
    """
    domain = domain.rstrip(".")
    if _is_ip_address(domain):
        return [domain]

    base = registrable_domain(domain, allow_special_use_domain)
    if not base:
        return None
    if base == domain:
        return [domain]

    remainder = domain[: -(len(base) + 1)]
    permutations = [base]
    current = base
    for label in reversed(remainder.split(".")):
        current = f"{label}.{current}"
        permutations.append(current)
    return permutations


def path_match(request_path: str, cookie_path: str) -> bool:
    """Return ``True`` if *cookie_path* path-matches *request_path* (RFC 6265 §5.1.4).

    * the paths are identical, or
    * *cookie_path* is a prefix of *request_path* and ends with ``/``, or
    * *cookie_path* is a prefix of *request_path* and the next character
      of *request_path* is ``/``.
    """
    if cookie_path == request_path:
        return True
    if not request_path.startswith(cookie_path):
        return False
    if cookie_path.endswith("/"):
        return True
    return request_path[len(cookie_path)] == "/"
