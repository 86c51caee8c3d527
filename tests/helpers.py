"""Cookie builders shared by the test suite."""

from kv_cookie_store import Cookie

PREFIX = ("cookies",)


def make_cookie(name, value, domain, path, **attrs):
    return Cookie(
        name=name,
        value=value,
        domain=domain,
        path=path,
        max_age=3600,
        secure=True,
        http_only=True,
        **attrs,
    )
