"""
kv_cookie_store — Hello World

Cookies live under (domain, path, name).  A request host sees the cookies
of every parent domain up to the public suffix, filtered by path.
"""

import asyncio

from kv_cookie_store import Cookie, create_cookie_index


def show(label, cookies) -> None:
    print(f"  {label:<40} {[f'{c.name}={c.value}' for c in cookies]}")


async def main():
    # ──────────────────────────────────────
    #  1. Create the store
    # ──────────────────────────────────────
    store = create_cookie_index({"engine": {"type": "sqlite", "path": ":memory:"}})

    # ──────────────────────────────────────
    #  2. Store a few cookies
    # ──────────────────────────────────────
    for name, value, domain, path in [
        ("session", "abc", "example.com", "/"),
        ("cart", "3", "shop.example.com", "/cart"),
        ("pref", "dark", "example.com", "/settings"),
        ("other", "x", "example.org", "/"),
    ]:
        await store.put_cookie(Cookie(name=name, value=value, domain=domain, path=path))

    # ──────────────────────────────────────
    #  3. Look them up the way a jar would
    # ──────────────────────────────────────
    show("shop.example.com /cart/items", await store.find_cookies("shop.example.com", "/cart/items"))
    show("example.com /settings", await store.find_cookies("example.com", "/settings"))
    show("example.com (all paths)", await store.find_cookies("example.com"))
    show("one cookie", [await store.find_cookie("example.com", "/", "session")])

    # ──────────────────────────────────────
    #  4. Remove
    # ──────────────────────────────────────
    await store.remove_cookies("example.com", "/settings")
    show("after removing example.com /settings", await store.get_all_cookies())

    await store.remove_all_cookies()
    show("after removing everything", await store.get_all_cookies())

    await store.engine.close()


if __name__ == "__main__":
    asyncio.run(main())
