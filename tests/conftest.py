"""Shared test fixtures."""

import pytest

from kv_cookie_store import CookieIndex
from kv_cookie_store.engines import InMemoryEngine, SQLiteEngine
from tests.helpers import PREFIX, make_cookie


@pytest.fixture
def sample_cookies():
    return [
        make_cookie("foo", "bar", "example.com", "/path"),
        make_cookie("bar", "baz", "example.com", "/path"),
        make_cookie("baz", "qux", "example.com", "/different"),
        make_cookie("qux", "quux", "example.org", "/path"),
    ]


@pytest.fixture(params=["memory", "sqlite"])
async def engine(request):
    if request.param == "memory":
        eng = InMemoryEngine()
    else:
        eng = SQLiteEngine(":memory:", page_size=2)
    yield eng
    await eng.close()


@pytest.fixture
def store(engine):
    return CookieIndex(engine, prefix=PREFIX)


@pytest.fixture
async def populated(store, sample_cookies):
    for cookie in sample_cookies:
        await store.put_cookie(cookie)
    return store
