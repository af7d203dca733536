import types

import pytest
import pytest_asyncio

from pwnedaudit.hibp.client import HashRangeQuery
from pwnedaudit.hibp.checker import BreachChecker

from tests.fakes import FakeRangeServer


@pytest_asyncio.fixture()
async def range_server():
    fake = FakeRangeServer()
    await fake.start()
    yield fake
    await fake.close()


@pytest_asyncio.fixture()
async def query(range_server):
    async with HashRangeQuery(base_url=range_server.base_url, timeout=5) as q:
        yield q


@pytest.fixture()
def checker(query):
    return BreachChecker(query, min_interval=0.5)


@pytest.fixture()
def sleeps(monkeypatch):
    """
    Record the checker's sleeps instead of waiting them out.
    Only the checker module sees the fake; aiohttp keeps the real asyncio.
    """
    recorded: list[float] = []

    async def fake_sleep(delay, *args, **kwargs):
        recorded.append(delay)

    monkeypatch.setattr(
        "pwnedaudit.hibp.checker.asyncio",
        types.SimpleNamespace(sleep=fake_sleep),
    )
    return recorded
