"""
Shared fixtures for call-rates integration tests.

Provides a CallRatesServer wired to in-memory SQLite and an httpx client
that talks to its FastAPI app in-process.
"""

import httpx
import pytest
import pytest_asyncio

from callrates.server import CallRatesServer
from callrates.storage import StorageManager


@pytest_asyncio.fixture
async def storage():
    sm = StorageManager(":memory:")
    await sm.initialize()
    yield sm
    await sm.close()


@pytest_asyncio.fixture
async def server(storage):
    srv = CallRatesServer(storage=storage)
    await srv.init_services()
    return srv


@pytest_asyncio.fixture
async def client(server):
    transport = httpx.ASGITransport(app=server.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def owner():
    return "0x" + "AA" * 20


@pytest.fixture
def other_owner():
    return "0x" + "0b" * 20
