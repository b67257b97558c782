"""Shared fixtures for the call-rates unit tests."""

import time

import aiosqlite
import pytest
import pytest_asyncio

from callrates.records import CallKind, ScheduleRecord
from callrates.storage import SCHEMA_SQL, SCHEMA_VERSION, ScheduleRepo


@pytest_asyncio.fixture
async def db():
    conn = await aiosqlite.connect(":memory:")
    await conn.execute("PRAGMA foreign_keys=ON")
    await conn.executescript(SCHEMA_SQL)
    await conn.execute(
        "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
        (SCHEMA_VERSION, time.time()),
    )
    await conn.commit()
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def repo(db):
    return ScheduleRepo(db)


@pytest.fixture
def owner():
    """A lowercase owner address, as stored."""
    return "0x" + "ab" * 20


@pytest.fixture
def make_record(owner):
    """Factory for valid ScheduleRecords; override any field by keyword."""

    def _make(**overrides) -> ScheduleRecord:
        fields = {
            "owner": owner,
            "kind": CallKind.VOICE,
            "day_of_week": 1,
            "price_cents": 500,
            "slot_width_minutes": 10,
            "start_time": "09:00",
            "duration_minutes": 30,
            "explicit_slots": (),
            "currency": "USD",
        }
        fields.update(overrides)
        return ScheduleRecord(**fields)

    return _make
