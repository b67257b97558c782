import asyncio
import json
import logging
import time
from typing import Optional, Sequence

import aiosqlite

from callrates.errors import StoreError, ValidationError
from callrates.records import CallKind, RecordHistory, ScheduleRecord

logger = logging.getLogger("storage")

_COLUMNS = (
    "id, owner, kind, day_of_week, price_cents, currency, slot_minutes, "
    "start_time, duration_minutes, slots_json, created_at"
)


class ScheduleRepo:
    """Append-only access to the call_schedules table.

    Writes and reads share one connection, so both take ``_lock``: a reader
    never sees a half-inserted batch and two batches never share a transaction.
    """

    def __init__(self, db: aiosqlite.Connection):
        self._db = db
        self._lock = asyncio.Lock()

    async def append(self, records: Sequence[ScheduleRecord]) -> int:
        """Insert all records in one transaction. Returns the number of rows inserted."""
        if not records:
            raise ValidationError("No schedule records to append")
        for record in records:
            record.validate()

        now = time.time()
        owners = sorted({r.owner.lower() for r in records})
        rows = [
            (
                r.owner.lower(),
                r.kind.value,
                r.day_of_week,
                r.price_cents,
                r.currency,
                r.slot_width_minutes,
                r.start_time,
                r.duration_minutes,
                json.dumps(list(r.explicit_slots)),
                now,
            )
            for r in records
        ]

        async with self._lock:
            try:
                await self._db.executemany(
                    "INSERT OR IGNORE INTO profiles (owner, created_at) VALUES (?, ?)",
                    [(owner, now) for owner in owners],
                )
                await self._db.executemany(
                    "INSERT INTO call_schedules (owner, kind, day_of_week, price_cents, currency, "
                    "slot_minutes, start_time, duration_minutes, slots_json, created_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    rows,
                )
                await self._db.commit()
            except aiosqlite.Error as e:
                await self._db.rollback()
                logger.exception("Failed to insert %d schedule rows for %s", len(rows), owners)
                raise StoreError(f"Insert schedules failed: {e}") from e
            except asyncio.CancelledError:
                await self._db.rollback()
                raise

        logger.info("Inserted %d schedule rows for %s", len(rows), ", ".join(owners))
        return len(rows)

    async def load_all(self, owner: str) -> RecordHistory:
        """Every record ever submitted by ``owner``, newest first."""
        owner = owner.lower()
        async with self._lock:
            try:
                async with self._db.execute(
                    f"SELECT {_COLUMNS} FROM call_schedules WHERE owner = ? "
                    "ORDER BY created_at DESC, id DESC",
                    (owner,),
                ) as cursor:
                    rows = await cursor.fetchall()
            except aiosqlite.Error as e:
                logger.exception("Failed to load schedules for %s", owner)
                raise StoreError(f"Load schedules failed: {e}") from e
        return RecordHistory(owner=owner, records=tuple(_row_to_record(row) for row in rows))

    async def count(self, owner: Optional[str] = None) -> int:
        if owner:
            sql = "SELECT COUNT(*) FROM call_schedules WHERE owner = ?"
            params: tuple = (owner.lower(),)
        else:
            sql = "SELECT COUNT(*) FROM call_schedules"
            params = ()
        async with self._lock:
            try:
                async with self._db.execute(sql, params) as cursor:
                    row = await cursor.fetchone()
            except aiosqlite.Error as e:
                raise StoreError(f"Count schedules failed: {e}") from e
        return row[0] if row else 0

    async def count_owners(self) -> int:
        async with self._lock:
            try:
                async with self._db.execute("SELECT COUNT(*) FROM profiles") as cursor:
                    row = await cursor.fetchone()
            except aiosqlite.Error as e:
                raise StoreError(f"Count profiles failed: {e}") from e
        return row[0] if row else 0


def _row_to_record(row) -> ScheduleRecord:
    return ScheduleRecord(
        id=row[0],
        owner=row[1],
        kind=CallKind(row[2]),
        day_of_week=row[3],
        price_cents=row[4],
        currency=row[5],
        slot_width_minutes=row[6],
        start_time=row[7],
        duration_minutes=row[8],
        explicit_slots=_decode_slots(row[9], row[0]),
        created_at=row[10],
    )


def _decode_slots(raw: str, row_id: int) -> tuple:
    try:
        slots = json.loads(raw or "[]")
    except json.JSONDecodeError as e:
        raise StoreError(f"call_schedules row {row_id} has unreadable slots") from e
    if not isinstance(slots, list):
        raise StoreError(f"call_schedules row {row_id} slots is not a list")
    return tuple(slots)
