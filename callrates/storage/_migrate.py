import logging
import time

import aiosqlite

from ._schema import SCHEMA_SQL, SCHEMA_VERSION

logger = logging.getLogger("storage")


async def run_migrations(db, logger_override=None):
    log = logger_override or logger
    current_version = 0
    try:
        async with db.execute("SELECT MAX(version) FROM schema_version") as cursor:
            row = await cursor.fetchone()
            if row and row[0] is not None:
                current_version = row[0]
    except aiosqlite.OperationalError:
        # Fresh database: schema_version does not exist yet.
        current_version = 0

    if current_version < SCHEMA_VERSION:
        log.info("Migrating database from v%d to v%d", current_version, SCHEMA_VERSION)
        await db.executescript(SCHEMA_SQL)

        if 0 < current_version < 2:
            # v1 had no profiles table; backfill from existing schedule rows.
            await db.execute(
                "INSERT OR IGNORE INTO profiles (owner, created_at) "
                "SELECT owner, MIN(created_at) FROM call_schedules GROUP BY owner"
            )

        await db.execute(
            "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
            (SCHEMA_VERSION, time.time()),
        )
        await db.commit()
        log.info("Migration complete (v%d)", SCHEMA_VERSION)
    else:
        log.debug("Database schema up to date (v%d)", current_version)
