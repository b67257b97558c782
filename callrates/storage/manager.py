import logging
from typing import Optional

try:
    import aiosqlite
except ImportError:
    raise ImportError(
        "aiosqlite is required for the storage layer. "
        "Install with: pip install aiosqlite"
    )

from ._schema import SCHEMA_VERSION
from ._migrate import run_migrations
from .schedules import ScheduleRepo

logger = logging.getLogger("storage")


class StorageManager:
    """Top-level manager: opens the database, runs migrations, exposes repos."""

    def __init__(self, db_path: str = "callrates.db"):
        self.db_path = db_path
        self._db: Optional[aiosqlite.Connection] = None
        self.schedules: Optional[ScheduleRepo] = None

    async def initialize(self):
        self._db = await aiosqlite.connect(self.db_path)
        await self._db.execute("PRAGMA journal_mode=WAL")
        await self._db.execute("PRAGMA foreign_keys=ON")
        await run_migrations(self._db, logger)

        self.schedules = ScheduleRepo(self._db)

        logger.info("Storage initialized: %s (schema v%d)", self.db_path, SCHEMA_VERSION)

    async def close(self):
        if self._db:
            await self._db.close()
            self._db = None
            logger.info("Storage closed")
