SCHEMA_VERSION = 2

SCHEMA_SQL = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version   INTEGER NOT NULL,
    applied_at REAL NOT NULL
);

-- Profiles: one row per owner address that has ever submitted a schedule
CREATE TABLE IF NOT EXISTS profiles (
    owner      TEXT PRIMARY KEY COLLATE NOCASE,
    created_at REAL NOT NULL
);

-- Call schedules: append-only, one row per (submission, kind, day item)
CREATE TABLE IF NOT EXISTS call_schedules (
    id               INTEGER PRIMARY KEY AUTOINCREMENT,
    owner            TEXT NOT NULL COLLATE NOCASE,
    kind             TEXT NOT NULL CHECK (kind IN ('voice', 'video')),
    day_of_week      INTEGER NOT NULL CHECK (day_of_week BETWEEN 1 AND 7),
    price_cents      INTEGER,
    currency         TEXT NOT NULL DEFAULT 'USD',
    slot_minutes     INTEGER NOT NULL DEFAULT 10 CHECK (slot_minutes > 0),
    start_time       TEXT,
    duration_minutes INTEGER,
    slots_json       TEXT NOT NULL DEFAULT '[]',
    created_at       REAL NOT NULL,
    FOREIGN KEY (owner) REFERENCES profiles(owner)
);

-- Indexes for common queries
CREATE INDEX IF NOT EXISTS idx_call_schedules_owner_created ON call_schedules(owner, created_at);
"""
