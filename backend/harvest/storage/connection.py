"""SQLite database holding the harvested notes, hand logs and game summaries."""

import sqlite3
from pathlib import Path

import structlog

logger = structlog.get_logger()

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS notes (
    key TEXT PRIMARY KEY,
    id INTEGER NOT NULL,
    name TEXT NOT NULL,
    publish_at TEXT NOT NULL,
    body TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS logs (
    note_key TEXT NOT NULL,
    title TEXT NOT NULL,
    url TEXT NOT NULL,
    round TEXT,
    hand INTEGER,
    homba INTEGER,
    riichi_stick INTEGER,
    east_name TEXT,
    south_name TEXT,
    west_name TEXT,
    north_name TEXT,
    east_start_point INTEGER,
    south_start_point INTEGER,
    west_start_point INTEGER,
    north_start_point INTEGER,
    east_get_point INTEGER,
    south_get_point INTEGER,
    west_get_point INTEGER,
    north_get_point INTEGER,
    end_of_a_hand TEXT,
    PRIMARY KEY (note_key, url)
);

CREATE TABLE IF NOT EXISTS games (
    note_key TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    east_name TEXT,
    south_name TEXT,
    west_name TEXT,
    north_name TEXT,
    east_point INTEGER,
    south_point INTEGER,
    west_point INTEGER,
    north_point INTEGER,
    first TEXT
);
"""


class SheetDatabase:
    """SQLite wrapper with schema management for the harvest tables."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the active connection or raise if disconnected."""
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database and create the schema."""
        parent = Path(self._path).parent
        parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self._path)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA busy_timeout=5000")
        self._conn.executescript(_SCHEMA_SQL)
        logger.debug("connected sheet database", path=self._path)

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
